"""Core module - shared state and helper functions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from trivia.achievements import AchievementNotifier, BadgesClient, LoggingNotifier
from trivia.config import QuizConfig
from trivia.engine import CourseAuthoringEngine, GameEngine, QuizAuthoringEngine
from trivia.logger import get_logger
from trivia.storage import AgentFSKV, KVBackend, MemoryKV, QuizStore

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

logger = get_logger("app_state")

# =============================================================================
# GLOBAL STATE
# =============================================================================

config: QuizConfig = QuizConfig()
agentfs: Optional[AgentFS] = None
store: Optional[QuizStore] = None
notifier: Optional[AchievementNotifier] = None

quiz_engine: Optional[QuizAuthoringEngine] = None
course_engine: Optional[CourseAuthoringEngine] = None
game_engine: Optional[GameEngine] = None


async def _open_kv(cfg: QuizConfig) -> KVBackend:
    global agentfs

    if cfg.kv_backend == "agentfs":
        from agentfs_sdk import AgentFS, AgentFSOptions

        agentfs = await AgentFS.open(AgentFSOptions(id=cfg.agentfs_id))
        logger.info(f"KV store: AgentFS ({cfg.agentfs_id})")
        return AgentFSKV(agentfs)

    logger.info("KV store: memoria")
    return MemoryKV()


async def init(cfg: Optional[QuizConfig] = None, kv: Optional[KVBackend] = None) -> None:
    """Inicializa store, notifier e engines.

    Args:
        cfg: Configuracao (padrao: ``QuizConfig.from_env()``)
        kv: Backend KV ja aberto (testes); ignora ``cfg.kv_backend``
    """
    global config, store, notifier, quiz_engine, course_engine, game_engine

    config = cfg or QuizConfig.from_env()
    store = QuizStore(kv or await _open_kv(config))

    if config.badges_url:
        badges = BadgesClient(
            config.badges_url, bot_id=config.bot_user_id, timeout=config.badges_timeout
        )
        await badges.ensure_badges()
        notifier = badges
    else:
        notifier = LoggingNotifier()

    quiz_engine = QuizAuthoringEngine(store, notifier)
    course_engine = CourseAuthoringEngine(store)
    game_engine = GameEngine(store, notifier)


def _require(value, name: str):
    if value is None:
        raise RuntimeError(f"{name} nao inicializado (chame app_state.init())")
    return value


def get_store() -> QuizStore:
    return _require(store, "QuizStore")


def get_quiz_engine() -> QuizAuthoringEngine:
    return _require(quiz_engine, "QuizAuthoringEngine")


def get_course_engine() -> CourseAuthoringEngine:
    return _require(course_engine, "CourseAuthoringEngine")


def get_game_engine() -> GameEngine:
    return _require(game_engine, "GameEngine")


async def cleanup():
    """Cleanup resources on shutdown."""
    global agentfs, store, notifier, quiz_engine, course_engine, game_engine

    if isinstance(notifier, BadgesClient):
        await notifier.close()

    if agentfs is not None:
        try:
            await agentfs.close()
            logger.info("AgentFS closed")
        except Exception as e:
            logger.warning(f"Error closing agentfs: {e}")
        agentfs = None

    store = notifier = None
    quiz_engine = course_engine = game_engine = None
