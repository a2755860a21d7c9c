"""Trivia Config - Constantes de dominio e configuracao via ambiente."""

import os
from dataclasses import dataclass, field

# =============================================================================
# CONSTANTES DE DOMINIO
# =============================================================================

# Minimo de respostas incorretas para uma pergunta de multipla escolha valida
INCORRECT_ANSWER_COUNT = 3

# Bonus para a primeira resposta correta no modo de pontuacao "first"
FIRST_ANSWER_BONUS = 2

# Prefixos e listas do KV store
KV_QUIZ_PREFIX = "quiz_"
KV_QUIZ_LIST = "quizList"
KV_GAME_PREFIX = "game_"
KV_COURSE_PREFIX = "course_"
KV_COURSE_LIST = "courseList"

# Conquistas (badges)
ACHIEVEMENT_CONTENT_CREATOR = "Content creator"
ACHIEVEMENT_WINNER = "Winner"
ACHIEVEMENT_HARD_WORKER = "Hard worker"

ACHIEVEMENT_DESCRIPTIONS = {
    ACHIEVEMENT_CONTENT_CREATOR: "Create a quiz",
    ACHIEVEMENT_WINNER: "Get the highest score in a party game",
    ACHIEVEMENT_HARD_WORKER: "Finish a solo game",
}

KV_BACKENDS = ("memory", "agentfs")


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class QuizConfig:
    """Configuracao do servico de quiz.

    Attributes:
        kv_backend: Backend do KV store ("memory" ou "agentfs")
        agentfs_id: ID do AgentFS quando kv_backend == "agentfs"
        badges_url: URL do servico de badges (vazio = apenas log)
        bot_user_id: Usuario bot que concede as conquistas
        badges_timeout: Timeout (s) das chamadas ao servico de badges
        log_level: Nivel de log
        cors_origins: Origens permitidas pelo CORS
        auth_enabled: Exige headers de usuario nas rotas
    """

    kv_backend: str = "memory"
    agentfs_id: str = "trivia"
    badges_url: str = ""
    bot_user_id: str = "quiz"
    badges_timeout: float = 5.0
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    auth_enabled: bool = True

    @classmethod
    def from_env(cls) -> "QuizConfig":
        """Cria configuracao a partir de variaveis de ambiente."""
        backend = os.getenv("QUIZ_KV_BACKEND", "memory").strip().lower()
        if backend not in KV_BACKENDS:
            raise ValueError(
                f"QUIZ_KV_BACKEND invalido: {backend!r} (esperado: {', '.join(KV_BACKENDS)})"
            )

        origins = os.getenv("CORS_ORIGINS", "*")

        return cls(
            kv_backend=backend,
            agentfs_id=os.getenv("QUIZ_AGENTFS_ID", "trivia"),
            badges_url=os.getenv("QUIZ_BADGES_URL", "").rstrip("/"),
            bot_user_id=os.getenv("QUIZ_BOT_USER_ID", "quiz"),
            badges_timeout=float(os.getenv("QUIZ_BADGES_TIMEOUT", "5.0")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
            auth_enabled=_get_bool("AUTH_ENABLED", True),
        )
