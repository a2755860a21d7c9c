# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Centraliza mocks, fixtures e configurações comuns
# =============================================================================

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Configura ambiente de testes globalmente."""
    env_vars = {
        "AUTH_ENABLED": "true",
        "QUIZ_KV_BACKEND": "memory",
        "QUIZ_BADGES_URL": "",
        "LOG_LEVEL": "ERROR",  # Reduzir logs em testes
    }
    with patch.dict(os.environ, env_vars):
        yield


@pytest.fixture
def clean_env():
    """Limpa variáveis de ambiente para testes isolados."""
    with patch.dict(os.environ, {}, clear=True):
        yield


# =============================================================================
# FIXTURES DO FASTAPI
# =============================================================================


@pytest.fixture
def client():
    """Cliente de teste FastAPI (lifespan ativo, KV em memória novo)."""
    from fastapi.testclient import TestClient
    from server import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def gm_headers():
    return {"X-User-ID": "user-gm", "X-Username": "gm"}


@pytest.fixture
def player_headers():
    return {"X-User-ID": "user-alice", "X-Username": "alice"}


# =============================================================================
# FIXTURES DO AGENTFS
# =============================================================================


@pytest.fixture
def mock_agentfs():
    """Mock do AgentFS (KV vazio)."""
    mock = MagicMock()

    mock.kv = AsyncMock()
    mock.kv.get = AsyncMock(return_value=None)
    mock.kv.set = AsyncMock()
    mock.kv.delete = AsyncMock()

    mock.close = AsyncMock()

    return mock


@pytest.fixture
def mock_agentfs_with_data():
    """Mock do AgentFS com armazenamento em dicionário."""
    mock = MagicMock()
    _storage = {}

    async def mock_get(key):
        return _storage.get(key)

    async def mock_set(key, value):
        _storage[key] = value

    async def mock_delete(key):
        _storage.pop(key, None)

    mock.kv = AsyncMock()
    mock.kv.get = mock_get
    mock.kv.set = mock_set
    mock.kv.delete = mock_delete
    mock._storage = _storage

    mock.close = AsyncMock()

    return mock


# =============================================================================
# FIXTURES DO STORE E ENGINES
# =============================================================================


class RecordingNotifier:
    """Notifier que guarda as conquistas concedidas."""

    def __init__(self):
        self.granted = []

    async def grant(self, name, user_id):
        self.granted.append((name, user_id))


@pytest.fixture
def memory_kv():
    from trivia.storage.kv import MemoryKV

    return MemoryKV()


@pytest.fixture
def store(memory_kv):
    from trivia.storage.quiz_store import QuizStore

    return QuizStore(memory_kv)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def quiz_engine(store, notifier):
    from trivia.engine.authoring import QuizAuthoringEngine

    return QuizAuthoringEngine(store, notifier)


@pytest.fixture
def course_engine(store):
    from trivia.engine.authoring import CourseAuthoringEngine

    return CourseAuthoringEngine(store)


@pytest.fixture
def game_engine(store, notifier):
    from trivia.engine.game_engine import GameEngine

    return GameEngine(store, notifier)


# =============================================================================
# FIXTURES DO QUIZ
# =============================================================================


@pytest.fixture
def single_answer_quiz():
    """Quiz de resposta única com 3 perguntas."""
    from trivia.models.entities import Question, Quiz
    from trivia.models.enums import QuizType

    return Quiz(
        id="quiz-capitais",
        name="Capitais",
        type=QuizType.SINGLE_ANSWER,
        questions=[
            Question(id="q1", text="Capital da França?", correct_answer="Paris"),
            Question(id="q2", text="Capital da Itália?", correct_answer="Roma"),
            Question(id="q3", text="Capital do Japão?", correct_answer="Tóquio"),
        ],
    )


@pytest.fixture
def multiple_choice_quiz():
    """Quiz de múltipla escolha: 2 perguntas válidas e 1 inválida."""
    from trivia.models.entities import Question, Quiz
    from trivia.models.enums import QuizType

    return Quiz(
        id="quiz-mc",
        name="Planetas",
        type=QuizType.MULTIPLE_CHOICE,
        questions=[
            Question(
                id="m1",
                text="Maior planeta?",
                correct_answer="Júpiter",
                incorrect_answers=["Marte", "Vênus", "Terra"],
            ),
            Question(
                id="m2",
                text="Planeta vermelho?",
                correct_answer="Marte",
                incorrect_answers=["Júpiter", "Saturno", "Netuno", "Urano"],
            ),
            Question(
                id="m3",
                text="Planeta anão?",
                correct_answer="Plutão",
                incorrect_answers=["Marte"],
            ),
        ],
    )


@pytest.fixture
def one_question_quiz():
    """Quiz de resposta única com uma única pergunta."""
    from trivia.models.entities import Question, Quiz
    from trivia.models.enums import QuizType

    return Quiz(
        id="quiz-um",
        name="Rápido",
        type=QuizType.SINGLE_ANSWER,
        questions=[Question(id="q1", text="2 + 2?", correct_answer="4")],
    )


# =============================================================================
# FIXTURES DE LOGGING
# =============================================================================


@pytest.fixture
def capture_logs(caplog):
    """Captura logs para verificação em testes."""
    import logging

    caplog.set_level(logging.DEBUG)
    return caplog
