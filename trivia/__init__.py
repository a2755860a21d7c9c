"""Trivia - Quizzes, cursos e partidas para plataformas de chat.

Arquitetura:
- models/: Enums, Entidades Pydantic, Views, GameState
- engine/: Autoria (quiz/curso), GameEngine, GameScoringEngine
- storage/: KV backends e QuizStore
- rendering.py: Views derivadas do estado
- achievements.py: Conquistas (servico de badges)
- router.py: FastAPI endpoints
"""

from .engine import CourseAuthoringEngine, GameEngine, GameScoringEngine, QuizAuthoringEngine
from .models import Course, GameState, GameType, Quiz, QuizType, ScoringType
from .storage import MemoryKV, QuizStore

__all__ = [
    # Models
    "QuizType",
    "GameType",
    "ScoringType",
    "Quiz",
    "Course",
    "GameState",
    # Engines
    "QuizAuthoringEngine",
    "CourseAuthoringEngine",
    "GameEngine",
    "GameScoringEngine",
    # Storage
    "QuizStore",
    "MemoryKV",
]
