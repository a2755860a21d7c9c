"""Trivia Models - Enums, Entidades, Schemas e GameState."""

from .entities import Course, Lesson, Question, Quiz, Resource, new_id
from .enums import GameType, QuizType, ResourceType, ScoringType
from .schemas import (
    AdvanceResult,
    AnswerResult,
    CourseView,
    GameEndView,
    LessonView,
    QuestionView,
    QuizView,
    ScoreRow,
    ScoreView,
    SolutionView,
)
from .state import GameState

__all__ = [
    # Enums
    "QuizType",
    "GameType",
    "ScoringType",
    "ResourceType",
    # Entities
    "Question",
    "Quiz",
    "Resource",
    "Lesson",
    "Course",
    "new_id",
    # Views
    "QuizView",
    "CourseView",
    "LessonView",
    "QuestionView",
    "SolutionView",
    "ScoreRow",
    "ScoreView",
    "GameEndView",
    "AdvanceResult",
    "AnswerResult",
    # State
    "GameState",
]
