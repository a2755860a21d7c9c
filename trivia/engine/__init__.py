"""Trivia Engines - Logica de negocios."""

from .scoring_engine import GameScoringEngine
from .answer_selector import select_answers
from .authoring import CourseAuthoringEngine, QuizAuthoringEngine
from .game_engine import GameEngine

__all__ = [
    "GameScoringEngine",
    "select_answers",
    "QuizAuthoringEngine",
    "CourseAuthoringEngine",
    "GameEngine",
]
