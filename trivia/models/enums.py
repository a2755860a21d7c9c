"""Trivia Enums - Tipos de quiz, partida, pontuacao e recurso."""

from enum import Enum


class QuizType(str, Enum):
    """Formato das perguntas do quiz."""

    SINGLE_ANSWER = "single-answer"  # Resposta livre em texto
    MULTIPLE_CHOICE = "multiple-choice"  # Botoes com alternativas embaralhadas


class GameType(str, Enum):
    """Modo da partida."""

    SOLO = "solo"  # Um jogador, avanca a cada resposta
    PARTY = "party"  # Canal inteiro, GM controla o avanco


class ScoringType(str, Enum):
    """Regra de pontuacao."""

    ALL = "all"  # +1 por resposta correta
    FIRST = "first"  # +1 por resposta correta, +2 para a primeira resposta se correta


class ResourceType(str, Enum):
    """Tipo de recurso de uma licao."""

    TEXT = "text"
    LINK = "link"
    VIDEO = "video"
    QUIZ = "quiz"  # content = ID de um quiz
