"""Trivia Exceptions - Taxonomia de erros do motor de quiz.

Cada erro carrega um ``kind`` verificavel por maquina, uma mensagem
exibivel ao usuario e ``details`` opcionais. O transporte decide como
apresentar cada tipo (ver ``trivia.router``).
"""

from typing import Any


class QuizError(Exception):
    """Erro base do motor de quiz."""

    kind = "error"
    status_code = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message, "details": self.details}


class ValidationError(QuizError):
    """Entrada ausente ou malformada (corrigivel pelo usuario).

    ``field_errors`` mapeia nome do campo -> mensagem, para o transporte
    ecoar o erro no campo correspondente do formulario.
    """

    kind = "validation"
    status_code = 422

    def __init__(
        self,
        message: str,
        field_errors: dict[str, str] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.field_errors = field_errors or {}

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["field_errors"] = self.field_errors
        return data


class NotFoundError(QuizError):
    """ID desconhecido ou indice obsoleto."""

    kind = "not_found"
    status_code = 404


class StaleQuestionError(QuizError):
    """Resposta para uma pergunta que a sessao ja passou."""

    kind = "stale_question"
    status_code = 409


class DuplicateAnswerError(QuizError):
    """Usuario ja respondeu a pergunta atual."""

    kind = "duplicate_answer"
    status_code = 409


class GameInProgressError(QuizError):
    """Ja existe uma partida ativa com o mesmo ID."""

    kind = "game_in_progress"
    status_code = 409


class PermissionDeniedError(QuizError):
    """Acao reservada ao GM da partida."""

    kind = "forbidden"
    status_code = 403


class PersistenceError(QuizError):
    """Falha do KV store. Nao e corrigivel pelo usuario."""

    kind = "persistence"
    status_code = 500

    def to_dict(self) -> dict[str, Any]:
        # Detalhes ficam apenas no log
        return {"kind": self.kind, "message": "Erro interno de armazenamento", "details": {}}
