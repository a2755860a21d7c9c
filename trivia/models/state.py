"""Game State - Estado de uma partida em andamento."""

from dataclasses import dataclass, field
from typing import Any

from .entities import Question, Quiz
from .enums import GameType, QuizType, ScoringType


@dataclass
class GameState:
    """Estado completo de uma partida.

    A partida guarda uma copia do quiz no momento do inicio; edicoes no
    quiz original nao afetam partidas em andamento.

    Attributes:
        quiz: Snapshot do quiz
        gm: ID do usuario que iniciou a partida
        score: Pontuacao por username
        remaining_questions: Perguntas restantes (a cabeca e a pergunta atual)
        root_post_id: ID do post ancora (chave da partida)
        current_post_id: Post que exibe a pergunta atual
        type: Solo ou party
        scoring_type: Regra de pontuacao
        already_answered: Usernames que ja responderam a pergunta atual
        questions_total: Numero de perguntas selecionadas no inicio
        current_choices: Alternativas embaralhadas (multipla escolha)
        correct_choice_index: Posicao da resposta correta em current_choices
        right_answerers: Usernames que acertaram a pergunta atual, em ordem
        players: Username -> user ID, registrado a cada resposta
    """

    quiz: Quiz
    gm: str
    type: GameType
    scoring_type: ScoringType
    root_post_id: str
    current_post_id: str = ""
    score: dict[str, int] = field(default_factory=dict)
    remaining_questions: list[Question] = field(default_factory=list)
    already_answered: set[str] = field(default_factory=set)
    questions_total: int = 0
    current_choices: list[str] = field(default_factory=list)
    correct_choice_index: int = -1
    right_answerers: list[str] = field(default_factory=list)
    players: dict[str, str] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.root_post_id

    @property
    def is_multiple_choice(self) -> bool:
        return self.quiz.type == QuizType.MULTIPLE_CHOICE

    @property
    def current_question(self) -> Question | None:
        return self.remaining_questions[0] if self.remaining_questions else None

    @property
    def current_number(self) -> int:
        """Numero (1-N) da pergunta atual."""
        return self.questions_total - len(self.remaining_questions) + 1

    def reset_question_state(self) -> None:
        """Limpa o estado por pergunta numa transicao."""
        self.already_answered = set()
        self.right_answerers = []
        self.current_choices = []
        self.correct_choice_index = -1

    def add_points(self, username: str, points: int) -> None:
        self.score[username] = self.score.get(username, 0) + points

    def to_dict(self) -> dict[str, Any]:
        """Converte para dicionario (para persistencia)."""
        return {
            "quiz": self.quiz.model_dump(mode="json"),
            "gm": self.gm,
            "type": self.type.value,
            "scoring_type": self.scoring_type.value,
            "root_post_id": self.root_post_id,
            "current_post_id": self.current_post_id,
            "score": dict(self.score),
            "remaining_questions": [q.model_dump(mode="json") for q in self.remaining_questions],
            "already_answered": sorted(self.already_answered),
            "questions_total": self.questions_total,
            "current_choices": list(self.current_choices),
            "correct_choice_index": self.correct_choice_index,
            "right_answerers": list(self.right_answerers),
            "players": dict(self.players),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameState":
        """Cria instancia a partir de dicionario."""
        return cls(
            quiz=Quiz.model_validate(data["quiz"]),
            gm=data["gm"],
            type=GameType(data["type"]),
            scoring_type=ScoringType(data["scoring_type"]),
            root_post_id=data["root_post_id"],
            current_post_id=data.get("current_post_id", ""),
            score=dict(data.get("score", {})),
            remaining_questions=[
                Question.model_validate(q) for q in data.get("remaining_questions", [])
            ],
            already_answered=set(data.get("already_answered", [])),
            questions_total=data.get("questions_total", 0),
            current_choices=list(data.get("current_choices", [])),
            correct_choice_index=data.get("correct_choice_index", -1),
            right_answerers=list(data.get("right_answerers", [])),
            players=dict(data.get("players", {})),
        )
