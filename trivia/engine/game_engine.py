"""Game Engine - Maquina de estados de uma partida.

Estados: Active(pergunta i) -> Active(pergunta i+1) -> ... -> Completed.
Cada transicao e disparada por um request externo e roda sob o lock da
partida, entao respostas simultaneas sao serializadas.
"""

from __future__ import annotations

import logging
import random

from ..achievements import AchievementNotifier, LoggingNotifier, grant_safely
from ..config import ACHIEVEMENT_HARD_WORKER, ACHIEVEMENT_WINNER
from ..exceptions import (
    DuplicateAnswerError,
    GameInProgressError,
    NotFoundError,
    PermissionDeniedError,
    StaleQuestionError,
    ValidationError,
)
from ..models.entities import new_id
from ..models.enums import GameType, ScoringType
from ..models.schemas import AdvanceResult, AnswerResult, QuestionView, ScoreView
from ..models.state import GameState
from ..rendering import game_end_view, question_view, score_view, solution_view
from ..storage.quiz_store import QuizStore
from .answer_selector import select_answers
from .scoring_engine import GameScoringEngine

logger = logging.getLogger(__name__)


class GameEngine:
    """Motor de partidas de quiz.

    Example:
        >>> engine = GameEngine(store)
        >>> view = await engine.start("quiz-1", gm="user-1", game_type="solo",
        ...                           scoring_type="all", requested_count=0)
        >>> result = await engine.submit_answer(view.game_id, view.question_id,
        ...                                     "alice", "Paris")
    """

    def __init__(
        self,
        store: QuizStore,
        notifier: AchievementNotifier | None = None,
        scoring: GameScoringEngine | None = None,
        rng: random.Random | None = None,
    ):
        self.store = store
        self.notifier = notifier or LoggingNotifier()
        self.scoring = scoring or GameScoringEngine()
        self._rng = rng

    def _random(self) -> random.Random:
        return self._rng or random.Random()

    async def _load(self, game_id: str) -> GameState:
        game = await self.store.get_game(game_id)
        if game is None:
            raise NotFoundError("game not found", details={"game_id": game_id})
        return game

    @staticmethod
    def _ensure_current(game: GameState, question_id: str) -> None:
        current = game.current_question
        if current is None or current.id != question_id:
            raise StaleQuestionError(
                "this question has been already passed",
                details={"game_id": game.id, "question_id": question_id},
            )

    def _deal_choices(self, game: GameState) -> None:
        if game.is_multiple_choice:
            game.current_choices, game.correct_choice_index = select_answers(
                game.current_question, self._random()
            )

    # ---------- start ----------

    async def start(
        self,
        quiz_id: str,
        gm: str,
        game_type: str | GameType,
        scoring_type: str | ScoringType,
        requested_count: int = 0,
        game_id: str | None = None,
    ) -> QuestionView:
        """Inicia uma partida.

        O numero de perguntas e saturado em [1, perguntas validas]; valores
        <= 0 ou acima do total valido usam todas as perguntas validas.

        Args:
            quiz_id: Quiz a jogar
            gm: ID do usuario que inicia (GM)
            game_type: "solo" ou "party"
            scoring_type: "all" ou "first"
            requested_count: Numero de perguntas desejado
            game_id: ID do post ancora (gerado se vazio)

        Returns:
            View da primeira pergunta

        Raises:
            GameInProgressError: Ja existe partida ativa com esse game_id
        """
        try:
            game_type = GameType(game_type)
        except ValueError:
            raise ValidationError(
                "Unrecognized value", field_errors={"type": "Type not recognized"}
            ) from None
        try:
            scoring_type = ScoringType(scoring_type)
        except ValueError:
            raise ValidationError(
                "Unrecognized value", field_errors={"scoring": "Scoring type not recognized"}
            ) from None

        quiz = await self.store.get_quiz(quiz_id)
        if quiz is None:
            raise NotFoundError("quiz not found", details={"quiz_id": quiz_id})

        questions = quiz.valid_questions()
        if not questions:
            raise ValidationError(
                "the quiz has no valid questions", details={"quiz_id": quiz_id}
            )

        count = requested_count
        if count <= 0 or count > len(questions):
            count = len(questions)

        rng = self._random()
        rng.shuffle(questions)

        game = GameState(
            quiz=quiz.model_copy(deep=True),
            gm=gm,
            type=game_type,
            scoring_type=scoring_type,
            root_post_id=game_id or new_id(),
            remaining_questions=questions[:count],
            questions_total=count,
        )
        game.current_post_id = game.root_post_id
        self._deal_choices(game)

        async with self.store.lock(self.store.game_key(game.id)):
            if await self.store.get_game(game.id) is not None:
                raise GameInProgressError(
                    "a game is already running on this post", details={"game_id": game.id}
                )
            await self.store.save_game(game)

        logger.info(
            f"Partida iniciada: {game.id} (quiz={quiz_id}, tipo={game_type.value}, "
            f"pontuacao={scoring_type.value}, perguntas={count})"
        )
        return question_view(game)

    # ---------- respostas ----------

    def _is_correct(self, game: GameState, answer: int | str) -> bool:
        question = game.current_question
        if game.is_multiple_choice:
            try:
                index = int(answer)
            except (TypeError, ValueError):
                raise ValidationError(
                    "Missing some value", field_errors={"answer": "Could not get the answer"}
                ) from None
            if not 0 <= index < len(game.current_choices):
                raise ValidationError(
                    "Unrecognized value", field_errors={"answer": "Answer not recognized"}
                )
            return index == game.correct_choice_index

        text = str(answer).strip() if answer is not None else ""
        if not text:
            raise ValidationError(
                "Missing some value", field_errors={"answer": "Could not get the answer"}
            )
        return text == question.correct_answer

    async def submit_answer(
        self,
        game_id: str,
        question_id: str,
        username: str,
        answer: int | str,
        user_id: str | None = None,
    ) -> AnswerResult:
        """Registra a resposta de um jogador.

        Partidas party apenas atualizam o estado compartilhado; partidas solo
        avancam imediatamente para a proxima pergunta.

        Raises:
            NotFoundError: Partida inexistente
            StaleQuestionError: question_id nao e a pergunta atual
            DuplicateAnswerError: Usuario ja respondeu esta pergunta
            ValidationError: Resposta vazia ou alternativa invalida
        """
        async with self.store.lock(self.store.game_key(game_id)):
            game = await self._load(game_id)
            self._ensure_current(game, question_id)

            if username in game.already_answered:
                raise DuplicateAnswerError(
                    "you already tried to answer this question",
                    details={"game_id": game_id, "username": username},
                )

            correct = self._is_correct(game, answer)
            points = self.scoring.record_answer(game, username, correct)
            if user_id:
                game.players[username] = user_id

            message = "You are correct!" if correct else "Your answer is incorrect."

            if game.type == GameType.PARTY:
                await self.store.save_game(game)
                return AnswerResult(
                    correct=correct,
                    message=message,
                    points_earned=points,
                    question=question_view(game),
                )

            advance = await self._advance(game, acting_user_id=user_id or game.gm)
            return AnswerResult(
                correct=correct, message=message, points_earned=points, advance=advance
            )

    # ---------- avanco ----------

    async def next_question(
        self, game_id: str, question_id: str, acting_user_id: str
    ) -> AdvanceResult:
        """Avanca uma partida party. Apenas o GM pode usar este controle."""
        async with self.store.lock(self.store.game_key(game_id)):
            game = await self._load(game_id)
            if game.gm != acting_user_id:
                raise PermissionDeniedError(
                    "only the person who created the quiz can pass to the next question",
                    details={"game_id": game_id},
                )
            self._ensure_current(game, question_id)
            return await self._advance(game, acting_user_id=acting_user_id)

    async def advance(self, game_id: str, acting_user_id: str | None = None) -> AdvanceResult:
        """Avanca a partida, relida do store sob o lock da partida."""
        async with self.store.lock(self.store.game_key(game_id)):
            game = await self._load(game_id)
            return await self._advance(game, acting_user_id=acting_user_id or game.gm)

    async def _advance(self, game: GameState, acting_user_id: str) -> AdvanceResult:
        solution = solution_view(game)
        game.remaining_questions = game.remaining_questions[1:]

        if not game.remaining_questions:
            return AdvanceResult(solution=solution, end=await self._complete(game, acting_user_id))

        game.reset_question_state()
        self._deal_choices(game)
        await self.store.save_game(game)
        return AdvanceResult(solution=solution, question=question_view(game))

    async def _complete(self, game: GameState, acting_user_id: str):
        """Unico ponto de conclusao: conquistas e remocao da partida."""
        end = game_end_view(game)
        await self.store.delete_game(game.id)
        logger.info(f"Partida concluida: {game.id} ({game.type.value})")

        if game.type == GameType.SOLO:
            await grant_safely(self.notifier, ACHIEVEMENT_HARD_WORKER, acting_user_id)
        elif end.winner is not None:
            winner_id = game.players.get(end.winner)
            if winner_id:
                await grant_safely(self.notifier, ACHIEVEMENT_WINNER, winner_id)
            else:
                logger.debug(f"Vencedor sem user ID conhecido: {end.winner}")
        return end

    # ---------- consultas ----------

    async def get_game(self, game_id: str) -> GameState:
        return await self._load(game_id)

    async def get_scores(self, game_id: str) -> ScoreView:
        return score_view(await self._load(game_id))

    async def current_question(self, game_id: str) -> QuestionView:
        return question_view(await self._load(game_id))

    async def bind_post(self, game_id: str, post_id: str) -> GameState:
        """Registra o post que exibe a pergunta atual."""
        async with self.store.lock(self.store.game_key(game_id)):
            game = await self._load(game_id)
            game.current_post_id = post_id
            await self.store.save_game(game)
            return game
