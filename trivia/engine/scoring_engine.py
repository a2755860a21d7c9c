"""Game Scoring Engine - Motor de pontuacao e placar."""

from ..config import FIRST_ANSWER_BONUS
from ..models.enums import GameType, ScoringType
from ..models.schemas import ScoreRow
from ..models.state import GameState


class GameScoringEngine:
    """Motor de pontuação das partidas.

    Pontuação por resposta:
        - Correta: 1 ponto
        - Modo "first": +2 pontos se for a primeira resposta da pergunta
          e estiver correta (bônus de velocidade, somado ao ponto normal)
        - Incorreta: 0 pontos

    Example:
        >>> engine = GameScoringEngine()
        >>> engine.record_answer(game, "alice", correct=True)
        3  # primeira resposta em modo "first"
    """

    CORRECT_POINTS = 1
    FIRST_BONUS = FIRST_ANSWER_BONUS

    def points_for(self, scoring_type: ScoringType, correct: bool, is_first: bool) -> int:
        """Calcula pontos de uma resposta.

        Args:
            scoring_type: Regra de pontuação da partida
            correct: Se a resposta está correta
            is_first: Se é a primeira resposta recebida para a pergunta

        Returns:
            Pontos ganhos (0, 1 ou 3)
        """
        if not correct:
            return 0
        points = self.CORRECT_POINTS
        if scoring_type == ScoringType.FIRST and is_first:
            points += self.FIRST_BONUS
        return points

    def record_answer(self, game: GameState, username: str, correct: bool) -> int:
        """Marca o usuário como respondido e aplica a pontuação.

        Returns:
            Pontos ganhos nesta resposta
        """
        game.already_answered.add(username)
        is_first = len(game.already_answered) == 1

        points = self.points_for(game.scoring_type, correct, is_first)
        if correct:
            game.add_points(username, points)
            game.right_answerers.append(username)
        return points

    def score_rows(self, game: GameState) -> list[ScoreRow]:
        """Placar em ordem decrescente.

        Empates mantêm a ordem de inserção no placar.
        """
        rows = sorted(game.score.items(), key=lambda item: -item[1])
        return [ScoreRow(username=name, score=score) for name, score in rows]

    def winner(self, game: GameState) -> str | None:
        """Username do vencedor de uma partida party (None se ninguém pontuou)."""
        if game.type != GameType.PARTY:
            return None
        rows = self.score_rows(game)
        return rows[0].username if rows else None

    def solo_score(self, game: GameState) -> int:
        return next(iter(game.score.values()), 0)
