"""Answer Selector - Alternativas embaralhadas para multipla escolha."""

import random

from ..config import INCORRECT_ANSWER_COUNT
from ..exceptions import ValidationError
from ..models.entities import Question


def select_answers(question: Question, rng: random.Random | None = None) -> tuple[list[str], int]:
    """Monta as alternativas de uma pergunta de multipla escolha.

    Usa as primeiras ``INCORRECT_ANSWER_COUNT`` respostas incorretas mais a
    correta, numa permutacao uniforme nova a cada chamada.

    Args:
        question: Pergunta valida para multipla escolha
        rng: Gerador opcional; por padrao um ``random.Random()`` novo,
            semeado pela entropia do sistema

    Returns:
        Tuple de (alternativas, indice da resposta correta)
    """
    if len(question.incorrect_answers) < INCORRECT_ANSWER_COUNT:
        raise ValidationError(
            f"A pergunta precisa de {INCORRECT_ANSWER_COUNT} respostas incorretas",
            details={"question_id": question.id},
        )

    rng = rng or random.Random()

    choices = list(question.incorrect_answers[:INCORRECT_ANSWER_COUNT])
    choices.append(question.correct_answer)
    order = list(range(len(choices)))
    rng.shuffle(order)

    shuffled = [choices[i] for i in order]
    correct_index = order.index(INCORRECT_ANSWER_COUNT)
    return shuffled, correct_index
