"""Rendering - Payloads derivados do estado dos agregados.

Cada view descreve o resumo do agregado e as acoes disponiveis; o
transporte de chat monta os widgets a partir delas.
"""

from .engine.scoring_engine import GameScoringEngine
from .models.entities import Course, Quiz
from .models.enums import GameType
from .models.schemas import (
    CatalogEntry,
    CourseView,
    GameEndView,
    LessonSummary,
    LessonView,
    QuestionSummary,
    QuestionView,
    QuizView,
    ResourceView,
    ScoreView,
    SolutionView,
)
from .models.state import GameState

_scoring = GameScoringEngine()


# =============================================================================
# AUTORIA
# =============================================================================


def quiz_view(quiz: Quiz) -> QuizView:
    """Resumo do rascunho de quiz.

    As acoes seguem a ordem de criacao: nome, tipo, perguntas, publicacao.
    """
    actions = ["set_name"]
    if quiz.name:
        actions.append("set_type")
        if quiz.type is not None:
            actions.append("add_question")
            if quiz.questions:
                actions += ["review_questions", "remove_questions", "publish"]
    actions.append("discard")

    return QuizView(
        id=quiz.id,
        name=quiz.name,
        type=quiz.type.value if quiz.type else None,
        complete=quiz.is_complete,
        question_count=len(quiz.questions),
        valid_question_count=quiz.valid_question_count(),
        questions=[
            QuestionSummary(
                id=q.id,
                text=q.text,
                correct_answer=q.correct_answer,
                incorrect_answers=list(q.incorrect_answers),
                valid=q.is_valid_for(quiz.type),
            )
            for q in quiz.questions
        ],
        actions=actions,
    )


def course_view(course: Course) -> CourseView:
    actions = ["set_name"]
    if course.name:
        actions.append("set_description")
        if course.description:
            actions.append("add_lesson")
            if course.lessons:
                actions += ["edit_lesson", "publish"]
    actions.append("discard")

    return CourseView(
        id=course.id,
        name=course.name,
        description=course.description,
        complete=course.is_complete,
        lessons=[
            LessonSummary(index=i, name=lesson.name, resource_count=len(lesson.resources))
            for i, lesson in enumerate(course.lessons)
        ],
        actions=actions,
    )


def lesson_view(course: Course, index: int) -> LessonView:
    lesson = course.lessons[index]
    actions = ["set_name", "set_introduction", "add_resource", "add_quiz_resource"]
    if lesson.resources:
        actions.append("remove_resources")
    actions += ["delete_lesson", "back"]

    return LessonView(
        course_id=course.id,
        index=index,
        name=lesson.name,
        introduction=lesson.introduction,
        resources=[
            ResourceView(
                index=i,
                name=r.name,
                type=r.type.value,
                content=r.content,
                pretext=r.pretext,
            )
            for i, r in enumerate(lesson.resources)
        ],
        actions=actions,
    )


def catalog_entries(items: list[Quiz] | list[Course]) -> list[CatalogEntry]:
    return [CatalogEntry(id=item.id, name=item.name) for item in items]


# =============================================================================
# PARTIDA
# =============================================================================


def question_view(game: GameState) -> QuestionView:
    """Pergunta atual (cabeca de remaining_questions)."""
    question = game.current_question
    actions = ["select_answer" if game.is_multiple_choice else "answer", "score"]
    if game.type == GameType.PARTY:
        actions.append("next")

    return QuestionView(
        game_id=game.id,
        quiz_name=game.quiz.name,
        question_id=question.id,
        text=question.text,
        number=game.current_number,
        total=game.questions_total,
        choices=list(game.current_choices) if game.is_multiple_choice else [],
        answered_count=len(game.already_answered) if game.type == GameType.PARTY else None,
        actions=actions,
    )


def solution_view(game: GameState) -> SolutionView:
    """Solucao da pergunta atual, exibida antes de avancar."""
    question = game.current_question
    return SolutionView(
        game_id=game.id,
        question_id=question.id,
        text=question.text,
        number=game.current_number,
        total=game.questions_total,
        correct_answer=question.correct_answer,
        right_answerers=list(game.right_answerers) if game.type == GameType.PARTY else None,
    )


def score_view(game: GameState) -> ScoreView:
    return ScoreView(game_id=game.id, type=game.type.value, rows=_scoring.score_rows(game))


def game_end_view(game: GameState) -> GameEndView:
    return GameEndView(
        game_id=game.id,
        quiz_name=game.quiz.name,
        scores=score_view(game),
        winner=_scoring.winner(game),
    )
