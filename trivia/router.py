"""Trivia Router - Endpoints FastAPI de autoria e partidas.

O usuario que age e lido dos headers ``X-User-ID`` / ``X-Username``,
preenchidos pelo transporte de chat.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

import app_state

from .engine.authoring import CourseAuthoringEngine, QuizAuthoringEngine
from .engine.game_engine import GameEngine
from .exceptions import QuizError
from .logger import get_logger
from .models.schemas import (
    AddLessonRequest,
    AddQuestionRequest,
    AddQuizResourceRequest,
    AddResourceRequest,
    AdvanceResult,
    AnswerResult,
    BindPostRequest,
    CatalogEntry,
    CourseView,
    CreateCourseRequest,
    CreateQuizRequest,
    LessonView,
    NextQuestionRequest,
    QuestionView,
    QuizView,
    RemoveQuestionsRequest,
    RemoveResourcesRequest,
    ScoreView,
    SetDescriptionRequest,
    SetIntroductionRequest,
    SetNameRequest,
    SetQuizTypeRequest,
    StartGameRequest,
    SubmitAnswerRequest,
)
from .rendering import catalog_entries, course_view, lesson_view, quiz_view

logger = get_logger("router")

quiz_router = APIRouter(prefix="/quiz", tags=["Quiz"])
course_router = APIRouter(prefix="/course", tags=["Course"])
game_router = APIRouter(prefix="/game", tags=["Game"])


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


class CurrentUser(BaseModel):
    user_id: str
    username: str


async def get_current_user(
    x_user_id: str | None = Header(None),
    x_username: str | None = Header(None),
) -> CurrentUser:
    """Usuario que age na requisicao (401 se ausente)."""
    if not x_user_id:
        if app_state.config.auth_enabled:
            raise HTTPException(status_code=401, detail="Not authorized")
        return CurrentUser(user_id="anonymous", username=x_username or "anonymous")
    return CurrentUser(user_id=x_user_id, username=x_username or x_user_id)


async def get_quiz_engine() -> QuizAuthoringEngine:
    return app_state.get_quiz_engine()


async def get_course_engine() -> CourseAuthoringEngine:
    return app_state.get_course_engine()


async def get_game_engine() -> GameEngine:
    return app_state.get_game_engine()


# =============================================================================
# ERROS
# =============================================================================


def register_exception_handlers(app: FastAPI) -> None:
    """Mapeia QuizError para status HTTP e isola falhas inesperadas."""

    @app.exception_handler(QuizError)
    async def quiz_error_handler(request: Request, exc: QuizError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Erro inesperado em {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"kind": "internal", "message": "Erro interno", "details": {}},
        )


# =============================================================================
# QUIZ
# =============================================================================


@quiz_router.post("", response_model=QuizView)
async def create_quiz(
    request: CreateQuizRequest,
    engine: QuizAuthoringEngine = Depends(get_quiz_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    """Cria um rascunho de quiz (ou retorna o existente com o mesmo ID)."""
    return quiz_view(await engine.create(request.quiz_id))


@quiz_router.get("", response_model=list[CatalogEntry])
async def list_quizzes(
    engine: QuizAuthoringEngine = Depends(get_quiz_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    """Lista os quizzes publicados."""
    return catalog_entries(await engine.list_available())


@quiz_router.get("/{quiz_id}", response_model=QuizView)
async def get_quiz(
    quiz_id: str,
    engine: QuizAuthoringEngine = Depends(get_quiz_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return quiz_view(await engine.get(quiz_id))


@quiz_router.put("/{quiz_id}/name", response_model=QuizView)
async def set_quiz_name(
    quiz_id: str,
    request: SetNameRequest,
    engine: QuizAuthoringEngine = Depends(get_quiz_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return quiz_view(await engine.set_name(quiz_id, request.name))


@quiz_router.put("/{quiz_id}/type", response_model=QuizView)
async def set_quiz_type(
    quiz_id: str,
    request: SetQuizTypeRequest,
    engine: QuizAuthoringEngine = Depends(get_quiz_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return quiz_view(await engine.set_type(quiz_id, request.type))


@quiz_router.post("/{quiz_id}/questions", response_model=QuizView)
async def add_question(
    quiz_id: str,
    request: AddQuestionRequest,
    engine: QuizAuthoringEngine = Depends(get_quiz_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    quiz = await engine.add_question(
        quiz_id, request.text, request.correct_answer, request.incorrect_answers
    )
    return quiz_view(quiz)


@quiz_router.post("/{quiz_id}/questions/remove", response_model=QuizView)
async def remove_questions(
    quiz_id: str,
    request: RemoveQuestionsRequest,
    engine: QuizAuthoringEngine = Depends(get_quiz_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return quiz_view(await engine.remove_questions(quiz_id, request.question_ids))


@quiz_router.post("/{quiz_id}/publish", response_model=QuizView)
async def publish_quiz(
    quiz_id: str,
    engine: QuizAuthoringEngine = Depends(get_quiz_engine),
    user: CurrentUser = Depends(get_current_user),
):
    """Publica o quiz e concede "Content creator" ao autor."""
    return quiz_view(await engine.publish(quiz_id, acting_user_id=user.user_id))


@quiz_router.delete("/{quiz_id}")
async def discard_quiz(
    quiz_id: str,
    engine: QuizAuthoringEngine = Depends(get_quiz_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    await engine.discard(quiz_id)
    return {"status": "discarded", "id": quiz_id}


# =============================================================================
# COURSE
# =============================================================================


@course_router.post("", response_model=CourseView)
async def create_course(
    request: CreateCourseRequest,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return course_view(await engine.create(request.course_id))


@course_router.get("", response_model=list[CatalogEntry])
async def list_courses(
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return catalog_entries(await engine.list_available())


@course_router.get("/{course_id}", response_model=CourseView)
async def get_course(
    course_id: str,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return course_view(await engine.get(course_id))


@course_router.put("/{course_id}/name", response_model=CourseView)
async def set_course_name(
    course_id: str,
    request: SetNameRequest,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return course_view(await engine.set_name(course_id, request.name))


@course_router.put("/{course_id}/description", response_model=CourseView)
async def set_course_description(
    course_id: str,
    request: SetDescriptionRequest,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return course_view(await engine.set_description(course_id, request.description))


@course_router.post("/{course_id}/lessons", response_model=CourseView)
async def add_lesson(
    course_id: str,
    request: AddLessonRequest,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return course_view(await engine.add_lesson(course_id, request.name, request.introduction))


@course_router.get("/{course_id}/lessons/{index}", response_model=LessonView)
async def get_lesson(
    course_id: str,
    index: int,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    """Seleciona a licao para edicao."""
    return lesson_view(await engine.get_lesson(course_id, index), index)


@course_router.put("/{course_id}/lessons/{index}/name", response_model=LessonView)
async def set_lesson_name(
    course_id: str,
    index: int,
    request: SetNameRequest,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return lesson_view(await engine.edit_lesson_name(course_id, index, request.name), index)


@course_router.put("/{course_id}/lessons/{index}/introduction", response_model=LessonView)
async def set_lesson_introduction(
    course_id: str,
    index: int,
    request: SetIntroductionRequest,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    course = await engine.edit_lesson_introduction(course_id, index, request.introduction)
    return lesson_view(course, index)


@course_router.delete("/{course_id}/lessons/{index}", response_model=CourseView)
async def remove_lesson(
    course_id: str,
    index: int,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return course_view(await engine.remove_lesson(course_id, index))


@course_router.post("/{course_id}/lessons/{index}/resources", response_model=LessonView)
async def add_resource(
    course_id: str,
    index: int,
    request: AddResourceRequest,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    course = await engine.add_resource(
        course_id, index, request.name, request.type, request.content, request.pretext
    )
    return lesson_view(course, index)


@course_router.post("/{course_id}/lessons/{index}/quiz-resources", response_model=LessonView)
async def add_quiz_resource(
    course_id: str,
    index: int,
    request: AddQuizResourceRequest,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    course = await engine.add_quiz_resource(
        course_id, index, request.name, request.quiz_id, request.pretext
    )
    return lesson_view(course, index)


@course_router.post("/{course_id}/lessons/{index}/resources/remove", response_model=LessonView)
async def remove_resources(
    course_id: str,
    index: int,
    request: RemoveResourcesRequest,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    course = await engine.remove_resources(course_id, index, request.indices)
    return lesson_view(course, index)


@course_router.post("/{course_id}/publish", response_model=CourseView)
async def publish_course(
    course_id: str,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return course_view(await engine.publish(course_id))


@course_router.delete("/{course_id}")
async def discard_course(
    course_id: str,
    engine: CourseAuthoringEngine = Depends(get_course_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    await engine.discard(course_id)
    return {"status": "discarded", "id": course_id}


# =============================================================================
# GAME
# =============================================================================


@game_router.post("", response_model=QuestionView)
async def start_game(
    request: StartGameRequest,
    engine: GameEngine = Depends(get_game_engine),
    user: CurrentUser = Depends(get_current_user),
):
    """Inicia uma partida. O usuario que inicia e o GM."""
    return await engine.start(
        request.quiz_id,
        gm=user.user_id,
        game_type=request.type,
        scoring_type=request.scoring_type,
        requested_count=request.number_of_questions,
        game_id=request.game_id,
    )


@game_router.get("/{game_id}", response_model=QuestionView)
async def get_current_question(
    game_id: str,
    engine: GameEngine = Depends(get_game_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return await engine.current_question(game_id)


@game_router.post("/{game_id}/answer", response_model=AnswerResult)
async def submit_answer(
    game_id: str,
    request: SubmitAnswerRequest,
    engine: GameEngine = Depends(get_game_engine),
    user: CurrentUser = Depends(get_current_user),
):
    """Registra a resposta do usuario para a pergunta atual."""
    return await engine.submit_answer(
        game_id, request.question_id, user.username, request.answer, user_id=user.user_id
    )


@game_router.post("/{game_id}/next", response_model=AdvanceResult)
async def next_question(
    game_id: str,
    request: NextQuestionRequest,
    engine: GameEngine = Depends(get_game_engine),
    user: CurrentUser = Depends(get_current_user),
):
    """Encerra a pergunta atual (apenas o GM)."""
    return await engine.next_question(game_id, request.question_id, user.user_id)


@game_router.get("/{game_id}/scores", response_model=ScoreView)
async def get_scores(
    game_id: str,
    engine: GameEngine = Depends(get_game_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    return await engine.get_scores(game_id)


@game_router.put("/{game_id}/post")
async def bind_post(
    game_id: str,
    request: BindPostRequest,
    engine: GameEngine = Depends(get_game_engine),
    _user: CurrentUser = Depends(get_current_user),
):
    game = await engine.bind_post(game_id, request.post_id)
    return {"game_id": game.id, "post_id": game.current_post_id}


routers = [quiz_router, course_router, game_router]
