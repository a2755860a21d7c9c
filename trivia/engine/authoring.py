"""Authoring Engines - Maquina de estados de rascunhos de Quiz e Course.

Cada operacao aplica exatamente uma edicao: carrega o agregado sob o lock
do seu ID, valida, modifica e persiste. Se a validacao falhar nada e
gravado, entao o rascunho nunca fica meio aplicado.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

from ..achievements import AchievementNotifier, LoggingNotifier, grant_safely
from ..config import ACHIEVEMENT_CONTENT_CREATOR, INCORRECT_ANSWER_COUNT
from ..exceptions import NotFoundError, ValidationError
from ..models.entities import Course, Lesson, Question, Quiz, Resource, new_id
from ..models.enums import QuizType, ResourceType
from ..storage.quiz_store import QuizStore

logger = logging.getLogger(__name__)

LESSON_NOT_FOUND = "Lesson not found. Please go back."


def _required(value: str | None, field: str, message: str) -> str:
    """Retorna o valor sem espacos ou levanta ValidationError do campo."""
    value = (value or "").strip()
    if not value:
        raise ValidationError("Missing some value", field_errors={field: message})
    return value


class QuizAuthoringEngine:
    """Edicoes incrementais de um rascunho de quiz.

    Example:
        >>> engine = QuizAuthoringEngine(store)
        >>> quiz = await engine.create()
        >>> await engine.set_name(quiz.id, "Capitais")
        >>> await engine.set_type(quiz.id, "single-answer")
        >>> await engine.add_question(quiz.id, "Capital da Franca?", "Paris", [])
        >>> await engine.publish(quiz.id, acting_user_id="user-1")
    """

    def __init__(self, store: QuizStore, notifier: AchievementNotifier | None = None):
        self.store = store
        self.notifier = notifier or LoggingNotifier()

    async def _load(self, quiz_id: str) -> Quiz:
        quiz = await self.store.get_quiz(quiz_id)
        if quiz is None:
            raise NotFoundError("quiz not found", details={"quiz_id": quiz_id})
        return quiz

    @asynccontextmanager
    async def _editing(self, quiz_id: str) -> AsyncIterator[Quiz]:
        async with self.store.lock(self.store.quiz_key(quiz_id)):
            quiz = await self._load(quiz_id)
            yield quiz
            await self.store.save_quiz(quiz)

    async def create(self, quiz_id: str | None = None) -> Quiz:
        """Cria rascunho vazio. Reutiliza o rascunho se o ID ja existe."""
        quiz_id = quiz_id or new_id()
        async with self.store.lock(self.store.quiz_key(quiz_id)):
            existing = await self.store.get_quiz(quiz_id)
            if existing is not None:
                return existing
            quiz = Quiz(id=quiz_id)
            await self.store.save_quiz(quiz)
        logger.info(f"Rascunho de quiz criado: {quiz_id}")
        return quiz

    async def get(self, quiz_id: str) -> Quiz:
        return await self._load(quiz_id)

    async def list_available(self) -> list[Quiz]:
        return await self.store.get_available_quizzes()

    async def set_name(self, quiz_id: str, name: str) -> Quiz:
        name = _required(name, "name", "Invalid name")
        async with self._editing(quiz_id) as quiz:
            quiz.name = name
        return quiz

    async def set_type(self, quiz_id: str, quiz_type: str | QuizType) -> Quiz:
        """Troca o tipo do quiz.

        Perguntas que deixam de ser validas sao mantidas; elas apenas saem
        da selecao de jogo.
        """
        try:
            new_type = QuizType(quiz_type)
        except ValueError:
            raise ValidationError(
                "Unrecognized value", field_errors={"type": "Could not get type"}
            ) from None

        async with self._editing(quiz_id) as quiz:
            quiz.type = new_type
        return quiz

    async def add_question(
        self,
        quiz_id: str,
        text: str,
        correct_answer: str,
        incorrect_answers: Iterable[str] = (),
    ) -> Quiz:
        """Adiciona uma pergunta ao final do quiz.

        Em quizzes de multipla escolha exige ``INCORRECT_ANSWER_COUNT``
        respostas incorretas nao vazias.
        """
        text = _required(text, "question", "Could not get question")
        correct_answer = _required(correct_answer, "answer", "Could not get answer")
        wrong = [a.strip() for a in incorrect_answers if a and a.strip()]

        async with self._editing(quiz_id) as quiz:
            if quiz.type == QuizType.MULTIPLE_CHOICE and len(wrong) < INCORRECT_ANSWER_COUNT:
                raise ValidationError(
                    "Missing some value",
                    field_errors={f"wrong_{len(wrong)}": "Could not get answer"},
                )
            quiz.questions.append(
                Question(text=text, correct_answer=correct_answer, incorrect_answers=wrong)
            )
        return quiz

    async def remove_questions(self, quiz_id: str, question_ids: Iterable[str]) -> Quiz:
        """Remove perguntas por ID numa unica passada. IDs desconhecidos sao ignorados."""
        to_remove = set(question_ids)
        async with self._editing(quiz_id) as quiz:
            quiz.questions = [q for q in quiz.questions if q.id not in to_remove]
        return quiz

    async def publish(self, quiz_id: str, acting_user_id: str | None = None) -> Quiz:
        """Move o quiz para o catalogo de disponiveis (idempotente)."""
        async with self.store.lock(self.store.quiz_key(quiz_id)):
            quiz = await self._load(quiz_id)
            if quiz.valid_question_count() == 0:
                raise ValidationError(
                    "cannot save a quiz with no valid questions", details={"quiz_id": quiz_id}
                )
            added = await self.store.add_available_quiz(quiz.id)

        if added:
            logger.info(f"Quiz publicado: {quiz.id} ({quiz.name})")
        if acting_user_id:
            await grant_safely(self.notifier, ACHIEVEMENT_CONTENT_CREATOR, acting_user_id)
        return quiz

    async def discard(self, quiz_id: str) -> None:
        """Cancela a criacao: remove do catalogo e apaga o rascunho."""
        async with self.store.lock(self.store.quiz_key(quiz_id)):
            await self.store.delete_quiz(quiz_id)


class CourseAuthoringEngine:
    """Edicoes incrementais de um rascunho de curso.

    Licoes e recursos sao endereçados por posicao na interface. O indice e
    verificado contra a contagem atual dentro do lock do curso.
    """

    def __init__(self, store: QuizStore):
        self.store = store

    async def _load(self, course_id: str) -> Course:
        course = await self.store.get_course(course_id)
        if course is None:
            raise NotFoundError("course not found", details={"course_id": course_id})
        return course

    @asynccontextmanager
    async def _editing(self, course_id: str) -> AsyncIterator[Course]:
        async with self.store.lock(self.store.course_key(course_id)):
            course = await self._load(course_id)
            yield course
            await self.store.save_course(course)

    @staticmethod
    def _lesson(course: Course, index: int) -> Lesson:
        lesson_id = course.lesson_id_at(index)
        if lesson_id is None:
            raise NotFoundError(
                LESSON_NOT_FOUND, details={"course_id": course.id, "index": index}
            )
        return course.find_lesson(lesson_id)

    async def create(self, course_id: str | None = None) -> Course:
        course_id = course_id or new_id()
        async with self.store.lock(self.store.course_key(course_id)):
            existing = await self.store.get_course(course_id)
            if existing is not None:
                return existing
            course = Course(id=course_id)
            await self.store.save_course(course)
        logger.info(f"Rascunho de curso criado: {course_id}")
        return course

    async def get(self, course_id: str) -> Course:
        return await self._load(course_id)

    async def list_available(self) -> list[Course]:
        return await self.store.get_available_courses()

    async def get_lesson(self, course_id: str, index: int) -> Course:
        """Seleciona uma licao para edicao (verifica o indice)."""
        course = await self._load(course_id)
        self._lesson(course, index)
        return course

    async def set_name(self, course_id: str, name: str) -> Course:
        name = _required(name, "name", "Invalid name")
        async with self._editing(course_id) as course:
            course.name = name
        return course

    async def set_description(self, course_id: str, description: str) -> Course:
        description = _required(description, "description", "Invalid description")
        async with self._editing(course_id) as course:
            course.description = description
        return course

    async def add_lesson(self, course_id: str, name: str, introduction: str) -> Course:
        name = _required(name, "name", "Invalid name")
        introduction = _required(introduction, "description", "Invalid introduction")
        async with self._editing(course_id) as course:
            course.lessons.append(Lesson(name=name, introduction=introduction))
        return course

    async def edit_lesson_name(self, course_id: str, index: int, name: str) -> Course:
        name = _required(name, "name", "Invalid name")
        async with self._editing(course_id) as course:
            self._lesson(course, index).name = name
        return course

    async def edit_lesson_introduction(
        self, course_id: str, index: int, introduction: str
    ) -> Course:
        introduction = _required(introduction, "description", "Invalid introduction")
        async with self._editing(course_id) as course:
            self._lesson(course, index).introduction = introduction
        return course

    async def remove_lesson(self, course_id: str, index: int) -> Course:
        async with self._editing(course_id) as course:
            lesson = self._lesson(course, index)
            course.lessons = [item for item in course.lessons if item.id != lesson.id]
        return course

    async def add_resource(
        self,
        course_id: str,
        lesson_index: int,
        name: str,
        resource_type: str | ResourceType,
        content: str,
        pretext: str = "",
    ) -> Course:
        """Adiciona recurso a licao. Recursos do tipo quiz exigem um quiz existente."""
        name = _required(name, "name", "Invalid name")
        content = _required(content, "content", "Invalid content")
        try:
            resource_type = ResourceType(resource_type)
        except ValueError:
            raise ValidationError(
                "Unrecognized value", field_errors={"type": "Invalid resource type"}
            ) from None

        if resource_type == ResourceType.QUIZ and await self.store.get_quiz(content) is None:
            raise NotFoundError(
                "quiz not found", details={"field_errors": {"quiz": "Quiz not found"}}
            )

        resource = Resource(
            name=name, type=resource_type, content=content, pretext=(pretext or "").strip()
        )
        async with self._editing(course_id) as course:
            self._lesson(course, lesson_index).resources.append(resource)
        return course

    async def add_quiz_resource(
        self, course_id: str, lesson_index: int, name: str, quiz_id: str, pretext: str = ""
    ) -> Course:
        quiz_id = _required(quiz_id, "quiz", "Invalid quiz")
        return await self.add_resource(
            course_id, lesson_index, name, ResourceType.QUIZ, quiz_id, pretext
        )

    async def remove_resources(
        self, course_id: str, lesson_index: int, indices: Iterable[int]
    ) -> Course:
        """Remove recursos por indice, do maior para o menor.

        Indices fora do intervalo ou repetidos sao ignorados.
        """
        async with self._editing(course_id) as course:
            lesson = self._lesson(course, lesson_index)
            valid = {i for i in indices if 0 <= i < len(lesson.resources)}
            for i in sorted(valid, reverse=True):
                del lesson.resources[i]
        return course

    async def publish(self, course_id: str) -> Course:
        async with self.store.lock(self.store.course_key(course_id)):
            course = await self._load(course_id)
            if not course.lessons:
                raise ValidationError(
                    "cannot save a course with no lessons", details={"course_id": course_id}
                )
            added = await self.store.add_available_course(course.id)

        if added:
            logger.info(f"Curso publicado: {course.id} ({course.name})")
        return course

    async def discard(self, course_id: str) -> None:
        async with self.store.lock(self.store.course_key(course_id)):
            await self.store.delete_course(course_id)
