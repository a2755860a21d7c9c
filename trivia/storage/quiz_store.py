"""Quiz Store - Gateway de persistencia para quizzes, cursos e partidas."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable
from typing import TypeVar

from pydantic import ValidationError as PydanticValidationError

from ..config import (
    KV_COURSE_LIST,
    KV_COURSE_PREFIX,
    KV_GAME_PREFIX,
    KV_QUIZ_LIST,
    KV_QUIZ_PREFIX,
)
from ..exceptions import PersistenceError
from ..models.entities import Course, Quiz
from ..models.state import GameState
from .kv import KVBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QuizStore:
    """Abstração sobre o KV store para persistência de quiz.

    Cada agregado é gravado como JSON numa chave própria. As listas de
    catálogo ("disponíveis") guardam IDs únicos, em ordem de inserção.

    Estrutura de chaves:
        - quiz_{id} -> Quiz
        - course_{id} -> Course
        - game_{id} -> GameState (id = post ancora)
        - quizList / courseList -> lista de IDs publicados

    Toda leitura-modificação-escrita deve rodar dentro de ``lock(key)``
    para serializar requests concorrentes sobre o mesmo agregado.

    Example:
        >>> store = QuizStore(MemoryKV())
        >>> await store.save_quiz(Quiz(id="abc"))
        >>> loaded = await store.get_quiz("abc")
    """

    def __init__(self, kv: KVBackend):
        """Inicializa store com um backend KV.

        Args:
            kv: Backend com get/set/delete em bytes
        """
        self.kv = kv
        self._locks: dict[str, asyncio.Lock] = {}

    # ---------- chaves ----------

    @staticmethod
    def quiz_key(quiz_id: str) -> str:
        return KV_QUIZ_PREFIX + quiz_id

    @staticmethod
    def course_key(course_id: str) -> str:
        return KV_COURSE_PREFIX + course_id

    @staticmethod
    def game_key(game_id: str) -> str:
        return KV_GAME_PREFIX + game_id

    def lock(self, key: str) -> asyncio.Lock:
        """Retorna o lock exclusivo da chave (criado sob demanda)."""
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    # ---------- primitivas ----------

    async def _call(self, op: str, key: str, awaitable: Awaitable[T]) -> T:
        try:
            return await awaitable
        except Exception as e:
            logger.exception(f"Falha no KV store ({op} {key})")
            raise PersistenceError(
                f"Falha ao executar {op} em {key}", details={"key": key, "op": op}
            ) from e

    async def _get_json(self, key: str):
        raw = await self._call("get", key, self.kv.get(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.exception(f"Valor corrompido no KV store: {key}")
            raise PersistenceError(f"Valor corrompido em {key}", details={"key": key}) from e

    async def _set_json(self, key: str, value) -> None:
        raw = json.dumps(value, ensure_ascii=False).encode("utf-8")
        await self._call("set", key, self.kv.set(key, raw))

    async def delete(self, key: str) -> None:
        await self._call("delete", key, self.kv.delete(key))

    # ---------- listas de catálogo ----------

    async def get_list(self, list_key: str) -> list[str]:
        data = await self._get_json(list_key)
        return list(data) if data else []

    async def add_to_list(self, list_key: str, item_id: str) -> bool:
        """Adiciona ID à lista se ausente.

        Returns:
            True se a lista mudou, False se o ID já estava presente
        """
        async with self.lock(list_key):
            ids = await self.get_list(list_key)
            if item_id in ids:
                return False
            ids.append(item_id)
            await self._set_json(list_key, ids)
            return True

    async def remove_from_list(self, list_key: str, item_id: str) -> bool:
        """Remove ID da lista se presente.

        Returns:
            True se a lista mudou, False se o ID não estava presente
        """
        async with self.lock(list_key):
            ids = await self.get_list(list_key)
            if item_id not in ids:
                return False
            ids.remove(item_id)
            await self._set_json(list_key, ids)
            return True

    # ---------- quizzes ----------

    async def get_quiz(self, quiz_id: str) -> Quiz | None:
        data = await self._get_json(self.quiz_key(quiz_id))
        if data is None:
            logger.debug(f"Quiz não encontrado: {quiz_id}")
            return None
        return self._validate(Quiz, data, self.quiz_key(quiz_id))

    async def save_quiz(self, quiz: Quiz) -> None:
        await self._set_json(self.quiz_key(quiz.id), quiz.model_dump(mode="json"))
        logger.debug(f"Quiz salvo: {quiz.id}")

    async def delete_quiz(self, quiz_id: str) -> None:
        """Remove quiz do catálogo e do store."""
        await self.remove_from_list(KV_QUIZ_LIST, quiz_id)
        await self.delete(self.quiz_key(quiz_id))
        logger.info(f"Quiz deletado: {quiz_id}")

    async def add_available_quiz(self, quiz_id: str) -> bool:
        return await self.add_to_list(KV_QUIZ_LIST, quiz_id)

    async def get_available_quizzes(self) -> list[Quiz]:
        """Lista quizzes publicados, ignorando IDs sem agregado."""
        out = []
        for quiz_id in await self.get_list(KV_QUIZ_LIST):
            quiz = await self.get_quiz(quiz_id)
            if quiz is None:
                logger.debug(f"Quiz do catálogo não encontrado: {quiz_id}")
                continue
            out.append(quiz)
        return out

    # ---------- cursos ----------

    async def get_course(self, course_id: str) -> Course | None:
        data = await self._get_json(self.course_key(course_id))
        if data is None:
            logger.debug(f"Curso não encontrado: {course_id}")
            return None
        return self._validate(Course, data, self.course_key(course_id))

    async def save_course(self, course: Course) -> None:
        await self._set_json(self.course_key(course.id), course.model_dump(mode="json"))
        logger.debug(f"Curso salvo: {course.id}")

    async def delete_course(self, course_id: str) -> None:
        await self.remove_from_list(KV_COURSE_LIST, course_id)
        await self.delete(self.course_key(course_id))
        logger.info(f"Curso deletado: {course_id}")

    async def add_available_course(self, course_id: str) -> bool:
        return await self.add_to_list(KV_COURSE_LIST, course_id)

    async def get_available_courses(self) -> list[Course]:
        out = []
        for course_id in await self.get_list(KV_COURSE_LIST):
            course = await self.get_course(course_id)
            if course is None:
                logger.debug(f"Curso do catálogo não encontrado: {course_id}")
                continue
            out.append(course)
        return out

    # ---------- partidas ----------

    async def get_game(self, game_id: str) -> GameState | None:
        data = await self._get_json(self.game_key(game_id))
        if data is None:
            return None
        try:
            return GameState.from_dict(data)
        except (KeyError, ValueError, PydanticValidationError) as e:
            logger.exception(f"Partida corrompida: {game_id}")
            raise PersistenceError(
                f"Partida corrompida: {game_id}", details={"key": self.game_key(game_id)}
            ) from e

    async def save_game(self, game: GameState) -> None:
        await self._set_json(self.game_key(game.root_post_id), game.to_dict())
        logger.debug(f"Partida salva: {game.root_post_id}")

    async def delete_game(self, game_id: str) -> None:
        await self.delete(self.game_key(game_id))
        logger.debug(f"Partida deletada: {game_id}")

    # ---------- helpers ----------

    @staticmethod
    def _validate(model, data, key: str):
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            logger.exception(f"Agregado corrompido no KV store: {key}")
            raise PersistenceError(f"Agregado corrompido em {key}", details={"key": key}) from e
