"""Achievements - Sinalizacao de conquistas (fire-and-forget).

O servico de badges e um colaborador externo. Falhas ao conceder uma
conquista sao logadas e nunca chegam ao jogador.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from .config import ACHIEVEMENT_DESCRIPTIONS

logger = logging.getLogger(__name__)


class AchievementNotifier(Protocol):
    async def grant(self, name: str, user_id: str) -> None: ...


class LoggingNotifier:
    """Notifier padrao: apenas registra a conquista no log."""

    async def grant(self, name: str, user_id: str) -> None:
        logger.info(f"Conquista '{name}' para {user_id}")


class BadgesClient:
    """Cliente HTTP do servico de badges.

    Endpoints usados:
        - POST {base_url}/ensure -> registra as conquistas, retorna [{id, name}]
        - POST {base_url}/grant -> concede uma conquista a um usuario

    Example:
        >>> client = BadgesClient("http://badges.local/api/v1", bot_id="quiz")
        >>> await client.ensure_badges()
        >>> await client.grant("Winner", "user-123")
    """

    def __init__(
        self,
        base_url: str,
        bot_id: str,
        timeout: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.bot_id = bot_id
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._badges: dict[str, str] | None = None

    async def ensure_badges(self) -> None:
        """Registra as conquistas do quiz e guarda o mapa nome -> badge ID."""
        payload = {
            "bot_id": self.bot_id,
            "badges": [
                {"name": name, "description": description, "multiple": False}
                for name, description in ACHIEVEMENT_DESCRIPTIONS.items()
            ],
        }
        try:
            response = await self._client.post(f"{self.base_url}/ensure", json=payload)
            response.raise_for_status()
            badges = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Nao foi possivel registrar badges: {e}")
            return

        self._badges = {badge["name"]: badge["id"] for badge in badges}
        logger.debug(f"Badges registrados: {list(self._badges)}")

    async def grant(self, name: str, user_id: str) -> None:
        if self._badges is None:
            logger.debug("Mapa de badges vazio")
            return

        badge_id = self._badges.get(name)
        if badge_id is None:
            logger.debug(f"Conquista nao reconhecida: {name}")
            return

        payload = {"badge_id": badge_id, "user_id": user_id, "bot_id": self.bot_id}
        try:
            response = await self._client.post(f"{self.base_url}/grant", json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Falha ao conceder '{name}' para {user_id}: {e}")
            return

        logger.debug(f"Conquista concedida: {name} -> {user_id}")

    async def close(self) -> None:
        await self._client.aclose()


async def grant_safely(notifier: AchievementNotifier, name: str, user_id: str) -> None:
    """Concede conquista sem propagar falhas ao chamador."""
    try:
        await notifier.grant(name, user_id)
    except Exception:
        logger.warning(f"Falha ao conceder '{name}' para {user_id}", exc_info=True)
