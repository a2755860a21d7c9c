# =============================================================================
# TESTES - Achievements Module
# =============================================================================
# Testes do cliente de badges com httpx.MockTransport
# =============================================================================

import json

import httpx
import pytest


def _badges_transport(requests, grant_status=200):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/ensure"):
            badges = json.loads(request.content)["badges"]
            return httpx.Response(
                200, json=[{"id": f"b{i}", "name": b["name"]} for i, b in enumerate(badges)]
            )
        return httpx.Response(grant_status, json={})

    return httpx.MockTransport(handler)


class TestBadgesClient:
    """Testes para BadgesClient."""

    @pytest.mark.asyncio
    async def test_ensure_then_grant(self):
        from trivia.achievements import BadgesClient

        requests = []
        http = httpx.AsyncClient(transport=_badges_transport(requests))
        client = BadgesClient("http://badges.local/api/", bot_id="quiz", http_client=http)

        await client.ensure_badges()
        await client.grant("Winner", "user-1")
        await client.close()

        assert [r.url.path for r in requests] == ["/api/ensure", "/api/grant"]
        payload = json.loads(requests[1].content)
        assert payload["user_id"] == "user-1"
        assert payload["bot_id"] == "quiz"
        assert payload["badge_id"].startswith("b")

    @pytest.mark.asyncio
    async def test_grant_without_ensure_is_noop(self):
        from trivia.achievements import BadgesClient

        requests = []
        http = httpx.AsyncClient(transport=_badges_transport(requests))
        client = BadgesClient("http://badges.local", bot_id="quiz", http_client=http)

        await client.grant("Winner", "user-1")

        assert requests == []

    @pytest.mark.asyncio
    async def test_unknown_badge_is_noop(self):
        from trivia.achievements import BadgesClient

        requests = []
        http = httpx.AsyncClient(transport=_badges_transport(requests))
        client = BadgesClient("http://badges.local", bot_id="quiz", http_client=http)
        await client.ensure_badges()

        await client.grant("Inexistente", "user-1")

        assert len(requests) == 1

    @pytest.mark.asyncio
    async def test_grant_http_error_is_logged(self, capture_logs):
        """Erro HTTP na concessao vira warning, sem excecao."""
        from trivia.achievements import BadgesClient

        requests = []
        http = httpx.AsyncClient(transport=_badges_transport(requests, grant_status=500))
        client = BadgesClient("http://badges.local", bot_id="quiz", http_client=http)
        await client.ensure_badges()

        await client.grant("Hard worker", "user-1")

        assert "Falha ao conceder" in capture_logs.text

    @pytest.mark.asyncio
    async def test_ensure_failure_is_logged(self, capture_logs):
        from trivia.achievements import BadgesClient

        def handler(request):
            raise httpx.ConnectError("offline", request=request)

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = BadgesClient("http://badges.local", bot_id="quiz", http_client=http)

        await client.ensure_badges()

        assert "Nao foi possivel registrar badges" in capture_logs.text


class TestGrantSafely:
    """Testes para grant_safely."""

    @pytest.mark.asyncio
    async def test_swallows_notifier_errors(self, capture_logs):
        from unittest.mock import AsyncMock

        from trivia.achievements import grant_safely

        notifier = AsyncMock()
        notifier.grant = AsyncMock(side_effect=RuntimeError("boom"))

        await grant_safely(notifier, "Winner", "user-1")

        notifier.grant.assert_called_once_with("Winner", "user-1")
        assert "Winner" in capture_logs.text

    @pytest.mark.asyncio
    async def test_logging_notifier(self, capture_logs):
        from trivia.achievements import LoggingNotifier

        await LoggingNotifier().grant("Content creator", "user-1")

        assert "Content creator" in capture_logs.text
