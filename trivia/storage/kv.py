"""KV backends - Substrato chave-valor usado pelo QuizStore."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS


class KVBackend(Protocol):
    """Interface minima do KV store (valores em bytes)."""

    async def get(self, key: str) -> bytes | None: ...

    async def set(self, key: str, value: bytes) -> None: ...

    async def delete(self, key: str) -> None: ...


class MemoryKV:
    """KV em memoria, usado em desenvolvimento e testes."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> bytes | None:
        async with self._lock:
            return self._data.get(key)

    async def set(self, key: str, value: bytes) -> None:
        async with self._lock:
            self._data[key] = bytes(value)

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class AgentFSKV:
    """Adapter sobre o KV store do AgentFS.

    O AgentFS guarda valores JSON; os bytes sao gravados como texto UTF-8.

    Example:
        >>> agentfs = await AgentFS.open(AgentFSOptions(id="trivia"))
        >>> kv = AgentFSKV(agentfs)
        >>> await kv.set("quiz_abc", b"{}")
    """

    def __init__(self, agentfs: AgentFS):
        self.agentfs = agentfs

    async def get(self, key: str) -> bytes | None:
        value = await self.agentfs.kv.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value
        return str(value).encode("utf-8")

    async def set(self, key: str, value: bytes) -> None:
        await self.agentfs.kv.set(key, value.decode("utf-8"))

    async def delete(self, key: str) -> None:
        await self.agentfs.kv.delete(key)
