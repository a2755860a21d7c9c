"""Trivia Storage - KV backends e QuizStore."""

from .kv import AgentFSKV, KVBackend, MemoryKV
from .quiz_store import QuizStore

__all__ = ["KVBackend", "MemoryKV", "AgentFSKV", "QuizStore"]
