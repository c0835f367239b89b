"""Interpreter context

Everything a build or execution reads or writes besides its own input:
the global variable store, the export store, the keyword registry and the
settings. A process-wide default exists for hosts that do not need isolation.
"""

from __future__ import annotations

import asyncio
import weakref
from dataclasses import dataclass, field

from vsysc.config import Settings
from vsysc.registry import KeywordRegistry
from vsysc.store import FileStore
from vsysc.variables import VariableStore


@dataclass
class Context:
    """Shared state for builds and executions."""

    variables: VariableStore = field(default_factory=VariableStore)
    files: FileStore = field(default_factory=FileStore)
    keywords: KeywordRegistry = field(default_factory=KeywordRegistry)
    settings: Settings = field(default_factory=Settings)
    # one lock per event loop; an asyncio.Lock is bound to the loop it first waits on
    _locks: weakref.WeakKeyDictionary = field(
        default_factory=weakref.WeakKeyDictionary, init=False, repr=False, compare=False
    )

    @property
    def lock(self) -> asyncio.Lock:
        """Lock serializing top-level executions on the running loop."""
        loop = asyncio.get_running_loop()
        lock = self._locks.get(loop)
        if lock is None:
            lock = self._locks[loop] = asyncio.Lock()
        return lock

    @classmethod
    def from_settings(cls, settings: Settings) -> "Context":
        return cls(variables=VariableStore(settings.variables), settings=settings)


_default_context: Context | None = None


def default_context() -> Context:
    """Process-wide context, created on first use."""
    global _default_context
    if _default_context is None:
        _default_context = Context()
    return _default_context


def reset_default_context() -> Context:
    """Replace the process-wide context with a fresh one."""
    global _default_context
    _default_context = Context()
    return _default_context
