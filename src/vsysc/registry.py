"""Custom keyword registry

Hosts extend the language by mapping a keyword name to a handler. A handler
receives the (already substituted) content of the line and returns the value
to append to the results, either directly or as an awaitable.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Awaitable, Callable, Union

from vsysc.exceptions import InvalidArgumentError
from vsysc.keywords import RESERVED

log = logging.getLogger(__name__)

Handler = Callable[[str], Union[Any, Awaitable[Any]]]


class KeywordRegistry:
    """Mapping of keyword name -> handler. Last registration wins."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def register(self, name: str, handler: Handler) -> None:
        """Register `handler` for keyword `name`.

        Handlers run while the engine holds the context lock, so a handler
        that executes source on the same context raises
        ReentrantExecutionError. Use a separate Context for nested runs.
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("name must be a string")
        if not callable(handler):
            raise InvalidArgumentError("func must be a function")

        key = name.strip().lower()
        if key in RESERVED:
            raise InvalidArgumentError(f"'{key}' is a reserved keyword")

        if key in self._handlers:
            log.debug("Replacing handler for keyword '%s'", key)
        self._handlers[key] = handler

    def register_batch(self, entries: Iterable[Mapping[str, Any]]) -> None:
        """Register `{name, handler}` entries in order.

        Entries registered before a failing one stay registered.
        """
        for entry in entries:
            if not isinstance(entry, Mapping):
                raise InvalidArgumentError("each entry must be a mapping of name and handler")
            handler = entry.get("handler", entry.get("func"))
            self.register(entry.get("name"), handler)  # type: ignore[arg-type]

    def get(self, name: str) -> Handler | None:
        return self._handlers.get(name.lower())

    def names(self) -> list[str]:
        return list(self._handlers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


def register_keyword(
    registry: KeywordRegistry,
    name: str | Iterable[Mapping[str, Any]],
    handler: Handler | None = None,
) -> None:
    """Register a single keyword, or a batch when `name` is a list of entries."""
    if isinstance(name, str):
        registry.register(name, handler)  # type: ignore[arg-type]
    elif isinstance(name, Iterable):
        registry.register_batch(name)
    else:
        raise InvalidArgumentError("name must be a string or a list of entries")


def load_plugin(registry: KeywordRegistry, module_path: str) -> None:
    """Import `module_path` and let it register its keywords.

    The module must expose `register(registry)`.
    """
    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise InvalidArgumentError(f"Cannot import plugin '{module_path}': {exc}") from exc

    hook = getattr(module, "register", None)
    if not callable(hook):
        raise InvalidArgumentError(f"Plugin '{module_path}' has no register() function")

    hook(registry)
    log.info("Loaded plugin %s", module_path)
