"""Execution engine

Walks a built Document in order and produces the result sequence. Error
records abort the run, imports recurse into exported documents with their own
parameter scope, and custom keywords are dispatched to registered handlers.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import re
from collections.abc import MutableMapping
from contextvars import ContextVar
from typing import Any

from vsysc.builder import build_document, is_default_export
from vsysc.context import Context, default_context
from vsysc.exceptions import (
    HandlerRejectionError,
    HandlerTimeoutError,
    ImportCycleError,
    ImportNotFoundError,
    ReentrantExecutionError,
    error_for,
)
from vsysc.keywords import EXPORT_DEFAULT, Keyword
from vsysc.matcher import iter_lines, match_line
from vsysc.models import (
    ArrayValue,
    CommandValue,
    Document,
    ErrorKind,
    ErrorValue,
    StringValue,
)
from vsysc.variables import ParameterStore

log = logging.getLogger(__name__)

ARGUMENT_SEPARATOR = re.compile(r",\s*")


class _Export(Exception):
    """Internal signal: an EX line ended the document."""

    def __init__(self, results: list[Any]):
        self.results = results


def strip_default_exports(text: str) -> str:
    """Drop `EX: default` lines so re-running an export does not export again."""
    skip = set()
    for lineno, line in iter_lines(text):
        matched = match_line(line, lineno)
        if matched is not None and is_default_export(matched):
            skip.add(lineno)
    if not skip:
        return text
    return "\n".join(
        raw for index, raw in enumerate(text.split("\n")) if index + 1 not in skip
    )


# ids of the contexts the current task is already executing against
_active_contexts: ContextVar[tuple[int, ...]] = ContextVar("vsysc_active_contexts", default=())


class Interpreter:
    """Executes vsysc source against a Context."""

    def __init__(self, context: Context | None = None):
        self.context = context or default_context()

    async def execute(self, text: str) -> list[Any]:
        """Build and run `text`, returning its results in document order.

        Raises:
            ExecutionError: The document holds an error record.
            DuplicateExportError, ImportNotFoundError, ImportCycleError,
            HandlerRejectionError: Raised while running commands.
            ReentrantExecutionError: Called from a handler running on the
                same context.
        """
        active = _active_contexts.get()
        if id(self.context) in active:
            raise ReentrantExecutionError()

        async with self.context.lock:
            token = _active_contexts.set(active + (id(self.context),))
            try:
                return await self._run(text, scope=None, stack=[])
            finally:
                _active_contexts.reset(token)

    async def _run(
        self,
        text: str,
        scope: MutableMapping[str, str] | None,
        stack: list[str],
    ) -> list[Any]:
        document = build_document(text, scope=scope, context=self.context)
        log.debug("Built document '%s' with %d records", document.name, len(document.content))

        # any staged error fails the run before commands have side effects
        errors = document.errors
        if errors:
            raise error_for(errors[0])

        results: list[Any] = []
        try:
            for record in document.content.values():
                if isinstance(record, ArrayValue):
                    results.append(list(record.value))
                elif isinstance(record, StringValue):
                    results.append(record.value)
                elif isinstance(record, CommandValue):
                    await self._command(document, text, record, results, stack)
        except _Export as export:
            return export.results

        return results

    async def _command(
        self,
        document: Document,
        text: str,
        record: CommandValue,
        results: list[Any],
        stack: list[str],
    ) -> None:
        if record.keyword == Keyword.IM.value:
            results.extend(await self._import(record.value, stack))
        elif record.keyword == Keyword.EX.value:
            raise _Export(self._export(document, text, record.value))
        else:
            results.append(await self._call_handler(record))

    async def _import(self, value: str, stack: list[str]) -> list[Any]:
        name, *arguments = ARGUMENT_SEPARATOR.split(value.strip())

        exported = self.context.files.get(name)
        if exported is None:
            if self.context.settings.missing_import == "ignore":
                log.warning("Import '%s' not found, skipping", name)
                return []
            raise ImportNotFoundError(name)

        if name in stack:
            raise ImportCycleError(stack + [name])

        log.debug("Importing '%s' with %d parameter(s)", name, len(arguments))
        parameters = ParameterStore.from_arguments(arguments)
        return await self._run(exported.source, scope=parameters, stack=stack + [name])

    def _export(self, document: Document, text: str, value: str) -> list[Any]:
        if value != EXPORT_DEFAULT:
            return [value]

        name = document.name or EXPORT_DEFAULT
        self.context.files.export(name, document.content, source=strip_default_exports(text))
        log.info("Exported document '%s'", name)
        return document.values()

    async def _call_handler(self, record: CommandValue) -> Any:
        handler = self.context.keywords.get(record.keyword)
        if handler is None:
            # unregistered between build and execution
            raise error_for(
                ErrorValue(
                    keyword=record.keyword,
                    line=record.line,
                    value=f"Unknown keyword '{record.keyword}' (line:{record.line})",
                    kind=ErrorKind.UNKNOWN_KEYWORD,
                )
            )

        timeout = self.context.settings.handler_timeout
        try:
            outcome = handler(record.value)
            if inspect.isawaitable(outcome):
                outcome = await asyncio.wait_for(outcome, timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise HandlerTimeoutError(record.keyword, timeout or 0) from exc
        except HandlerRejectionError:
            raise
        except Exception as exc:
            raise HandlerRejectionError(record.keyword, exc) from exc

        log.debug("Keyword '%s' returned %r", record.keyword, outcome)
        return outcome


async def execute(text: str, context: Context | None = None) -> list[Any]:
    """Execute `text` with a fresh Interpreter over `context`."""
    return await Interpreter(context).execute(text)
