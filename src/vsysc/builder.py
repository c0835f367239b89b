"""Record builder - classifies source lines into a Document.

Classification is synchronous: when `build_document` returns, every line has
been classified. Problems found here are not raised; they are staged as
`ErrorValue` records under the offending identifier (or the line number for
syntax errors) and only surface when the document is executed.
"""

from __future__ import annotations

import logging
import re
from collections.abc import MutableMapping

from vsysc.context import Context, default_context
from vsysc.keywords import EXPORT_DEFAULT, Category, Keyword
from vsysc.matcher import LineMatch, iter_lines, match_line, syntax_message
from vsysc.models import (
    ArrayValue,
    CommandValue,
    Document,
    ErrorKind,
    ErrorValue,
    StringValue,
)
from vsysc.variables import ParameterStore, is_parameter_name, substitute

log = logging.getLogger(__name__)

NUMBER_PATTERN = re.compile(r"-?\d+(\.\d+)?")


def _is_number(identifier: str) -> bool:
    # plain decimals only: no "nan", "inf" or "1_0"
    return NUMBER_PATTERN.fullmatch(identifier) is not None


def is_default_export(line: LineMatch) -> bool:
    return line.keyword == Keyword.EX.value and line.content == EXPORT_DEFAULT


class RecordBuilder:
    """Builds one Document from source text against a variable scope.

    A document that exports itself (`EX: default`) outside an import is a
    library: its positional parameters (`$0001`, ...) are only bound when it
    is imported, so they are left verbatim instead of being reported.
    """

    def __init__(
        self,
        scope: MutableMapping[str, str],
        context: Context,
    ):
        self.scope = scope
        self.context = context
        self.document = Document()
        self.defers_parameters = False

    def build(self, text: str) -> Document:
        matches: list[tuple[int, LineMatch | None]] = [
            (lineno, match_line(line, lineno)) for lineno, line in iter_lines(text)
        ]
        self.defers_parameters = not isinstance(self.scope, ParameterStore) and any(
            m is not None and is_default_export(m) for _, m in matches
        )

        for lineno, matched in matches:
            if matched is None:
                self._error(str(lineno), syntax_message(lineno), "none", lineno, ErrorKind.SYNTAX)
                continue
            self.classify(matched)
        return self.document

    def classify(self, line: LineMatch) -> None:
        identifier, name, lineno = line.identifier, line.keyword, line.lineno

        content, missing = substitute(line.content, self.scope)
        if self.defers_parameters:
            missing = [m for m in missing if not is_parameter_name(m)]
        if missing:
            self._error(
                identifier,
                f"Unknown variable '${missing[0]}' (line:{lineno})",
                "none",
                lineno,
                ErrorKind.UNKNOWN_VARIABLE,
            )
            return

        keyword = Keyword.lookup(name)
        category = keyword.category if keyword else None
        occupied = identifier in self.document.content

        if (
            not occupied
            and category is Category.STRING
            and keyword not in (Keyword.NM, Keyword.DC)
        ):
            if not _is_number(identifier):
                self._error(
                    identifier,
                    f"'{identifier}' is not a number (line:{lineno})",
                    name,
                    lineno,
                    ErrorKind.NOT_A_NUMBER,
                )
                return
            self.document.content[identifier] = StringValue(keyword=name, line=lineno, value=content)
        elif category is Category.ARRAY:
            self._array(keyword, identifier, content, lineno)
        else:
            self._special(keyword, name, identifier, content, lineno, occupied)

    def _array(self, keyword: Keyword | None, identifier: str, content: str, lineno: int) -> None:
        if keyword is Keyword.AR:
            self.document.content[identifier] = ArrayValue(
                keyword=keyword.value, line=lineno, value=[content]
            )
        elif keyword is Keyword.AD:
            existing = self.document.content.get(identifier)
            if isinstance(existing, ArrayValue):
                existing.append(content)
            else:
                self._error(
                    identifier,
                    f"Array '{identifier}' does not exist, failed to add '{content}'",
                    keyword.value,
                    lineno,
                    ErrorKind.ARRAY_NOT_FOUND,
                )
        elif keyword is Keyword.RM:
            if self.context.settings.remove_keyword == "error":
                self._error(
                    identifier,
                    f"Keyword 'rm' is not implemented (line:{lineno})",
                    keyword.value,
                    lineno,
                    ErrorKind.NOT_IMPLEMENTED,
                )
            else:
                log.debug("Ignoring RM on '%s' (line %d)", identifier, lineno)

    def _special(
        self,
        keyword: Keyword | None,
        name: str,
        identifier: str,
        content: str,
        lineno: int,
        occupied: bool,
    ) -> None:
        if keyword is Keyword.DC:
            self.scope[identifier] = content
        elif keyword is Keyword.NM:
            self.document.name = content
        elif keyword in (Keyword.IM, Keyword.EX) or name in self.context.keywords:
            if occupied:
                self._error(
                    identifier,
                    f"Identifier '{identifier}' is already in use, cannot run '{name}' (line:{lineno})",
                    name,
                    lineno,
                    ErrorKind.DUPLICATE_IDENTIFIER,
                )
                return
            self.document.content[identifier] = CommandValue(keyword=name, line=lineno, value=content)
        else:
            self._error(
                identifier,
                f"Unknown keyword '{name}' (line:{lineno})",
                name,
                lineno,
                ErrorKind.UNKNOWN_KEYWORD,
            )

    def _error(self, key: str, message: str, keyword: str, lineno: int, kind: ErrorKind) -> None:
        log.debug("Staged %s error at '%s': %s", kind.value, key, message)
        self.document.content[key] = ErrorValue(keyword=keyword, line=lineno, value=message, kind=kind)


def build_document(
    text: str,
    scope: MutableMapping[str, str] | None = None,
    context: Context | None = None,
) -> Document:
    """Classify `text` into a Document.

    Args:
        text: vsysc source.
        scope: Variable scope for DC and `$name`; defaults to the context's
            global variable store.
        context: Interpreter context; defaults to the process-wide one.
    """
    context = context or default_context()
    if scope is None:
        scope = context.variables
    return RecordBuilder(scope, context).build(text)


def wrap_text(text: str, name: str) -> str:
    """Render arbitrary text as vsysc source, one WL per physical line."""
    lines = [f"0: NM: {name}", ""]
    for index, line in enumerate(text.split("\n")):
        lines.append(f"{index + 1}: WL: {line}")
    return "\n".join(lines)


def text_to_document(text: str, name: str, context: Context | None = None) -> Document:
    """Build (without executing) a Document whose lines are the lines of `text`."""
    return build_document(wrap_text(text, name), context=context)
