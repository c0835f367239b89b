"""Document and record models

A Document is the unit produced by the record builder: a name plus an
insertion-ordered mapping of identifier -> Record. Records are tagged msgspec
structs so a whole Document can be dumped to JSON as-is.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Union

import msgspec


class ErrorKind(str, Enum):
    SYNTAX = "syntax"
    UNKNOWN_VARIABLE = "unknown_variable"
    UNKNOWN_KEYWORD = "unknown_keyword"
    ARRAY_NOT_FOUND = "array_not_found"
    NOT_A_NUMBER = "not_a_number"
    NOT_IMPLEMENTED = "not_implemented"
    DUPLICATE_IDENTIFIER = "duplicate_identifier"


class RecordBase(msgspec.Struct, tag_field="type"):
    keyword: str
    line: int = 0


class StringValue(RecordBase, tag="string"):
    value: str = ""


class ArrayValue(RecordBase, tag="array"):
    value: List[str] = msgspec.field(default_factory=list)

    def append(self, item: str) -> None:
        self.value.append(item)


class ErrorValue(RecordBase, tag="error"):
    value: str = ""
    kind: ErrorKind = ErrorKind.SYNTAX


class CommandValue(RecordBase, tag="command"):
    """A deferred command (import, export or custom keyword)."""

    value: str = ""


Record = Union[StringValue, ArrayValue, ErrorValue, CommandValue]


class Document(msgspec.Struct):
    """Parsed unit of execution."""

    name: str = ""
    content: Dict[str, Record] = msgspec.field(default_factory=dict)

    @property
    def errors(self) -> List[ErrorValue]:
        return [r for r in self.content.values() if isinstance(r, ErrorValue)]

    def values(self) -> list:
        """Plain string/array values in document order."""
        return [
            list(r.value) if isinstance(r, ArrayValue) else r.value
            for r in self.content.values()
            if isinstance(r, (StringValue, ArrayValue))
        ]

    def to_json(self) -> bytes:
        return msgspec.json.encode(self)

    @classmethod
    def from_json(cls, data: bytes | str) -> "Document":
        return msgspec.json.decode(data, type=cls)
