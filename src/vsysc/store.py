"""Export store

In-memory registry of exported documents, used to resolve imports.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from vsysc.exceptions import DuplicateExportError
from vsysc.models import Record

log = logging.getLogger(__name__)


@dataclass
class ExportedFile:
    """A document captured by `EX default`."""

    name: str
    content: dict[str, Record]
    source: str = ""  # exporting text, minus its export line


@dataclass
class FileStore:
    """Export name -> ExportedFile. Each name can be written once."""

    _files: dict[str, ExportedFile] = field(default_factory=dict)

    def export(self, name: str, content: dict[str, Record], source: str = "") -> ExportedFile:
        """Store a document under `name`.

        Raises:
            DuplicateExportError: If the name is already exported.
        """
        if name in self._files:
            raise DuplicateExportError(name)

        exported = ExportedFile(name=name, content=dict(content), source=source)
        self._files[name] = exported
        log.debug("Exported '%s' (%d records)", name, len(exported.content))
        return exported

    def get(self, name: str) -> ExportedFile | None:
        return self._files.get(name)

    def names(self) -> list[str]:
        return list(self._files)

    def clear(self) -> None:
        self._files.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._files

    def __iter__(self) -> Iterator[ExportedFile]:
        return iter(self._files.values())

    def __len__(self) -> int:
        return len(self._files)
