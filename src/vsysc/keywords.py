"""Reserved keywords of the vsysc language"""

from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    STRING = "string"
    ARRAY = "array"
    COMMAND = "command"  # dispatched by the engine


class Keyword(str, Enum):
    NM = "nm"  # document name
    DC = "dc"  # declare variable
    WL = "wl"  # write line
    AR = "ar"  # create array
    AD = "ad"  # add to array
    RM = "rm"  # remove from array (reserved)
    IM = "im"  # import an export
    EX = "ex"  # export document or expression

    @property
    def category(self) -> Category:
        return _CATEGORIES[self]

    @classmethod
    def lookup(cls, name: str) -> Keyword | None:
        """Return the reserved keyword for `name`, or None for anything else."""
        try:
            return cls(name.lower())
        except ValueError:
            return None


_CATEGORIES: dict[Keyword, Category] = {
    Keyword.NM: Category.STRING,
    Keyword.DC: Category.STRING,
    Keyword.WL: Category.STRING,
    Keyword.AR: Category.ARRAY,
    Keyword.AD: Category.ARRAY,
    Keyword.RM: Category.ARRAY,
    Keyword.IM: Category.COMMAND,
    Keyword.EX: Category.COMMAND,
}

RESERVED: frozenset[str] = frozenset(k.value for k in Keyword)

EXPORT_DEFAULT = "default"
