"""vsysc - vsystem container language interpreter"""

from vsysc._version import __version__
from vsysc.builder import build_document, text_to_document
from vsysc.config import Settings
from vsysc.context import Context, default_context, reset_default_context
from vsysc.engine import Interpreter, execute
from vsysc.exceptions import VsyscError
from vsysc.keywords import Keyword
from vsysc.models import (
    ArrayValue,
    CommandValue,
    Document,
    ErrorKind,
    ErrorValue,
    StringValue,
)
from vsysc.registry import KeywordRegistry, register_keyword
from vsysc.store import ExportedFile, FileStore
from vsysc.variables import ParameterStore, VariableStore

__all__ = [
    "__version__",
    # builder
    "build_document",
    "text_to_document",
    # engine
    "Interpreter",
    "execute",
    # context
    "Context",
    "Settings",
    "default_context",
    "reset_default_context",
    # models
    "ArrayValue",
    "CommandValue",
    "Document",
    "ErrorKind",
    "ErrorValue",
    "Keyword",
    "StringValue",
    # stores
    "ExportedFile",
    "FileStore",
    "KeywordRegistry",
    "ParameterStore",
    "VariableStore",
    "register_keyword",
    "VsyscError",
]
