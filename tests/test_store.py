import pytest

from vsysc.exceptions import DuplicateExportError
from vsysc.models import StringValue
from vsysc.store import FileStore


def test_export_and_get():
    store = FileStore()
    content = {"1": StringValue(keyword="wl", value="hello")}
    exported = store.export("lib", content, source="1: WL: hello")

    assert store.get("lib") is exported
    assert exported.content == content
    assert exported.content is not content
    assert "lib" in store
    assert store.names() == ["lib"]


def test_export_is_write_once():
    store = FileStore()
    store.export("lib", {})
    with pytest.raises(DuplicateExportError) as excinfo:
        store.export("lib", {})
    assert excinfo.value.name == "lib"


def test_missing_and_clear():
    store = FileStore()
    assert store.get("nope") is None
    store.export("a", {})
    store.clear()
    assert len(store) == 0
