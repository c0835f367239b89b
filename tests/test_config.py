import pytest

from vsysc.config import Settings, find_config_file
from vsysc.context import Context
from vsysc.exceptions import ConfigError


def test_defaults():
    settings = Settings()
    assert settings.handler_timeout == 30.0
    assert settings.missing_import == "error"
    assert settings.remove_keyword == "error"
    assert settings.variables == {}


def test_load_missing_file_gives_defaults(tmp_path):
    assert Settings.load(tmp_path / "vsysc.yaml") == Settings()


def test_load_yaml(tmp_path):
    path = tmp_path / "vsysc.yaml"
    path.write_text(
        "handler_timeout: 2.5\n"
        "missing_import: ignore\n"
        "variables:\n"
        "  greeting: hi\n"
        "plugins: [mypkg.keywords]\n"
    )
    settings = Settings.load(path)
    assert settings.handler_timeout == 2.5
    assert settings.missing_import == "ignore"
    assert settings.variables == {"greeting": "hi"}
    assert settings.plugins == ["mypkg.keywords"]


def test_null_timeout_disables(tmp_path):
    path = tmp_path / "vsysc.yaml"
    path.write_text("handler_timeout: null\n")
    assert Settings.load(path).handler_timeout is None


def test_invalid_value_raises(tmp_path):
    path = tmp_path / "vsysc.yaml"
    path.write_text("missing_import: sometimes\n")
    with pytest.raises(ConfigError):
        Settings.load(path)


def test_non_mapping_raises(tmp_path):
    path = tmp_path / "vsysc.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigError, match="mapping"):
        Settings.load(path)


def test_find_config_file_in_parent(tmp_path):
    (tmp_path / "vsysc.yaml").write_text("{}\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_config_file(nested) == tmp_path / "vsysc.yaml"


def test_context_from_settings_seeds_globals():
    ctx = Context.from_settings(Settings(variables={"x": "1"}))
    assert ctx.variables["x"] == "1"
