from vsysc.variables import ParameterStore, VariableStore, is_parameter_name, substitute


def test_substitute_known_variable():
    text, missing = substitute("value is $x!", {"x": "42"})
    assert text == "value is 42!"
    assert missing == []


def test_substitute_unknown_left_verbatim():
    text, missing = substitute("$a and $b", {"a": "1"})
    assert text == "1 and $b"
    assert missing == ["b"]


def test_substitute_without_dollar_is_untouched():
    assert substitute("plain", {}) == ("plain", [])


def test_empty_value_is_still_a_hit():
    assert substitute("[$e]", {"e": ""}) == ("[]", [])


def test_variable_store_stringifies():
    store = VariableStore()
    store["n"] = 5  # type: ignore[assignment]
    assert store["n"] == "5"
    assert dict(store) == {"n": "5"}
    assert len(store) == 1


def test_parameter_store_positional_names():
    params = ParameterStore.from_arguments(["a", "b"])
    assert dict(params) == {"0001": "a", "0002": "b"}


def test_parameter_names_past_nine():
    params = ParameterStore.from_arguments([str(i) for i in range(12)])
    assert "0010" in params
    assert params["0012"] == "11"


def test_is_parameter_name():
    assert is_parameter_name("0001")
    assert is_parameter_name("0012")
    assert not is_parameter_name("001")
    assert not is_parameter_name("name")
