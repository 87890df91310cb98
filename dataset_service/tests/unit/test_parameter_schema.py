from models.tool import ParameterDefinition
from utils.parameter_schema import build_parameters_schema, parameters_to_text
from utils.validators import Validators

import pytest


def test_schema_from_definitions():
    schema = build_parameters_schema([
        ParameterDefinition(name="city", type="string", description=" City name ", is_required=True),
        ParameterDefinition(name="days", type="integer"),
    ])
    assert schema == {
        "type": "object",
        "properties": {
            "city": {"type": "string", "description": "City name"},
            "days": {"type": "integer"},
        },
        "required": ["city"],
    }


def test_enum_only_for_strings():
    schema = build_parameters_schema([
        ParameterDefinition(name="mode", type="string", enum_values="fast, slow"),
        ParameterDefinition(name="level", type="number", enum_values="1,2"),
        ParameterDefinition(name="empty", type="string", enum_values=" , "),
    ])
    assert schema["properties"]["mode"]["enum"] == ["fast", "slow"]
    assert "enum" not in schema["properties"]["level"]
    assert "enum" not in schema["properties"]["empty"]
    assert "required" not in schema


def test_no_named_definitions_gives_none():
    assert build_parameters_schema([ParameterDefinition(name=" ")]) is None
    assert build_parameters_schema([]) is None


def test_parameters_to_text():
    assert parameters_to_text(None) is None
    assert parameters_to_text("{bad") == "{bad"
    assert parameters_to_text({"type": "object"}) == '{\n  "type": "object"\n}'


def test_require_string():
    assert Validators.require_string("  name ", "msg") == "name"
    with pytest.raises(ValueError, match="msg"):
        Validators.require_string("   ", "msg")
    with pytest.raises(ValueError):
        Validators.require_string(12, "msg")


def test_optional_string():
    assert Validators.optional_string(None, "msg") is None
    assert Validators.optional_string("", "msg") is None
    assert Validators.optional_string("x", "msg") == "x"
    with pytest.raises(ValueError):
        Validators.optional_string(["x"], "msg")


def test_validate_url():
    assert Validators.validate_url(None) == (True, "")
    assert Validators.validate_url("http://localhost:8080/run") == (True, "")
    assert Validators.validate_url("ftp://example.com")[0] is False
    assert Validators.validate_url("example.com/run")[0] is False
