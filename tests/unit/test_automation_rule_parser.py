"""Unit tests for RuleParser."""

import json

import pytest

from app.core.automation.exceptions import (
    ActionError,
    ConditionDeserializationError,
    InvalidRuleDefinitionError,
)
from app.core.automation.rule_parser import RuleParser


def test_parse_conditions_decodes_json():
    assert RuleParser.parse_conditions('{"priority": "HIGH"}') == {"priority": "HIGH"}


def test_parse_conditions_passes_decoded_data_through():
    conditions = [{"field": "a", "value": 1}]
    assert RuleParser.parse_conditions(conditions) is conditions


@pytest.mark.parametrize("blob", [None, "", "  "])
def test_parse_conditions_absent(blob):
    assert RuleParser.parse_conditions(blob) is None


@pytest.mark.parametrize("blob", ["{bad", "[1,", 42])
def test_parse_conditions_malformed(blob):
    with pytest.raises(ConditionDeserializationError):
        RuleParser.parse_conditions(blob)


def test_parse_parameters_absent_is_empty():
    assert RuleParser.parse_parameters(None) == {}
    assert RuleParser.parse_parameters("") == {}


def test_parse_parameters_requires_object():
    with pytest.raises(ActionError):
        RuleParser.parse_parameters('"just a string"')


def test_parse_parameters_malformed():
    with pytest.raises(ActionError):
        RuleParser.parse_parameters("{message:")


def test_serialize_keeps_valid_json_text():
    text = '{"message": "Hi"}'
    assert RuleParser.serialize(text) == text


def test_serialize_encodes_structures():
    assert json.loads(RuleParser.serialize({"sectionId": "s1"})) == {"sectionId": "s1"}
    assert RuleParser.serialize(None) is None


def test_serialize_rejects_invalid_json_text():
    with pytest.raises(InvalidRuleDefinitionError):
        RuleParser.serialize("{nope")


def test_validate_conditions():
    assert RuleParser.validate_conditions('{"a": 1}') is True
    assert RuleParser.validate_conditions(None) is True
    assert RuleParser.validate_conditions("{a:") is False
