import pytest

from ujeebu_mcp.errors import EmptyRulesError, InvalidRulesError
from ujeebu_mcp.rules import BuilderRules, JsonRules, build_extraction_rules, compile_extract_rules
from ujeebu_mcp.types import RuleTuple


def test_builder_rules_compile_to_api_mapping():
    rules = BuilderRules.from_rows(
        [
            {"fieldName": "title", "selector": "h1", "type": "text"},
            {"fieldName": "links", "selector": "a", "type": "link", "multiple": True},
            {"fieldName": "sku", "selector": ".sku", "type": "attr", "attribute": "data-sku"},
        ]
    )
    assert compile_extract_rules(rules) == {
        "title": {"selector": "h1", "type": "text"},
        "links": {"selector": "a", "type": "link", "multiple": True},
        "sku": {"selector": ".sku", "type": "attr", "attribute": "data-sku"},
    }


def test_attribute_only_kept_for_attr_type():
    out = build_extraction_rules([RuleTuple("img", "img", "image", attribute="src")])
    assert out == {"img": {"selector": "img", "type": "image"}}


def test_attr_without_attribute_has_no_attribute_key():
    out = build_extraction_rules([RuleTuple("x", ".x", "attr", attribute="")])
    assert out == {"x": {"selector": ".x", "type": "attr"}}


def test_rows_missing_name_or_selector_are_skipped():
    rules = BuilderRules.from_rows(
        [
            {"fieldName": "", "selector": "h1"},
            {"fieldName": "price", "selector": ""},
            {"fieldName": "title", "selector": "h1"},
        ]
    )
    assert compile_extract_rules(rules) == {"title": {"selector": "h1", "type": "text"}}


def test_later_rows_win_on_duplicate_field_names():
    out = build_extraction_rules([RuleTuple("t", "h1"), RuleTuple("t", "h2")])
    assert out == {"t": {"selector": "h2", "type": "text"}}


@pytest.mark.parametrize(
    "rule_input",
    [
        BuilderRules(),
        BuilderRules.from_rows([{"fieldName": "", "selector": ""}]),
        JsonRules("{}"),
        JsonRules({}),
    ],
)
def test_empty_rules_are_rejected(rule_input):
    with pytest.raises(EmptyRulesError, match="At least one extraction rule is required"):
        compile_extract_rules(rule_input)


def test_json_rules_pass_through_verbatim():
    raw = '{"title": {"selector": "h1", "type": "text"}, "nested": {"selector": "div", "type": "obj", "children": {}}}'
    assert compile_extract_rules(JsonRules(raw)) == {
        "title": {"selector": "h1", "type": "text"},
        "nested": {"selector": "div", "type": "obj", "children": {}},
    }


def test_json_rules_accept_mapping():
    assert compile_extract_rules(JsonRules({"t": {"selector": "h1"}})) == {"t": {"selector": "h1"}}


@pytest.mark.parametrize("raw", ["{not json", "", "[1, 2]", "42"])
def test_invalid_json_rules(raw):
    with pytest.raises(InvalidRulesError, match="Invalid JSON"):
        compile_extract_rules(JsonRules(raw))
