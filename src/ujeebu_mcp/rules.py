"""Extraction rule compiler for the scrape "extract with rules" operation.

Rules arrive either as raw JSON or as rows from the rule builder; both compile to
the `extract_rules` mapping the API expects::

    {"title": {"selector": "h1", "type": "text"},
     "images": {"selector": "img", "type": "image", "multiple": True}}
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Union

from .errors import EmptyRulesError, InvalidRulesError
from .types import ExtractionRule, RuleTuple

RULE_TYPES = ("text", "link", "image", "attr", "obj")


@dataclass(frozen=True)
class JsonRules:
    raw: Union[str, Mapping[str, Any]]


@dataclass(frozen=True)
class BuilderRules:
    rules: tuple[RuleTuple, ...] = field(default_factory=tuple)

    @classmethod
    def from_rows(cls, rows: Iterable[Union[RuleTuple, Mapping[str, Any]]]) -> "BuilderRules":
        return cls(tuple(r if isinstance(r, RuleTuple) else RuleTuple.from_dict(dict(r)) for r in rows))


RuleInput = Union[JsonRules, BuilderRules]


def _parse_json_rules(raw: Union[str, Mapping[str, Any]]) -> dict[str, Any]:
    if isinstance(raw, Mapping):
        return dict(raw)
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise InvalidRulesError(f"Invalid JSON in extract rules: {e}") from e
    if not isinstance(parsed, dict):
        raise InvalidRulesError(
            f"Invalid JSON in extract rules: expected an object, got {type(parsed).__name__}"
        )
    return parsed


def build_extraction_rules(rules: Iterable[RuleTuple]) -> dict[str, ExtractionRule]:
    extract_rules: dict[str, ExtractionRule] = {}
    for rule in rules:
        if not rule.fieldName or not rule.selector:
            continue

        config: ExtractionRule = {"selector": rule.selector, "type": rule.type}  # type: ignore[typeddict-item]
        if rule.type == "attr" and rule.attribute:
            config["attribute"] = rule.attribute
        if rule.multiple:
            config["multiple"] = True

        extract_rules[rule.fieldName] = config
    return extract_rules


def compile_extract_rules(rule_input: RuleInput) -> dict[str, Any]:
    """Compile rule input into the `extract_rules` mapping.

    Raises:
        InvalidRulesError: JSON input does not parse to an object.
        EmptyRulesError: no rule survived compilation.
    """
    if isinstance(rule_input, JsonRules):
        compiled: dict[str, Any] = _parse_json_rules(rule_input.raw)
    elif isinstance(rule_input, BuilderRules):
        compiled = dict(build_extraction_rules(rule_input.rules))
    else:
        raise TypeError(f"Unsupported rule input: {type(rule_input).__name__}")

    if not compiled:
        raise EmptyRulesError()
    return compiled
