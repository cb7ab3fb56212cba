"""Declarative parameter schema.

Properties only carry metadata: name, type, default and the `show` conditions that
decide when a property applies. Nothing here performs a request; the schema answers
two questions at runtime: which default a missing parameter takes, and how an
operation is described to MCP clients.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

PropertyType = str  # "string" | "number" | "boolean" | "options" | "collection" | "json" | "fixedCollection"


@dataclass(frozen=True)
class Option:
    name: str
    value: Any
    description: str = ""


@dataclass(frozen=True)
class Property:
    name: str
    display_name: str
    type: PropertyType
    default: Any = None
    required: bool = False
    description: str = ""
    placeholder: str = ""
    options: tuple[Any, ...] = ()  # Option for "options", Property for collections
    show: dict[str, tuple[Any, ...]] = field(default_factory=dict)
    secret: bool = False

    def default_value(self) -> Any:
        # Defaults are handed out per item, so mutable defaults must not be shared.
        return copy.deepcopy(self.default)

    def is_visible(self, lookup: Callable[[str], Any]) -> bool:
        for key, allowed in self.show.items():
            if lookup(key) not in allowed:
                return False
        return True


def displayed_for(resource: str, operation: str, **extra: tuple[Any, ...]) -> dict[str, tuple[Any, ...]]:
    """Build a `show` condition restricting a property to one operation."""
    show: dict[str, tuple[Any, ...]] = {"resource": (resource,), "operation": (operation,)}
    show.update(extra)
    return show


def find_property(
    properties: Iterable[Property],
    name: str,
    lookup: Callable[[str], Any],
) -> Optional[Property]:
    """Return the first property called `name` whose `show` conditions hold."""
    for prop in properties:
        if prop.name == name and prop.is_visible(lookup):
            return prop
    return None


def property_schema(prop: Property) -> dict[str, Any]:
    """Render a property as a plain dict (for tool listings)."""
    out: dict[str, Any] = {
        "name": prop.name,
        "type": prop.type,
        "default": None if prop.secret else prop.default,
        "required": prop.required,
    }
    if prop.description:
        out["description"] = prop.description
    if prop.type == "options":
        out["options"] = [o.value for o in prop.options]
    elif prop.type in {"collection", "fixedCollection"}:
        out["options"] = [property_schema(o) for o in prop.options]
    return out


def describe_properties(props: Iterable[Property]) -> str:
    """One line per parameter, used in MCP tool descriptions."""
    lines = []
    for prop in props:
        head = f"- {prop.name} ({prop.type}{', required' if prop.required else ''})"
        if prop.type == "options":
            head += " one of " + ", ".join(repr(o.value) for o in prop.options)
        if prop.default not in (None, "", {}) and not prop.secret:
            head += f", default {prop.default!r}"
        if prop.show:
            conds = {k: v for k, v in prop.show.items() if k not in {"resource", "operation"}}
            if conds:
                head += " when " + ", ".join(f"{k} in {list(v)}" for k, v in conds.items())
        lines.append(head)
        if prop.type == "collection" and prop.options:
            lines.append("    keys: " + ", ".join(o.name for o in prop.options))
    return "\n".join(lines)
