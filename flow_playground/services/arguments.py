"""Default argument values for generated test cases."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, List

from ..defaults import TYPE_DEFAULTS
from .extraction import ArgumentDecl


@dataclass(slots=True)
class ArgumentGroup:
    type: str
    values: List[Any] = field(default_factory=list)


def default_for(type_name: str) -> Any:
    """Return a representative value for a Cadence type, or None if unknown."""
    return TYPE_DEFAULTS.get(type_name)


def group_arguments(decls: Iterable[ArgumentDecl]) -> List[ArgumentGroup]:
    """Collapse consecutive arguments of the same type into one group each."""
    groups: List[ArgumentGroup] = []
    for decl in decls:
        value = default_for(decl.type)
        if groups and groups[-1].type == decl.type:
            groups[-1].values.append(value)
        else:
            groups.append(ArgumentGroup(type=decl.type, values=[value]))
    return groups


def render_literal(value: Any) -> str:
    """Render a default value as a JavaScript literal."""
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    return json.dumps(str(value))

