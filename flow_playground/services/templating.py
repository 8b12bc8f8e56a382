"""Named-placeholder substitution for generated test skeletons.

Skeletons carry two kinds of markers. Block markers (`// ##NAME##`) take a
multi-line fragment, inline markers (`##NAME##`) take a token; an empty
fragment simply erases the marker. `##NAME-CONDITIONAL##` markers name a
variable that only exists when the NAME fragment was emitted: they render as
`conditionals[NAME]` for a non-empty fragment and as nothing otherwise.
"""

from __future__ import annotations

import re
from typing import Mapping


CONDITIONAL_SUFFIX = "-CONDITIONAL"

_MARKER_PATTERN = re.compile(r"(?://[ \t]*)?##([A-Z0-9_-]+)##")


class TemplateError(LookupError):
    """Raised when a skeleton references a marker with no fragment."""

    def __init__(self, marker: str):
        self.marker = marker
        super().__init__(f"No fragment supplied for marker '##{marker}##'.")


def render_template(
    skeleton: str,
    fragments: Mapping[str, str],
    conditionals: Mapping[str, str] | None = None,
    *,
    strict: bool = True,
) -> str:
    """Substitute every marker of `skeleton` in a single pass.

    Fragment text is inserted verbatim and never rescanned, so user-supplied
    names containing `##` cannot inject further substitutions. With
    `strict=False` markers without a fragment are left untouched instead of
    raising TemplateError.
    """
    conditionals = conditionals or {}

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name.endswith(CONDITIONAL_SUFFIX):
            paired = name[: -len(CONDITIONAL_SUFFIX)]
            if paired in fragments and paired in conditionals:
                return conditionals[paired] if fragments[paired] else ""
        elif name in fragments:
            return fragments[name]
        if strict:
            raise TemplateError(name)
        return match.group(0)

    return _MARKER_PATTERN.sub(_replace, skeleton)
