"""Message template rendering.

Spec fields may contain ``{{field}}`` placeholders that refer to sibling spec
fields, e.g. ``message = "{{name}} failed"``. Rendering is best-effort: a
placeholder whose field is missing or not a string renders as ``""``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

__all__ = ["render_template", "render_spec"]

_PARAM_RE = re.compile(r"\{\{(\w+)\}\}")


def render_template(value: object, params: Mapping[str, object]) -> object:
    """Render ``{{param}}`` placeholders in ``value`` against ``params``.

    Args:
        value: Candidate template; non-strings are returned unchanged
        params: Fields available to placeholders

    Returns:
        The rendered string, or ``value`` itself if it is not a string.
    """
    if not isinstance(value, str):
        return value

    def _sub(match: re.Match[str]) -> str:
        param = params.get(match.group(1))
        return param if isinstance(param, str) else ""

    return _PARAM_RE.sub(_sub, value)


def render_spec(spec: Mapping[str, object]) -> dict[str, object]:
    """Render every field of ``spec`` against ``spec`` itself.

    Placeholders resolve against the declared (unrendered) values, so a
    template that references another template gets its raw text.
    """
    return {key: render_template(value, spec) for key, value in spec.items()}
