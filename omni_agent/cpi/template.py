"""Placeholder substitution for CPI command templates."""

import json
import re
from typing import Any

PLACEHOLDER = re.compile(r"\{(\w+)\}")


def to_template_string(value: Any) -> str:
    """Coerce a parameter value to the text substituted into a template.

    Strings are inserted as-is. Numbers and booleans use their JSON form
    (``80``, ``true``) and ``None`` becomes ``null``. Lists and dicts are
    serialized as compact JSON with the outermost brackets or braces removed,
    so ``["80:80", "443:443"]`` renders as ``"80:80","443:443"``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple, dict)):
        if isinstance(value, tuple):
            value = list(value)
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)[1:-1]
    return json.dumps(value)


def render(template: str, params: dict[str, Any]) -> str:
    """Replace every ``{key}`` in ``template`` with its value from ``params``.

    Placeholders with no matching key are left in the output untouched. The
    template is scanned once, so substituted values are never rendered again.
    """

    def substitute(match: re.Match) -> str:
        key = match.group(1)
        if key not in params:
            return match.group(0)
        return to_template_string(params[key])

    return PLACEHOLDER.sub(substitute, template)
