"""Template data derived from the results of plugin functions."""

from __future__ import annotations

import dataclasses
import json
import re
from collections.abc import Mapping
from typing import Any

_NUMBER_BOUNDARY = re.compile(r"([a-zA-Z])(\d+)([a-zA-Z]?)")

_GO_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_GO_ESCAPE_RE = re.compile("[<>&\u2028\u2029]")


class TemplateDataError(ValueError):
    """Raised when template data cannot be encoded as JSON."""


def _is_upper(ch: str) -> bool:
    return "A" <= ch <= "Z"


def _is_lower(ch: str) -> bool:
    return "a" <= ch <= "z"


def to_snake(name: str) -> str:
    """Convert a field name such as ``ImageName`` to ``image_name``."""
    text = _NUMBER_BOUNDARY.sub(r"\1 \2 \3", name).strip(" ")
    out: list[str] = []
    for i, ch in enumerate(text):
        case_changes = False
        if i + 1 < len(text):
            nxt = text[i + 1]
            case_changes = (_is_upper(ch) and _is_lower(nxt)) or (
                _is_lower(ch) and _is_upper(nxt)
            )

        if i > 0 and out and out[-1] != "_" and case_changes:
            if _is_upper(ch):
                out.append("_" + ch)
            elif _is_lower(ch):
                out.append(ch + "_")
        elif ch in " _-":
            out.append("_")
        else:
            out.append(ch)
    return "".join(out).lower()


def _public_fields(value: Any) -> list[tuple[str, Any]]:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
    if hasattr(value, "__dict__") and not isinstance(value, type):
        return list(vars(value).items())
    raise TypeError(f"cannot derive template data from {type(value).__name__}")


def template_data_from_config(value: Any) -> dict[str, Any]:
    """Map the public fields of ``value`` to a dict keyed by snake-case names."""
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return {str(key): item for key, item in value.items()}

    return {
        to_snake(name): item
        for name, item in _public_fields(value)
        if not name.startswith("_") and not name.startswith("XXX_")
    }


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def _go_json(data: Any, *, sort_keys: bool) -> str:
    encoded = json.dumps(
        data,
        ensure_ascii=False,
        separators=(",", ":"),
        sort_keys=sort_keys,
        default=_json_default,
    )
    return _GO_ESCAPE_RE.sub(lambda m: _GO_ESCAPES[m.group(0)], encoded)


def template_data(value: Any) -> bytes | None:
    """Return the JSON template data for a result, or None when there is none.

    A value with a ``template_data()`` method supplies its own data; otherwise
    the data is inferred from its public fields.
    """
    provider = getattr(value, "template_data", None)
    if callable(provider):
        data = provider()
    else:
        data = template_data_from_config(value)

    if not data:
        return None

    try:
        return _go_json(data, sort_keys=True).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise TemplateDataError(
            f"failed to JSON encode result template data: {exc}"
        ) from exc