"""
OCN Notary Canonicalization

Flattens an arbitrary request value into an ordered list of JsonPath-style
field paths and the concatenated message that gets hashed and signed.

Rules:
- Sequences are walked in order, appending "[i]"
- Mappings are walked in insertion order, appending "['key']"
- None and "" are skipped (no path, no bytes)
- Every other scalar contributes its path and its canonical string,
  concatenated without delimiters
- Custom types are normalized to a plain tree first (see to_tree)
"""

import json
import math
from dataclasses import fields as dataclass_fields, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, List, Mapping, Sequence, Tuple

from .paths import ROOT, index_segment, key_segment, resolve

_SCALARS = (str, bool, int, float)


def to_tree(value: Any) -> Any:
    """
    Normalize a value to a plain JSON tree (dict, list, str, bool, int,
    float, None) via a serialize-then-parse round trip.

    The result is always a fresh, independently owned copy.
    """
    return json.loads(json.dumps(value, default=_to_plain, ensure_ascii=False))


def _to_plain(obj: Any) -> Any:
    """json.dumps hook for values that are not already JSON shaped."""
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: getattr(obj, f.name)
            for f in dataclass_fields(obj)
            if getattr(obj, f.name) is not None
        }
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    if isinstance(obj, Mapping):
        return dict(obj)
    if isinstance(obj, Sequence):
        return list(obj)
    if hasattr(obj, "__dict__"):
        return {k: v for k, v in vars(obj).items() if not k.startswith("_")}
    raise TypeError(f"Cannot canonicalize type: {type(obj)}")


def canonical_string(value: Any) -> str:
    """
    Canonical string form of a scalar leaf.

    Booleans become "true"/"false", numbers use the ECMAScript
    Number#toString form so that messages match the other notary ports.
    """
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return _format_number(value)
    return str(value)


def _format_number(value: float) -> str:
    """Format a float the way ECMAScript Number.prototype.toString does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr() yields the shortest round-tripping digits, same as ECMAScript
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * (-n) + digits

    e = n - 1
    exp = ("+" if e >= 0 else "-") + str(abs(e))
    if k == 1:
        return f"{sign}{digits}e{exp}"
    return f"{sign}{digits[0]}.{digits[1:]}e{exp}"


def is_skipped(value: Any) -> bool:
    """Absent and empty-string leaves are not covered by a signature."""
    return value is None or (isinstance(value, str) and value == "")


def walk(path: str, value: Any) -> Tuple[List[str], str]:
    """
    Walk a value, collecting (fields, message).

    Args:
        path: JsonPath of the value, usually "$"
        value: Request value (headers, params, body) in its natural order

    Returns:
        Ordered list of field paths and the concatenated message
    """
    fields: List[str] = []
    parts: List[str] = []
    _walk(path, value, fields, parts)
    return fields, "".join(parts)


def _walk(path: str, value: Any, fields: List[str], parts: List[str]) -> None:
    if is_skipped(value):
        return

    if isinstance(value, Enum):
        _walk(path, value.value, fields, parts)
    elif isinstance(value, _SCALARS):
        fields.append(path)
        parts.append(canonical_string(value))
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _walk(path + index_segment(index), item, fields, parts)
    elif isinstance(value, dict):
        for key, item in value.items():
            _walk(path + key_segment(key), item, fields, parts)
    else:
        # custom types are folded into a plain tree first
        _walk(path, to_tree(value), fields, parts)


def message_for(fields: List[str], tree: Any) -> str:
    """
    Rebuild the signed message from a stored field list.

    Each path is lower-cased before resolution. Unresolvable paths,
    skipped values and non-scalar targets contribute nothing.
    """
    parts = []
    for field in fields:
        found, value = resolve(tree, field.lower())
        if not found or is_skipped(value) or isinstance(value, (dict, list)):
            continue
        parts.append(canonical_string(value))
    return "".join(parts)


def canonicalize(value: Any, root: str = ROOT) -> Tuple[List[str], str]:
    """Canonicalize a value from the document root."""
    return walk(root, value)
