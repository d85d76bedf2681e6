"""
Addressable paths.

A path is the root sentinel "$" followed by key segments "['key']" and
index segments "[n]", e.g. "$['body']['evses'][0]['id']". Only this
bracket notation is understood; anything else is unresolvable.
"""

import logging
import re
from typing import Any, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

ROOT = "$"

_SEGMENT = re.compile(r"\['(.*?)'\]|\[(\d+)\]", re.DOTALL)

Segment = Union[str, int]


def key_segment(key: Any) -> str:
    return f"['{key}']"


def index_segment(index: int) -> str:
    return f"[{index}]"


def parse_path(path: str) -> Optional[List[Segment]]:
    """
    Split a path into key (str) and index (int) segments.

    Returns None if the path is not in bracket notation.
    """
    if not isinstance(path, str) or not path.startswith(ROOT):
        return None

    segments: List[Segment] = []
    pos = len(ROOT)
    while pos < len(path):
        match = _SEGMENT.match(path, pos)
        if match is None:
            return None
        key, index = match.groups()
        segments.append(key if key is not None else int(index))
        pos = match.end()
    return segments


def resolve(tree: Any, path: str) -> Tuple[bool, Any]:
    """
    Look up a path in a plain tree.

    Returns:
        (found, value); value is None when not found
    """
    segments = parse_path(path)
    if segments is None:
        return False, None

    node = tree
    for segment in segments:
        if isinstance(segment, int):
            if not isinstance(node, list) or segment >= len(node):
                return False, None
            node = node[segment]
        else:
            if not isinstance(node, dict) or segment not in node:
                return False, None
            node = node[segment]
    return True, node


def assign(tree: Any, path: str, value: Any) -> bool:
    """
    Set the value at a path inside a plain tree, in place.

    Missing intermediate containers are created (a list when the next
    segment is an index, a dict otherwise). Lists are padded with None.

    Returns:
        True if the value was written, False if the path does not fit
        the shape of the tree
    """
    segments = parse_path(path)
    if not segments:
        logger.debug("Cannot assign to path %r", path)
        return False

    node = tree
    for segment, following in zip(segments, segments[1:] + [None]):
        if following is None:
            return _set_child(node, segment, value)

        child = _get_child(node, segment)
        if not isinstance(child, (dict, list)):
            child = [] if isinstance(following, int) else {}
            if not _set_child(node, segment, child):
                return False
        node = child
    return False


def _get_child(node: Any, segment: Segment) -> Any:
    if isinstance(segment, int):
        if isinstance(node, list) and segment < len(node):
            return node[segment]
        return None
    if isinstance(node, dict):
        return node.get(segment)
    return None


def _set_child(node: Any, segment: Segment, value: Any) -> bool:
    if isinstance(segment, int):
        if not isinstance(node, list):
            logger.debug("Index segment [%d] applied to %s", segment, type(node).__name__)
            return False
        if segment >= len(node):
            node.extend([None] * (segment + 1 - len(node)))
        node[segment] = value
        return True
    if not isinstance(node, dict):
        logger.debug("Key segment %r applied to %s", segment, type(node).__name__)
        return False
    node[segment] = value
    return True
