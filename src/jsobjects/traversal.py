"""Path traversal over a value tree.

A path is a sequence of segments read left to right::

    a.b[1]        key "a", key "b", index 1
    .a            a leading "." is allowed
    [0x10]        indices accept 0x / 0o / 0b prefixes
    a\\.b          "\\." and "\\[" keep the character inside the key

A bare key (no leading ".") is only allowed as the first segment.
Traversal is read-only and never raises: any mismatch returns ``None``.
"""

from __future__ import annotations

import re

from .values import JSArray, JSDictionary, JSObject


_INDEX_RE = re.compile(r"\[(0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+|[0-9]+)\]")
_KEY_STOPS = ".["


def traverse(root: JSObject | None, path: str) -> JSObject | None:
    """Resolve *path* against *root* and return the node, or ``None``."""
    if root is None:
        return None

    node = root
    pos = 0
    end = len(path)

    while pos < end:
        ch = path[pos]

        if ch == "[":
            if not isinstance(node, JSArray):
                return None
            match = _INDEX_RE.match(path, pos)
            if match is None:
                return None
            node = node.get(parse_index(match.group(1)))
            if node is None:
                return None
            pos = match.end()

        elif ch == "." or pos == 0:
            if not isinstance(node, JSDictionary):
                return None
            if ch == ".":
                pos += 1
            key, pos = scan_key(path, pos)
            node = node.get(key)
            if node is None:
                return None

        else:
            return None

    return node


def scan_key(path: str, start: int) -> tuple[str, int]:
    """Read one key from *path* at *start*.

    Returns the unescaped key and the position of the terminating
    ``.``/``[`` (or the end of the path).
    """
    chars: list[str] = []
    pos = start
    end = len(path)
    while pos < end:
        ch = path[pos]
        if ch in _KEY_STOPS:
            break
        if ch == "\\" and pos + 1 < end and path[pos + 1] in _KEY_STOPS:
            chars.append(path[pos + 1])
            pos += 2
            continue
        chars.append(ch)
        pos += 1
    return "".join(chars), pos


def parse_index(text: str) -> int:
    """Convert the digits of an index segment to an int.

    ``0x``/``0o``/``0b`` select the base; anything else is decimal,
    leading zeros included.
    """
    if len(text) > 1 and text[0] == "0" and text[1] in "xXoObB":
        return int(text, 0)
    return int(text, 10)
