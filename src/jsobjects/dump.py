"""Indented text rendering of a value tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO, Iterator

from .values import JSArray, JSDictionary, JSObject, JSType


INDENT_UNIT = 4

# Control characters become "\" + two lowercase hex digits, not the
# named JSON escapes.
_ESCAPES: dict[int, str] = {code: f"\\{code:02x}" for code in range(32)}
_ESCAPES[ord('"')] = '\\"'
_ESCAPES[ord("\\")] = "\\\\"


def quote_string(text: str) -> str:
    """Escape *text* for use between double quotes."""
    return text.translate(_ESCAPES)


def dumps(node: JSObject, indent: int = 0, indent_unit: int = INDENT_UNIT) -> str:
    """Render *node* as indented text followed by a single newline.

    *indent* is the nesting level the output starts at.
    """
    parts: list[str] = []
    if not isinstance(node, (JSArray, JSDictionary)):
        parts.append(_pad(indent, indent_unit))
    _render(node, parts, indent, indent_unit)
    parts.append("\n")
    return "".join(parts)


def dump(
    node: JSObject,
    fp: IO[str] | None,
    indent: int = 0,
    indent_unit: int = INDENT_UNIT,
) -> None:
    """Write ``dumps(node)`` to the text stream *fp* (no-op for ``None``)."""
    if fp is None:
        return
    fp.write(dumps(node, indent, indent_unit))


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _pad(level: int, unit: int) -> str:
    return " " * (level * unit)


def _literal(node: JSObject) -> str:
    """Text of a scalar or an empty container."""
    tag = node.type_tag()

    if tag is JSType.ARRAY:
        return "[ ]"
    if tag is JSType.DICTIONARY:
        return "{ }"
    if tag is JSType.INTEGER:
        return str(node.value)
    if tag is JSType.REAL:
        return repr(node.value)
    if tag is JSType.STRING:
        return f'"{quote_string(node.value)}"'
    if tag is JSType.BOOLEAN:
        return "true" if node.value else "false"
    if tag is JSType.NULL:
        return "null"
    raise TypeError(f"cannot dump {type(node).__name__}")


@dataclass(slots=True)
class _Frame:
    """An open, non-empty container waiting for its next child."""

    container: JSArray | JSDictionary
    level: int
    children: Iterator
    started: bool = False


def _render(node: JSObject, parts: list[str], level: int, unit: int) -> None:
    """Append *node* to *parts* without leading indentation.

    Containers are walked with an explicit stack, so nesting depth is only
    bounded by memory.
    """
    stack: list[_Frame] = []

    while True:
        if isinstance(node, JSArray) and not node.empty():
            parts.append("[\n")
            stack.append(_Frame(node, level, iter(node)))
        elif isinstance(node, JSDictionary) and not node.empty():
            parts.append("{\n")
            stack.append(_Frame(node, level, iter(node.items())))
        else:
            parts.append(_literal(node))

        # Move to the next child of the innermost open container, closing
        # every container that has run out.
        while stack:
            frame = stack[-1]
            child = next(frame.children, None)
            if child is None:
                stack.pop()
                parts.append("\n")
                parts.append(_pad(frame.level, unit))
                parts.append("]" if isinstance(frame.container, JSArray) else "}")
                continue

            if frame.started:
                parts.append(",\n")
            frame.started = True
            parts.append(_pad(frame.level + 1, unit))
            if isinstance(frame.container, JSDictionary):
                key, child = child
                parts.append(f'"{quote_string(key)}" : ')
            node = child
            level = frame.level + 1
            break
        else:
            return
