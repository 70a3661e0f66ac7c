"""JSRepl — interactive path queries over a loaded JSON document.

Also provides the ``jsobjects-repl`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

from .dump import dumps
from .reader import parse, parse_text
from .traversal import traverse
from .values import JSArray, JSDictionary, JSObject


# ---------------------------------------------------------------------------
# JSRepl class (programmatic use)
# ---------------------------------------------------------------------------

class JSRepl:
    """Holds one parsed document and answers path queries against it.

    Usage::

        repl = JSRepl()
        repl.load("config.json")
        repl.query("servers[0].name")   # → JSString("alpha")

        repl.errors   # (line, column, message) of the failed load
        repl.reset()  # forget the document
    """

    def __init__(self) -> None:
        self.root: JSDictionary | None = None
        self.errors: list[tuple[int, int, str]] = []

    def _record_error(self, line: int, column: int, message: str) -> bool:
        self.errors.append((line, column, message))
        return False

    def load(self, path: str | os.PathLike[str]) -> bool:
        """Parse the file at *path*; returns whether a document was loaded."""
        self.errors = []
        self.root = parse(path, self._record_error)
        return self.root is not None

    def load_text(self, text: str) -> bool:
        self.errors = []
        self.root = parse_text(text, self._record_error)
        return self.root is not None

    def query(self, path: str) -> JSObject | None:
        return traverse(self.root, path)

    def reset(self) -> None:
        self.root = None
        self.errors = []


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _show_query(repl: JSRepl, path: str, dest: IO[str]) -> None:
    """Print the node at *path*, or a not-found marker."""
    node = repl.query(path)
    if node is None:
        print("  (not found)", file=dest)
        return
    dest.write(dumps(node))


def _show_keys(repl: JSRepl, path: str, dest: IO[str]) -> None:
    """List the keys (or index range) of the container at *path*."""
    node = repl.query(path)
    if isinstance(node, JSDictionary):
        if node.empty():
            print("  (no keys)", file=dest)
        for key in node:
            print(f"  {key}", file=dest)
    elif isinstance(node, JSArray):
        print(f"  [0..{node.count() - 1}]" if not node.empty() else "  (empty array)", file=dest)
    elif node is None:
        print("  (not found)", file=dest)
    else:
        print("  (not a container)", file=dest)


def _show_errors(repl: JSRepl, dest: IO[str]) -> None:
    if not repl.errors:
        print("  (no errors)", file=dest)
        return
    for line, column, message in repl.errors:
        print(f"  {line}:{column}: {message}", file=dest)


def _process_line(repl: JSRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line:
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    # ── Control commands ──────────────────────────────────────────────────
    if line == ":reset":
        repl.reset()
        return True

    if line == ":errors":
        _show_errors(repl, dest)
        return True

    if line == ":dump":
        if repl.root is None:
            print("  (no document loaded)", file=dest)
        else:
            dest.write(dumps(repl.root))
        return True

    if line == ":keys" or line.startswith(":keys "):
        _show_keys(repl, line[5:].strip(), dest)
        return True

    if line.startswith(":load "):
        filepath = line[6:].strip()
        if repl.load(filepath):
            print(f"  loaded {filepath}", file=dest)
        elif repl.errors:
            _show_errors(repl, dest)
        else:
            print(f"Error reading '{filepath}'", file=sys.stderr)
        return True

    # ── ? path ────────────────────────────────────────────────────────────
    if line == "?":
        _show_query(repl, "", dest)
        return True

    if line.startswith("? "):
        _show_query(repl, line[2:].strip(), dest)
        return True

    # ── Batch file ────────────────────────────────────────────────────────
    if line.startswith("?<< "):
        filepath = line[4:].strip()
        try:
            with open(filepath, encoding="utf-8") as fh:
                for file_line in fh:
                    if not _process_line(repl, file_line.rstrip("\n"), dest):
                        return False
        except OSError as exc:
            print(f"Error reading '{filepath}': {exc}", file=sys.stderr)
        return True

    print(f"  unknown command: {line}", file=dest)
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    """Interactive query shell (``jsobjects-repl [file]``)."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if argv is None:
        argv = sys.argv[1:]

    repl = JSRepl()
    dest: IO[str] = sys.stdout

    if argv:
        _process_line(repl, f":load {argv[0]}", dest)

    print("jsobjects REPL  (:q to quit  |  :load <file>  :dump  :keys [path]  :errors  :reset  |  ? <path>)")

    while True:
        try:
            line = input("JSON> ").strip()
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if not _process_line(repl, line, dest):
            break


if __name__ == "__main__":
    main()
