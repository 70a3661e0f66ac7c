"""jsobjects — JSON value tree with path traversal and indented dumping."""

from .values import (
    JSArray,
    JSBoolean,
    JSContainer,
    JSDictionary,
    JSInteger,
    JSNull,
    JSObject,
    JSReal,
    JSString,
    JSType,
    Value,
    cast_to,
    new_array,
    new_boolean,
    new_dictionary,
    new_integer,
    new_null,
    new_real,
    new_string,
)
from .traversal import traverse
from .dump import dump, dumps, quote_string
from .builder import BuildState, ErrorPredicate, TreeBuilder, continue_on_error, stop_on_error
from .reader import ReaderOptions, parse, parse_text
from .convert import from_python, to_python
from .errors import BuilderContractError, JSObjectsError, OwnershipError
from .repl import JSRepl

__all__ = [
    "JSArray",
    "JSBoolean",
    "JSContainer",
    "JSDictionary",
    "JSInteger",
    "JSNull",
    "JSObject",
    "JSReal",
    "JSString",
    "JSType",
    "Value",
    "cast_to",
    "new_array",
    "new_boolean",
    "new_dictionary",
    "new_integer",
    "new_null",
    "new_real",
    "new_string",
    "traverse",
    "dump",
    "dumps",
    "quote_string",
    "BuildState",
    "ErrorPredicate",
    "TreeBuilder",
    "continue_on_error",
    "stop_on_error",
    "ReaderOptions",
    "parse",
    "parse_text",
    "from_python",
    "to_python",
    "BuilderContractError",
    "JSObjectsError",
    "OwnershipError",
    "JSRepl",
]
