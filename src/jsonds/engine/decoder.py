"""Record decoder: one physical line in, one field mapping out."""

import json
from typing import Any

from jsonds.contracts import DecodeError, JsonValue


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def decode_line(line: str) -> dict[str, JsonValue]:
    """Decode one line as a JSON object.

    Decoding is strict: NaN/Infinity literals are rejected, and the top
    level must be an object. A trailing newline is ignored; a blank line
    is not a JSON value and fails like any other malformed line, as does
    nesting deeper than the interpreter recursion limit.

    Raises:
        DecodeError: If the line is not a single JSON object.
    """
    text = line.rstrip("\r\n")
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:  # JSONDecodeError or a rejected constant
        raise DecodeError(f"Invalid JSON: {e}", line=text) from e
    except RecursionError as e:
        raise DecodeError("Invalid JSON: nesting too deep", line=text) from e

    match value:
        case dict():
            return value
        case _:
            raise DecodeError(
                f"Expected JSON object, got {type(value).__name__}", line=text
            )
