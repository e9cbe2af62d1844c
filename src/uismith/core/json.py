"""Fast, tolerant JSON parsing and deterministic encoding."""

from typing import Any
import json
import sys

import msgspec
import orjson
from json_repair import repair_json


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def extract_json_boundaries(text: str) -> str | None:
    """
    Cut the outermost JSON object out of free text.

    Markdown code fences are removed first, so a specification pasted
    from a chat transcript or a README still parses.

    Returns:
        The candidate JSON text, or None if there is no object in it
    """
    working_text = text

    if "```" in working_text:
        if "```json" in working_text:
            start_marker = working_text.find("```json") + 7
        else:
            start_marker = working_text.find("```") + 3

        end_marker = working_text.find("```", start_marker)
        if end_marker != -1:
            working_text = working_text[start_marker:end_marker].strip()

    start = working_text.find("{")
    end = working_text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None

    return working_text[start : end + 1]


def _expect_dict(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        raise JSONParseError(f"Expected dict, got {type(result).__name__}")
    return result


def extract_json(text: str, repair: bool = True) -> dict[str, Any]:
    """
    Extract and parse a JSON object from text.

    Args:
        text: Text containing JSON
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Parsed JSON dictionary

    Raises:
        JSONParseError: If parsing fails
    """
    json_str = extract_json_boundaries(text.strip())
    if json_str is None:
        raise JSONParseError("No JSON object found in text")

    # msgspec first (fastest, strict)
    try:
        return _expect_dict(msgspec.json.decode(json_str.encode("utf-8")))
    except msgspec.DecodeError as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e) from e

    # Last resort: json_repair
    try:
        repaired = repair_json(json_str, return_objects=True)
    except (ValueError, TypeError) as repair_error:
        raise JSONParseError(f"JSON repair failed: {repair_error}", repair_error) from repair_error
    return _expect_dict(repaired)


def safe_json_dumps(obj: Any, indent: int | None = None, sort_keys: bool = False) -> str:
    """
    Encode object to JSON string using the fastest library that can.

    orjson handles compact and two-space output; anything else (other
    indents, integers outside 64-bit range) falls through to msgspec and
    finally the standard library.

    Args:
        obj: Object to encode
        indent: None/0 for compact output, otherwise spaces per level
        sort_keys: Emit object keys in sorted order

    Returns:
        JSON string
    """
    if indent in (None, 0, 2):
        option = 0
        if indent == 2:
            option |= orjson.OPT_INDENT_2
        if sort_keys:
            option |= orjson.OPT_SORT_KEYS
        try:
            return orjson.dumps(obj, option=option).decode("utf-8")
        except TypeError:
            pass

    if not indent and not sort_keys:
        try:
            return msgspec.json.encode(obj).decode("utf-8")
        except (TypeError, ValueError, OverflowError):
            pass

    return json.dumps(obj, indent=indent or None, sort_keys=sort_keys, ensure_ascii=False)


def validate_json_size(data: str, max_size: int, name: str = "JSON") -> None:
    """
    Reject oversized JSON payloads before parsing them.

    Raises:
        JSONParseError: If size exceeds limit
    """
    size = sys.getsizeof(data)
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = 20, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth to prevent stack overflow.

    Raises:
        JSONParseError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise JSONParseError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)
