"""
Pulls a JSON object out of free-form model output.

Models wrap their answer in prose or code fences despite instructions, so the
first object is located with a bracket-depth scan instead of trusting the
whole text. Braces inside JSON strings do not count toward the depth.
"""
import json


def find_json_object(text: str) -> str | None:
    """Return the first balanced {...} span in text, or None."""
    if not text:
        return None

    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        ch = text[i]

        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]

    # Opened but never closed
    return None


def parse_json_object(text: str) -> dict | None:
    """Parse the first JSON object in text. None when absent or invalid."""
    span = find_json_object(text)
    if span is None:
        return None

    try:
        parsed = json.loads(span)
    except json.JSONDecodeError:
        return None

    return parsed if isinstance(parsed, dict) else None
