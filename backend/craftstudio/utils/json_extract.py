"""Locate JSON objects inside free-form LLM output."""

from __future__ import annotations


def find_json_object(text: str) -> str | None:
    """Return the earliest-starting balanced ``{...}`` substring of *text*, or None.

    Braces inside JSON string literals are ignored, so prose, code fences and
    trailing commentary around the object do not affect the match. Quotes
    outside any open brace are prose and do not start a string. Single pass,
    linear in the length of *text*.
    """
    opens: list[int] = []
    best: tuple[int, int] | None = None
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == "{":
            opens.append(i)
        elif not opens:
            continue
        elif ch == '"':
            in_string = True
        elif ch == "}":
            start = opens.pop()
            if not opens:
                return text[start:i + 1]
            if best is None or start < best[0]:
                best = (start, i)
    if best is None:
        return None
    return text[best[0]:best[1] + 1]
