"""Helpers for safe debug logging.

Sync payloads carry the learner's free-text notes and daily reviews, and
the completion proxy handles API keys and bearer tokens. This module trims
and redacts values before they reach DEBUG/WARNING logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "key",
        "apikey",
        "api_key",
        "token",
        "authorization",
        "cookie",
        "kv_token",
        "gemini_api_key",
    }
)

# Planner task content, daily reviews, resource notes and chat text.
_FREE_TEXT_KEYS: frozenset[str] = frozenset(
    {
        "content",
        "note",
        "readinglistening",
        "speakingwriting",
        "text",
    }
)


def _shorten(value: str, limit: int) -> str:
    if len(value) > limit:
        return f"{value[:limit]}…<{len(value) - limit} more chars>"
    return value


def redact_for_log(
    value: Any,
    *,
    max_string: int = 256,
    max_note: int = 48,
    max_items: int = 20,
    _depth: int = 0,
) -> Any:
    """Return a redacted, size-bounded copy of *value* suitable for logs.

    Values under credential keys are replaced, free-text fields are cut to
    *max_note* characters, other strings to *max_string*, and mappings and
    sequences keep at most *max_items* entries.
    """
    if _depth > 20:
        return "<max-depth>"

    if value is None or isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, str):
        return _shorten(value, max_string)

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    limits = {"max_string": max_string, "max_note": max_note, "max_items": max_items, "_depth": _depth + 1}

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for index, (k, v) in enumerate(value.items()):
            if index >= max_items:
                redacted["…"] = f"<{len(value) - max_items} more keys>"
                break
            key = str(k)
            lowered = key.lower()
            if lowered in _SENSITIVE_VALUE_KEYS:
                redacted[key] = "<redacted>"
            elif lowered in _FREE_TEXT_KEYS and isinstance(v, str):
                redacted[key] = _shorten(v, max_note)
            else:
                redacted[key] = redact_for_log(v, **limits)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, bytearray):
        items = [redact_for_log(v, **limits) for v in value[:max_items]]
        if len(value) > max_items:
            items.append(f"<{len(value) - max_items} more items>")
        return items

    return repr(value)
