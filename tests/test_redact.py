from __future__ import annotations

from ieltsplan._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "contents": [{"role": "user"}],
        "apiKey": "AIza-secret",
        "headers": {"Authorization": "Bearer abc", "x": "y"},
        "token": "kv-token",
    }

    redacted = redact_for_log(payload)
    assert redacted["apiKey"] == "<redacted>"
    assert redacted["token"] == "<redacted>"
    assert redacted["headers"]["Authorization"] == "<redacted>"
    assert redacted["headers"]["x"] == "y"
    assert redacted["contents"] == [{"role": "user"}]


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert redacted["value"].endswith("<590 more chars>")


def test_redact_for_log_bounds_large_collections() -> None:
    redacted = redact_for_log({"vocabulary": [{"name": str(i)} for i in range(50)]}, max_items=5)
    assert len(redacted["vocabulary"]) == 6
    assert redacted["vocabulary"][-1] == "<45 more items>"


def test_redact_for_log_shortens_free_text_fields() -> None:
    review = "Listening section 3 was hard, kept losing track of the speakers. " * 3
    payload = {
        "2025-01-01": {
            "tasks": [{"id": "1", "subject": "Listening", "content": "x" * 100}],
            "review": {"mood": "😐", "readingListening": review, "speakingWriting": "ok"},
        },
        "vocabulary": [{"name": "Cambridge 18", "note": "n" * 60}],
    }

    redacted = redact_for_log(payload, max_note=10)

    day = redacted["2025-01-01"]
    assert day["tasks"][0]["content"] == "x" * 10 + "…<90 more chars>"
    assert day["tasks"][0]["subject"] == "Listening"
    assert day["review"]["readingListening"].startswith("Listening ")
    assert day["review"]["readingListening"].endswith(f"<{len(review) - 10} more chars>")
    assert day["review"]["speakingWriting"] == "ok"
    assert day["review"]["mood"] == "😐"
    assert redacted["vocabulary"][0]["note"] == "n" * 10 + "…<50 more chars>"
    assert redacted["vocabulary"][0]["name"] == "Cambridge 18"
