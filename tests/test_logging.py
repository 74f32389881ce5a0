from __future__ import annotations

from fruitbar.observability.logging import REDACTED, redact_sensitive


def test_sensitive_keys_are_redacted() -> None:
    event = {"event": "user.updated", "password": "fruit1234", "cvv": "123", "user_id": 5}
    out = redact_sensitive()(None, "info", event)
    assert out == {"event": "user.updated", "password": REDACTED, "cvv": REDACTED, "user_id": 5}


def test_custom_key_set() -> None:
    out = redact_sensitive(["zipcode"])(None, "info", {"zipcode": "12345", "password": "x"})
    assert out == {"zipcode": REDACTED, "password": "x"}
