import re

from app.services.keys_service import generate_activation_key, normalize_activation_key


def test_key_format():
    key = generate_activation_key()
    assert re.fullmatch(r"[0-9A-F]{32}", key)


def test_keys_are_distinct():
    keys = {generate_activation_key() for _ in range(1000)}
    assert len(keys) == 1000


def test_normalize():
    assert normalize_activation_key("  abcd-ef01 ") == "ABCDEF01"
