import uuid


def generate_activation_key() -> str:
    return uuid.uuid4().hex.upper()


def normalize_activation_key(code: str) -> str:
    return code.strip().replace("-", "").upper()
