import secrets


def generate_state() -> str:
    return secrets.token_urlsafe(32)
