"""
Invite token generation and format checks.

Tokens are opaque, URL-safe alphanumeric strings. Generation uses the
secrets module and always mixes letters and digits.

Dependencies: secrets (stdlib)
System role: Self-enrollment link tokens
"""

import secrets
import string

TOKEN_ALPHABET = string.ascii_letters + string.digits
MIN_TOKEN_LENGTH = 10


def generate_invite_token(length: int = 24) -> str:
    """
    Generate a new invite token.

    Args:
        length: Token length (at least MIN_TOKEN_LENGTH)

    Returns:
        str: Random token containing at least one letter and one digit

    Raises:
        ValueError: If length is below MIN_TOKEN_LENGTH
    """
    if length < MIN_TOKEN_LENGTH:
        raise ValueError(f"Invite tokens need at least {MIN_TOKEN_LENGTH} characters")

    while True:
        token = "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))
        if any(c.isalpha() for c in token) and any(c.isdigit() for c in token):
            return token


def is_well_formed_token(token: str | None) -> bool:
    """Check token shape without touching the store."""
    return (
        token is not None
        and len(token) >= MIN_TOKEN_LENGTH
        and all(c in TOKEN_ALPHABET for c in token)
    )
