"""
Temporary credential generation.
"""

import secrets
import string

LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

MIN_PASSWORD_LENGTH = 12

_rng = secrets.SystemRandom()


def generate_temp_password(length: int = MIN_PASSWORD_LENGTH) -> str:
    """
    Random password with at least one lowercase, uppercase, digit and symbol.

    The four seed characters are shuffled with the rest so their positions
    carry no information.
    """
    length = max(length, MIN_PASSWORD_LENGTH)
    alphabet = LOWERCASE + UPPERCASE + DIGITS + SYMBOLS
    chars = [
        secrets.choice(LOWERCASE),
        secrets.choice(UPPERCASE),
        secrets.choice(DIGITS),
        secrets.choice(SYMBOLS),
    ]
    chars.extend(secrets.choice(alphabet) for _ in range(length - len(chars)))
    _rng.shuffle(chars)
    return "".join(chars)


def meets_complexity(password: str) -> bool:
    return (
        len(password) >= MIN_PASSWORD_LENGTH
        and any(c in LOWERCASE for c in password)
        and any(c in UPPERCASE for c in password)
        and any(c in DIGITS for c in password)
        and any(c in SYMBOLS for c in password)
    )
