from __future__ import annotations

import re
from typing import Dict, Final, Mapping

from . import (
    FieldRules,
    MaxLength,
    MinLength,
    NotBlank,
    Pattern,
    Predicate,
    Required,
)


PASSWORD_MIN_LENGTH: Final[int] = 8
PASSWORD_MAX_LENGTH: Final[int] = 20

INVALID_EMAIL: Final[str] = "Invalid email format"

# WHATWG "valid e-mail address" shape.
_EMAIL: Final[re.Pattern[str]] = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

_LOWERCASE: Final[re.Pattern[str]] = re.compile(r"[a-z]")
_UPPERCASE: Final[re.Pattern[str]] = re.compile(r"[A-Z]")
_DIGIT: Final[re.Pattern[str]] = re.compile(r"[0-9]")
_SYMBOL: Final[re.Pattern[str]] = re.compile(r"""[!@#$%^&*()_\-+={}\[\]:;"'|,.<>/?\\]""")


def email_domain_has_dot(value: str, _values: Mapping[str, str]) -> bool:
    """
    The part after the first '@' must contain a '.'.
    Weaker than the format check on purpose; kept as-is.
    """
    if not value:
        return False
    parts = value.split("@")
    domain = parts[1] if len(parts) > 1 else ""
    return "." in domain


CREDENTIALS_SCHEMA: Dict[str, FieldRules] = {
    "email": FieldRules(
        transform=str.strip,
        rules=(
            Required("Email is required"),
            Pattern(_EMAIL, INVALID_EMAIL),
            Predicate("is-domain-valid", email_domain_has_dot, INVALID_EMAIL),
        ),
    ),
    "password": FieldRules(
        rules=(
            Required("Password is required"),
            MinLength(PASSWORD_MIN_LENGTH, f"Password must be at least {PASSWORD_MIN_LENGTH} characters"),
            MaxLength(PASSWORD_MAX_LENGTH, f"Password cannot be longer than {PASSWORD_MAX_LENGTH} characters"),
            NotBlank("Password cannot be empty or whitespace only"),
            Pattern(_LOWERCASE, "Password must include at least one lowercase letter"),
            Pattern(_UPPERCASE, "Password must include at least one uppercase letter"),
            Pattern(_DIGIT, "Password must include at least one number"),
            Pattern(_SYMBOL, "Password must include at least one special character"),
        ),
    ),
}
