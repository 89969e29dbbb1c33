"""Password rules and strength scoring shared by sign-up and the strength meter."""

from __future__ import annotations

import re
from dataclasses import dataclass

from coachhub.core.constants import PASSWORD_MIN_LENGTH

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"\d")
_SPECIAL = re.compile(r"[@$!%*?&]")


@dataclass(frozen=True)
class PasswordStrength:
    score: int
    feedback: str
    color: str


def password_rule_errors(password: str) -> list[str]:
    """Return every rule the password breaks (empty list means it is acceptable)."""
    errors: list[str] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if not _LOWER.search(password):
        errors.append("Password must contain at least one lowercase letter")
    if not _UPPER.search(password):
        errors.append("Password must contain at least one uppercase letter")
    if not _DIGIT.search(password):
        errors.append("Password must contain at least one number")
    return errors


def password_strength(password: str) -> PasswordStrength:
    """Score 0-6: two length steps plus one point per character class present."""
    score = 0
    if len(password) >= 8:
        score += 1
    if len(password) >= 12:
        score += 1
    for pattern in (_LOWER, _UPPER, _DIGIT, _SPECIAL):
        if pattern.search(password):
            score += 1

    if score <= 2:
        return PasswordStrength(score, "Weak", "#EF4444")
    if score <= 4:
        return PasswordStrength(score, "Fair", "#F59E0B")
    if score <= 5:
        return PasswordStrength(score, "Good", "#3B82F6")
    return PasswordStrength(score, "Strong", "#10B981")
