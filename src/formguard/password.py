"""Password strength checklist shown beside new-password fields.

This is advisory feedback while typing; blocking rules belong in the field's
rule descriptor (e.g. ``minLength``).
"""

import re
from dataclasses import dataclass

MIN_PASSWORD_LENGTH = 8

_DIGIT = re.compile(r"\d")
_LETTER = re.compile(r"[a-zA-Z]")


@dataclass(frozen=True)
class PasswordChecks:
    length: bool
    has_letter: bool
    has_number: bool

    @property
    def strength(self) -> int:
        """Number of satisfied checks, 0 to 3."""
        return sum((self.length, self.has_letter, self.has_number))

    @property
    def level(self) -> str:
        """Meter level: "none", "weak", "fair" or "strong"."""
        return ("none", "weak", "fair", "strong")[self.strength]

    def checklist(self) -> list[tuple[str, bool]]:
        return [
            (f"At least {MIN_PASSWORD_LENGTH} characters", self.length),
            ("Contains a letter", self.has_letter),
            ("Contains a number", self.has_number),
        ]


def password_checks(value: str) -> PasswordChecks:
    return PasswordChecks(
        length=len(value) >= MIN_PASSWORD_LENGTH,
        has_letter=bool(_LETTER.search(value)),
        has_number=bool(_DIGIT.search(value)),
    )
