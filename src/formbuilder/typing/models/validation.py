"""Validation outcome of a whole form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass(frozen=True)
class Valid:
    """Every rule of every field passed."""

    is_valid: ClassVar[bool] = True

    @property
    def errors(self) -> list[str]:
        """Return the (empty) error list."""
        return []

    def __bool__(self) -> bool:
        """Return True, a valid form is truthy."""
        return True


@dataclass(frozen=True)
class Invalid:
    """At least one rule failed; `errors` follows fieldset then field order."""

    errors: list[str] = field(default_factory=list)
    is_valid: ClassVar[bool] = False

    def __bool__(self) -> bool:
        """Return False, an invalid form is falsy."""
        return False


ValidationResult = Valid | Invalid
