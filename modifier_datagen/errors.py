from __future__ import annotations

from typing import Any


class RecipeConfigError(Exception):
    """Base class for recipe builder configuration errors."""


class DomainValidationError(RecipeConfigError, ValueError):
    """A single field was given a value outside its allowed range."""

    def __init__(self, field: str, value: Any, message: str) -> None:
        super().__init__(f"{message} ({field}={value!r})")
        self.field = field
        self.value = value


class ConflictingStateError(RecipeConfigError):
    """Upgrade slots and ability slots cannot both be non-zero."""

    def __init__(self, upgrade_slots: int, ability_slots: int) -> None:
        super().__init__(
            "Cannot set both upgrade and ability slots "
            f"(upgrade_slots={upgrade_slots}, ability_slots={ability_slots})"
        )
        self.upgrade_slots = upgrade_slots
        self.ability_slots = ability_slots


class IncompleteRecipeError(RecipeConfigError):
    """A recipe family is missing something it needs before it can be built."""
