"""Modifier identity/level values and modifier requirement expressions.

Both are plain values with a `serialize`/`to_json` method; evaluating a
requirement against a tool is done by the crafting engine, not here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from recipekit.identifiers import Identifier


@dataclass(frozen=True)
class ModifierEntry:
    modifier: Identifier
    level: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "modifier", Identifier.parse(self.modifier))
        if isinstance(self.level, bool) or not isinstance(self.level, int):
            raise TypeError("ModifierEntry.level must be an int")
        if self.level < 1:
            raise ValueError(f"ModifierEntry.level must be >= 1 (got {self.level})")

    @classmethod
    def of(cls, modifier: "Identifier | str", level: int = 1) -> "ModifierEntry":
        return cls(modifier=Identifier.parse(modifier), level=level)

    def to_json(self) -> dict[str, Any]:
        return {"modifier": str(self.modifier), "level": self.level}


class ModifierMatch:
    """Boolean expression over the modifiers already on a tool."""

    ALWAYS: "ModifierMatch"

    def serialize(self) -> dict[str, Any]:
        raise NotImplementedError

    @staticmethod
    def entry(modifier: "Identifier | str", level: int = 1) -> "EntryMatch":
        return EntryMatch(ModifierEntry.of(modifier, level))

    @staticmethod
    def any_of(matches_needed: int, *options: "ModifierMatch") -> "ListMatch":
        return ListMatch(options=tuple(options), matches_needed=matches_needed)


@dataclass(frozen=True)
class EntryMatch(ModifierMatch):
    """Matches when the tool has the modifier at `level` or higher."""

    requirement: ModifierEntry

    def serialize(self) -> dict[str, Any]:
        return self.requirement.to_json()


@dataclass(frozen=True)
class ListMatch(ModifierMatch):
    """Matches when at least `matches_needed` of `options` match."""

    options: tuple[ModifierMatch, ...]
    matches_needed: int

    def __post_init__(self) -> None:
        if isinstance(self.matches_needed, bool) or not isinstance(self.matches_needed, int):
            raise TypeError("ListMatch.matches_needed must be an int")
        if self.matches_needed < 0 or self.matches_needed > len(self.options):
            raise ValueError(
                "ListMatch.matches_needed must be between 0 and the number of options "
                f"(got {self.matches_needed}, options={len(self.options)})"
            )

    def serialize(self) -> dict[str, Any]:
        return {
            "options": [option.serialize() for option in self.options],
            "matches_needed": self.matches_needed,
        }


ModifierMatch.ALWAYS = ListMatch(options=(), matches_needed=0)
