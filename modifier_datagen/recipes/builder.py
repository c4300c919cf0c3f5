"""Shared builder for modifier recipes and their salvage recipes.

Every setter validates before it mutates, so a builder that made it through
its setters can always be serialized. Two document shapes come out of the
same state: the apply recipe (`build`) and the salvage recipe
(`build_salvage`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, ClassVar

from recipekit.identifiers import Identifier, ItemTag
from recipekit.ingredients import Ingredient
from recipekit.sinks import DocumentSink

from modifier_datagen.errors import ConflictingStateError, DomainValidationError
from modifier_datagen.modifiers import ModifierEntry, ModifierMatch

logger = logging.getLogger(__name__)

DEFAULT_TOOLS_TAG = "tconstruct:modifiable"


def require_int(field_name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field_name} must be an int (type={type(value).__name__})")
    return value


@lru_cache(maxsize=None)
def default_tools() -> Ingredient:
    """Any modifiable tool; built on first use and shared for the process."""
    return Ingredient.from_tag(ItemTag.of(DEFAULT_TOOLS_TAG))


class RecipeVariant(str, Enum):
    APPLY = "apply"
    SALVAGE = "salvage"


@dataclass(eq=False)
class ModifierRecipeBuilder:
    result: ModifierEntry
    tools: Ingredient = field(default=Ingredient.EMPTY, init=False)  # type: ignore[attr-defined]
    upgrade_slots: int = field(default=0, init=False)
    ability_slots: int = field(default=0, init=False)
    max_level: int = field(default=0, init=False)
    # apply recipe
    requirements: ModifierMatch = field(default=ModifierMatch.ALWAYS, init=False)
    requirements_error: str | None = field(default=None, init=False)
    # salvage recipe
    salvage_min_level: int = field(default=1, init=False)
    salvage_max_level: int = field(default=0, init=False)

    recipe_type: ClassVar[str | None] = None
    salvage_type: ClassVar[str | None] = None

    def __post_init__(self) -> None:
        if not isinstance(self.result, ModifierEntry):
            raise TypeError(
                f"ModifierRecipeBuilder.result must be a ModifierEntry (type={type(self.result).__name__})"
            )

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "result" and "result" in self.__dict__:
            raise AttributeError("ModifierRecipeBuilder.result is fixed at construction")
        super().__setattr__(name, value)

    def set_tools(self, tools: Ingredient | ItemTag) -> "ModifierRecipeBuilder":
        """Sets the tools this modifier can be applied to (an ingredient or an item tag)."""
        if isinstance(tools, ItemTag):
            return self.set_tools(Ingredient.from_tag(tools))
        if not isinstance(tools, Ingredient):
            raise TypeError(f"tools must be an Ingredient or ItemTag (type={type(tools).__name__})")
        self.tools = tools
        return self

    def set_requirements(self, requirements: ModifierMatch) -> "ModifierRecipeBuilder":
        if not isinstance(requirements, ModifierMatch):
            raise TypeError(
                f"requirements must be a ModifierMatch (type={type(requirements).__name__})"
            )
        self.requirements = requirements
        return self

    def set_requirements_error(self, requirements_error: str) -> "ModifierRecipeBuilder":
        """Sets the lang key shown when the requirements do not match."""
        self.requirements_error = requirements_error
        return self

    def set_min_salvage_level(self, level: int) -> "ModifierRecipeBuilder":
        require_int("salvage_min_level", level)
        if level < 1:
            raise DomainValidationError(
                "salvage_min_level", level, "Min level must be greater than 0"
            )
        self.salvage_min_level = level
        return self

    def set_salvage_level_range(self, min_level: int, max_level: int) -> "ModifierRecipeBuilder":
        """Sets the salvage level range.

        The min level is stored before the max level is checked, so a failing max
        still leaves the new min level in place.
        """
        require_int("salvage_max_level", max_level)
        self.set_min_salvage_level(min_level)
        if max_level < min_level:
            raise DomainValidationError(
                "salvage_max_level", max_level, "Max level must be greater than or equal to min level"
            )
        self.salvage_max_level = max_level
        return self

    def set_max_level(self, level: int) -> "ModifierRecipeBuilder":
        """Caps the modifier level; applies to both the recipe and its salvage."""
        require_int("max_level", level)
        if level < 1:
            raise DomainValidationError("max_level", level, "Max level must be greater than 0")
        self.max_level = level
        return self

    # slots

    def set_upgrade_slots(self, slots: int) -> "ModifierRecipeBuilder":
        require_int("upgrade_slots", slots)
        if slots < 0:
            raise DomainValidationError("upgrade_slots", slots, "Slots must be positive")
        if self.ability_slots != 0:
            raise ConflictingStateError(slots, self.ability_slots)
        self.upgrade_slots = slots
        return self

    def set_ability_slots(self, slots: int) -> "ModifierRecipeBuilder":
        require_int("ability_slots", slots)
        if slots < 0:
            raise DomainValidationError("ability_slots", slots, "Slots must be positive")
        if self.upgrade_slots != 0:
            raise ConflictingStateError(self.upgrade_slots, slots)
        self.ability_slots = slots
        return self

    # serialization

    def _tools_json(self) -> Any:
        if self.tools == Ingredient.EMPTY:  # type: ignore[attr-defined]
            return default_tools().serialize()
        return self.tools.serialize()

    def _write_slots(self, document: dict[str, Any]) -> None:
        if self.upgrade_slots != 0:
            document["upgrade_slots"] = self.upgrade_slots
        if self.ability_slots != 0:
            document["ability_slots"] = self.ability_slots

    def _serialize_apply(self, document: dict[str, Any]) -> None:
        document["tools"] = self._tools_json()
        if self.requirements != ModifierMatch.ALWAYS:
            requirements = dict(self.requirements.serialize())
            if self.requirements_error is None:
                logger.warning(
                    "Recipe for %s has requirements but no requirements error key",
                    self.result.modifier,
                )
            else:
                requirements["error"] = self.requirements_error
            document["requirements"] = requirements
        document["result"] = self.result.to_json()
        if self.max_level != 0:
            document["max_level"] = self.max_level
        self._write_slots(document)

    def _serialize_salvage(self, document: dict[str, Any]) -> None:
        document["tools"] = self._tools_json()
        document["modifier"] = str(self.result.modifier)
        document["min_level"] = self.salvage_min_level
        if self.salvage_max_level != 0:
            document["max_level"] = self.salvage_max_level
        self._write_slots(document)

    def _write_family_fields(self, variant: RecipeVariant, document: dict[str, Any]) -> None:
        """Hook for recipe families to append their own fields."""

    def _check_buildable(self, variant: RecipeVariant) -> None:
        """Hook for recipe families with fields that can only be checked at build time."""

    def serialize(self, variant: RecipeVariant) -> dict[str, Any]:
        variant = RecipeVariant(variant)
        self._check_buildable(variant)

        document: dict[str, Any] = {}
        recipe_type = self.recipe_type if variant is RecipeVariant.APPLY else self.salvage_type
        if recipe_type:
            document["type"] = recipe_type

        if variant is RecipeVariant.APPLY:
            self._serialize_apply(document)
        else:
            self._serialize_salvage(document)
        self._write_family_fields(variant, document)
        return document

    # terminal operations

    def build(
        self, sink: DocumentSink, identifier: Identifier | str | None = None
    ) -> "ModifierRecipeBuilder":
        """Sends the apply recipe to `sink`, under the modifier's own id by default."""
        recipe_id = self.result.modifier if identifier is None else Identifier.parse(identifier)
        document = self.serialize(RecipeVariant.APPLY)
        sink.accept(recipe_id, document)
        logger.debug("Built modifier recipe %s", recipe_id)
        return self

    def build_salvage(self, sink: DocumentSink, identifier: Identifier | str) -> "ModifierRecipeBuilder":
        """Sends the salvage recipe to `sink`; one document per call."""
        recipe_id = Identifier.parse(identifier)
        document = self.serialize(RecipeVariant.SALVAGE)
        sink.accept(recipe_id, document)
        logger.debug("Built salvage recipe %s", recipe_id)
        return self
