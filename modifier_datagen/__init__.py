"""Modifier recipe and salvage recipe datagen."""

from modifier_datagen.errors import (
    ConflictingStateError,
    DomainValidationError,
    IncompleteRecipeError,
    RecipeConfigError,
)
from modifier_datagen.modifiers import EntryMatch, ListMatch, ModifierEntry, ModifierMatch
from modifier_datagen.recipes import (
    IncrementalModifierRecipeBuilder,
    ModifierRecipeBuilder,
    RecipeVariant,
    StandardModifierRecipeBuilder,
    default_tools,
)

__all__ = [
    "ConflictingStateError",
    "DomainValidationError",
    "EntryMatch",
    "IncompleteRecipeError",
    "IncrementalModifierRecipeBuilder",
    "ListMatch",
    "ModifierEntry",
    "ModifierMatch",
    "ModifierRecipeBuilder",
    "RecipeConfigError",
    "RecipeVariant",
    "StandardModifierRecipeBuilder",
    "default_tools",
]
