from modifier_datagen.recipes.builder import (
    DEFAULT_TOOLS_TAG,
    ModifierRecipeBuilder,
    RecipeVariant,
    default_tools,
)
from modifier_datagen.recipes.incremental import IncrementalModifierRecipeBuilder, ItemOutput
from modifier_datagen.recipes.standard import StandardModifierRecipeBuilder

RECIPE_KINDS: dict[str, type[ModifierRecipeBuilder]] = {
    "standard": StandardModifierRecipeBuilder,
    "incremental": IncrementalModifierRecipeBuilder,
}

__all__ = [
    "DEFAULT_TOOLS_TAG",
    "IncrementalModifierRecipeBuilder",
    "ItemOutput",
    "ModifierRecipeBuilder",
    "RECIPE_KINDS",
    "RecipeVariant",
    "StandardModifierRecipeBuilder",
    "default_tools",
]
