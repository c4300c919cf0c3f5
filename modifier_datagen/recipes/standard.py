from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from recipekit.identifiers import Identifier, ItemTag
from recipekit.ingredients import Ingredient, SizedIngredient

from modifier_datagen.errors import DomainValidationError, IncompleteRecipeError
from modifier_datagen.modifiers import ModifierEntry
from modifier_datagen.recipes.builder import ModifierRecipeBuilder, RecipeVariant, require_int


@dataclass(eq=False)
class StandardModifierRecipeBuilder(ModifierRecipeBuilder):
    """Modifier recipe consuming a fixed list of (possibly stacked) item inputs."""

    inputs: list[SizedIngredient] = field(default_factory=list, init=False)

    recipe_type = "tconstruct:modifier"
    salvage_type = "tconstruct:modifier_salvage"

    @classmethod
    def modifier(cls, modifier: ModifierEntry | Identifier | str, level: int = 1) -> "StandardModifierRecipeBuilder":
        if isinstance(modifier, ModifierEntry):
            return cls(modifier)
        return cls(ModifierEntry.of(modifier, level))

    def add_input(
        self, ingredient: Ingredient | ItemTag | Identifier | str, amount: int = 1
    ) -> "StandardModifierRecipeBuilder":
        """Adds an input; tags and item ids are wrapped into an ingredient."""
        require_int("amount", amount)
        if amount < 1:
            raise DomainValidationError("amount", amount, "Amount must be at least 1")
        if isinstance(ingredient, ItemTag):
            ingredient = Ingredient.from_tag(ingredient)
        elif not isinstance(ingredient, Ingredient):
            ingredient = Ingredient.of_items([ingredient])
        self.inputs.append(SizedIngredient(ingredient=ingredient, amount=amount))
        return self

    def _check_buildable(self, variant: RecipeVariant) -> None:
        if variant is RecipeVariant.APPLY and not self.inputs:
            raise IncompleteRecipeError(
                f"Modifier recipe for {self.result.modifier} must have at least 1 input"
            )

    def _write_family_fields(self, variant: RecipeVariant, document: dict[str, Any]) -> None:
        if variant is RecipeVariant.APPLY:
            document["inputs"] = [sized.serialize() for sized in self.inputs]
