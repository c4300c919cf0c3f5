from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from recipekit.identifiers import Identifier, ItemTag
from recipekit.ingredients import Ingredient

from modifier_datagen.errors import DomainValidationError, IncompleteRecipeError
from modifier_datagen.modifiers import ModifierEntry
from modifier_datagen.recipes.builder import ModifierRecipeBuilder, RecipeVariant, require_int


@dataclass(frozen=True)
class ItemOutput:
    item: Identifier
    count: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "item", Identifier.parse(self.item))
        if isinstance(self.count, bool) or not isinstance(self.count, int) or self.count < 1:
            raise ValueError(f"ItemOutput.count must be a positive int (got {self.count!r})")

    def serialize(self) -> Any:
        if self.count == 1:
            return str(self.item)
        return {"item": str(self.item), "count": self.count}


@dataclass(eq=False)
class IncrementalModifierRecipeBuilder(ModifierRecipeBuilder):
    """Modifier recipe applied a bit at a time.

    Each item used adds `amount_per_item` progress; the level is gained once
    `needed_per_level` progress has been added. Any excess from the last item
    can be returned as `leftover`.
    """

    input: Ingredient = field(default=Ingredient.EMPTY, init=False)  # type: ignore[attr-defined]
    amount_per_item: int = field(default=0, init=False)
    needed_per_level: int = field(default=0, init=False)
    leftover: ItemOutput | None = field(default=None, init=False)

    recipe_type = "tconstruct:incremental_modifier"
    salvage_type = "tconstruct:incremental_modifier_salvage"

    @classmethod
    def modifier(cls, modifier: ModifierEntry | Identifier | str, level: int = 1) -> "IncrementalModifierRecipeBuilder":
        if isinstance(modifier, ModifierEntry):
            return cls(modifier)
        return cls(ModifierEntry.of(modifier, level))

    def set_input(
        self,
        ingredient: Ingredient | ItemTag | Identifier | str,
        amount_per_item: int,
        needed_per_level: int,
    ) -> "IncrementalModifierRecipeBuilder":
        require_int("amount_per_item", amount_per_item)
        require_int("needed_per_level", needed_per_level)
        if amount_per_item < 1:
            raise DomainValidationError(
                "amount_per_item", amount_per_item, "Amount per item must be at least 1"
            )
        if needed_per_level <= amount_per_item:
            raise DomainValidationError(
                "needed_per_level", needed_per_level, "Needed per level must be greater than amount per item"
            )
        if isinstance(ingredient, ItemTag):
            ingredient = Ingredient.from_tag(ingredient)
        elif not isinstance(ingredient, Ingredient):
            ingredient = Ingredient.of_items([ingredient])
        self.input = ingredient
        self.amount_per_item = amount_per_item
        self.needed_per_level = needed_per_level
        return self

    def set_leftover(self, item: ItemOutput | Identifier | str, count: int = 1) -> "IncrementalModifierRecipeBuilder":
        self.leftover = item if isinstance(item, ItemOutput) else ItemOutput(item=Identifier.parse(item), count=count)
        return self

    def _check_buildable(self, variant: RecipeVariant) -> None:
        if variant is RecipeVariant.APPLY and self.input.is_empty():
            raise IncompleteRecipeError(
                f"Incremental modifier recipe for {self.result.modifier} must set an input"
            )

    def _write_family_fields(self, variant: RecipeVariant, document: dict[str, Any]) -> None:
        if variant is not RecipeVariant.APPLY:
            return
        document["input"] = self.input.serialize()
        document["amount_per_item"] = self.amount_per_item
        document["needed_per_level"] = self.needed_per_level
        if self.leftover is not None:
            document["leftover"] = self.leftover.serialize()
