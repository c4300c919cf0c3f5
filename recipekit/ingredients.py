"""Item predicates as the crafting engine reads them.

Only the serialized shape lives here; matching items against an ingredient is
the engine's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Literal

from recipekit.identifiers import Identifier, ItemTag

IngredientKind = Literal["item", "tag"]


@dataclass(frozen=True)
class IngredientValue:
    kind: IngredientKind
    id: Identifier

    def serialize(self) -> dict[str, Any]:
        return {self.kind: str(self.id)}


@dataclass(frozen=True)
class Ingredient:
    values: tuple[IngredientValue, ...] = ()

    def __post_init__(self) -> None:
        values = tuple(self.values)
        for value in values:
            if not isinstance(value, IngredientValue):
                raise TypeError(
                    f"Ingredient values must be IngredientValue (type={type(value).__name__})"
                )
        object.__setattr__(self, "values", values)

    @classmethod
    def from_tag(cls, tag: "ItemTag | Identifier | str") -> "Ingredient":
        tag_id = tag.id if isinstance(tag, ItemTag) else Identifier.parse(tag)
        return cls(values=(IngredientValue(kind="tag", id=tag_id),))

    @classmethod
    def of_items(cls, items: Iterable["Identifier | str"]) -> "Ingredient":
        values = tuple(IngredientValue(kind="item", id=Identifier.parse(item)) for item in items)
        if not values:
            raise ValueError("Ingredient.of_items requires at least one item")
        return cls(values=values)

    def is_empty(self) -> bool:
        return not self.values

    def serialize(self) -> dict[str, Any] | list[dict[str, Any]]:
        if len(self.values) == 1:
            return self.values[0].serialize()
        return [value.serialize() for value in self.values]


Ingredient.EMPTY = Ingredient()  # type: ignore[attr-defined]


@dataclass(frozen=True)
class SizedIngredient:
    """An ingredient that must be present `amount` times."""

    ingredient: Ingredient
    amount: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.ingredient, Ingredient):
            raise TypeError("SizedIngredient.ingredient must be an Ingredient")
        if self.ingredient.is_empty():
            raise ValueError("SizedIngredient.ingredient cannot be empty")
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError("SizedIngredient.amount must be an int")
        if self.amount < 1:
            raise ValueError(f"SizedIngredient.amount must be >= 1 (got {self.amount})")

    def serialize(self) -> dict[str, Any]:
        serialized = self.ingredient.serialize()
        if isinstance(serialized, dict):
            if self.amount == 1:
                return serialized
            return {**serialized, "amount": self.amount}
        out: dict[str, Any] = {"ingredient": serialized}
        if self.amount != 1:
            out["amount"] = self.amount
        return out
