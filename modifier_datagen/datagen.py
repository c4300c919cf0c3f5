from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from recipekit.sinks import DocumentSink

from modifier_datagen.definitions import RecipeDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatagenSummary:
    recipes: int
    salvage_recipes: int

    @property
    def total(self) -> int:
        return self.recipes + self.salvage_recipes


def run_definitions(definitions: Iterable[RecipeDefinition], sink: DocumentSink) -> DatagenSummary:
    """Build every definition into `sink`: the apply recipe, then its salvage recipe if any."""

    recipes = 0
    salvage_recipes = 0
    for definition in definitions:
        definition.builder.build(sink, definition.recipe_id)
        recipes += 1
        if definition.salvage_id is not None:
            definition.builder.build_salvage(sink, definition.salvage_id)
            salvage_recipes += 1

    summary = DatagenSummary(recipes=recipes, salvage_recipes=salvage_recipes)
    logger.info(
        "Datagen complete: recipes=%d salvage=%d", summary.recipes, summary.salvage_recipes
    )
    return summary
