"""Reusable datagen kernel (identifiers, ingredients, sinks, strict config reading).

This package is intentionally independent of `modifier_datagen`. Recipe-specific
fields, invariants, and document shapes live in the consuming application.
"""

from recipekit.config_namespace import ConfigNamespace
from recipekit.identifiers import Identifier, ItemTag
from recipekit.ingredients import Ingredient, IngredientValue, SizedIngredient
from recipekit.sinks import CollectingSink, DocumentSink, JsonDirectorySink

__all__ = [
    "CollectingSink",
    "ConfigNamespace",
    "DocumentSink",
    "Identifier",
    "Ingredient",
    "IngredientValue",
    "ItemTag",
    "JsonDirectorySink",
    "SizedIngredient",
]
