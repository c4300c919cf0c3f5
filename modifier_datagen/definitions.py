"""YAML recipe definitions -> configured recipe builders.

A definitions file is a mapping with a `recipes:` list. Each entry names a
modifier, a recipe `kind` (see `RECIPE_KINDS`), and the builder settings.
Setters are applied in a fixed order and their errors propagate unchanged, so
a bad entry fails with the same `DomainValidationError` /
`ConflictingStateError` a hand-written builder call would.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from recipekit.config_namespace import ConfigNamespace
from recipekit.identifiers import Identifier, ItemTag
from recipekit.ingredients import Ingredient

from modifier_datagen.config import DatagenConfig
from modifier_datagen.foundation.config_io import load_yaml_mapping
from modifier_datagen.modifiers import ModifierEntry, ModifierMatch
from modifier_datagen.recipes import (
    RECIPE_KINDS,
    IncrementalModifierRecipeBuilder,
    ModifierRecipeBuilder,
    StandardModifierRecipeBuilder,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecipeDefinition:
    builder: ModifierRecipeBuilder
    recipe_id: Identifier
    salvage_id: Identifier | None


def parse_ingredient(ns: ConfigNamespace) -> Ingredient:
    """Read exactly one of `tag`, `item`, or `items` from `ns`."""

    present = [key for key in ("tag", "item", "items") if ns.has(key)]
    if len(present) != 1:
        raise ValueError(
            f"{ns.path} must set exactly one of: tag, item, items (got {', '.join(present) or '<none>'})"
        )
    key = present[0]
    if key == "tag":
        return Ingredient.from_tag(ItemTag.of(str(ns.get_str("tag"))))
    if key == "item":
        return Ingredient.of_items([str(ns.get_str("item"))])
    return Ingredient.of_items(ns.get_list_str("items"))


def parse_requirements(ns: ConfigNamespace) -> ModifierMatch:
    if ns.has("modifier"):
        match = ModifierMatch.entry(str(ns.get_str("modifier")), ns.get_int("level", default=1, min_value=1))
        ns.assert_consumed()
        return match

    raw_options = ns.get_list_mapping("options")
    options = [
        parse_requirements(ConfigNamespace(option, path=f"{ns.child_path('options')}[{idx}]"))
        for idx, option in enumerate(raw_options)
    ]
    matches_needed = ns.get_int("matches_needed", default=len(options), min_value=0)
    ns.assert_consumed()
    return ModifierMatch.any_of(matches_needed, *options)


def _apply_standard_fields(builder: StandardModifierRecipeBuilder, ns: ConfigNamespace) -> None:
    for idx, raw in enumerate(ns.get_list_mapping("inputs")):
        input_ns = ConfigNamespace(raw, path=f"{ns.child_path('inputs')}[{idx}]")
        amount = input_ns.get_int("amount", default=1)
        builder.add_input(parse_ingredient(input_ns), amount)
        input_ns.assert_consumed()


def _apply_incremental_fields(builder: IncrementalModifierRecipeBuilder, ns: ConfigNamespace) -> None:
    ingredient = parse_ingredient(ns.namespace("input"))
    builder.set_input(
        ingredient,
        ns.get_int("amount_per_item"),
        ns.get_int("needed_per_level"),
    )
    if ns.has("leftover"):
        leftover = ns.namespace("leftover")
        builder.set_leftover(str(leftover.get_str("item")), leftover.get_int("count", default=1))


def parse_recipe(raw: Mapping[str, Any], *, path: str, config: DatagenConfig) -> RecipeDefinition:
    ns = ConfigNamespace(raw, path=path)

    kind = str(ns.get_str("kind", default="standard", choices=RECIPE_KINDS.keys()))
    modifier = Identifier.parse(str(ns.get_str("modifier"))).with_namespace(config.namespace)
    level = ns.get_int("level", default=1, min_value=1)
    builder = RECIPE_KINDS[kind](ModifierEntry(modifier=modifier, level=level))

    if isinstance(builder, StandardModifierRecipeBuilder):
        _apply_standard_fields(builder, ns)
    elif isinstance(builder, IncrementalModifierRecipeBuilder):
        _apply_incremental_fields(builder, ns)

    if ns.has("tools"):
        builder.set_tools(parse_ingredient(ns.namespace("tools")))
    if ns.has("requirements"):
        builder.set_requirements(parse_requirements(ns.namespace("requirements")))
    requirements_error = ns.get_str("requirements_error", default=None)
    if requirements_error is not None:
        builder.set_requirements_error(requirements_error)

    max_level = ns.get_optional_int("max_level")
    if max_level is not None:
        builder.set_max_level(max_level)
    upgrade_slots = ns.get_optional_int("upgrade_slots")
    if upgrade_slots is not None:
        builder.set_upgrade_slots(upgrade_slots)
    ability_slots = ns.get_optional_int("ability_slots")
    if ability_slots is not None:
        builder.set_ability_slots(ability_slots)

    name = ns.get_str("id", default=modifier.path)
    recipe_id = Identifier(path=f"{config.recipe_folder}{name}", namespace=config.namespace)

    salvage_id: Identifier | None = None
    raw_salvage = ns.get_raw("salvage", default=True)
    if raw_salvage is not False:
        if raw_salvage is True:
            raw_salvage = {}
        if not isinstance(raw_salvage, Mapping):
            raise TypeError(
                f"{ns.child_path('salvage')} must be a mapping or boolean (type={type(raw_salvage).__name__})"
            )
        salvage_ns = ConfigNamespace(raw_salvage, path=ns.child_path("salvage"))
        min_level = salvage_ns.get_optional_int("min_level")
        max_salvage = salvage_ns.get_optional_int("max_level")
        if max_salvage is not None:
            builder.set_salvage_level_range(1 if min_level is None else min_level, max_salvage)
        elif min_level is not None:
            builder.set_min_salvage_level(min_level)
        salvage_name = salvage_ns.get_str("id", default=name)
        salvage_id = Identifier(path=f"{config.salvage_folder}{salvage_name}", namespace=config.namespace)
        salvage_ns.assert_consumed()

    ns.assert_consumed()
    return RecipeDefinition(builder=builder, recipe_id=recipe_id, salvage_id=salvage_id)


def parse_definitions(payload: Mapping[str, Any], *, config: DatagenConfig) -> list[RecipeDefinition]:
    root = ConfigNamespace(payload, path="")
    raw_recipes = root.get_list_mapping("recipes", allow_empty=True)
    root.assert_consumed()

    definitions = [
        parse_recipe(raw, path=f"recipes[{idx}]", config=config)
        for idx, raw in enumerate(raw_recipes)
    ]
    logger.debug("Parsed %d recipe definitions", len(definitions))
    return definitions


def load_definitions(path: str | os.PathLike[str], *, config: DatagenConfig) -> list[RecipeDefinition]:
    return parse_definitions(load_yaml_mapping(path), config=config)
