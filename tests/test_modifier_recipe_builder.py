import logging

import pytest

from modifier_datagen.errors import ConflictingStateError, DomainValidationError
from modifier_datagen.modifiers import ModifierEntry, ModifierMatch
from modifier_datagen.recipes.builder import (
    ModifierRecipeBuilder,
    RecipeVariant,
    default_tools,
)
from recipekit.identifiers import Identifier, ItemTag
from recipekit.ingredients import Ingredient
from recipekit.sinks import CollectingSink

DEFAULT_TOOLS_DOC = {"tag": "tconstruct:modifiable"}


def _builder(modifier: str = "sharpness", level: int = 3) -> ModifierRecipeBuilder:
    return ModifierRecipeBuilder(ModifierEntry.of(modifier, level))


def test_end_to_end_defaults_produce_minimal_documents():
    builder = _builder()
    sink = CollectingSink()

    builder.build(sink)
    builder.build_salvage(sink, "sharpness_salvage")

    assert sink.get("sharpness") == {
        "tools": DEFAULT_TOOLS_DOC,
        "result": {"modifier": "sharpness", "level": 3},
    }
    assert sink.get("sharpness_salvage") == {
        "tools": DEFAULT_TOOLS_DOC,
        "modifier": "sharpness",
        "min_level": 1,
    }


def test_build_uses_modifier_identity_by_default_and_explicit_id_otherwise():
    sink = CollectingSink()
    _builder("tconstruct:haste", 1).build(sink)
    _builder("tconstruct:haste", 2).build(sink, Identifier.parse("tconstruct:haste_2"))

    assert sink.ids() == ("tconstruct:haste", "tconstruct:haste_2")


def test_default_tools_is_shared_and_memoized():
    assert default_tools() is default_tools()
    assert default_tools().serialize() == DEFAULT_TOOLS_DOC


@pytest.mark.parametrize("slots", [-1, -5])
def test_negative_slots_are_rejected_without_changing_state(slots):
    builder = _builder().set_upgrade_slots(2)
    with pytest.raises(DomainValidationError, match=r"Slots must be positive") as excinfo:
        builder.set_upgrade_slots(slots)
    assert excinfo.value.field == "upgrade_slots"
    assert excinfo.value.value == slots
    assert builder.upgrade_slots == 2

    other = _builder().set_ability_slots(1)
    with pytest.raises(DomainValidationError):
        other.set_ability_slots(slots)
    assert other.ability_slots == 1


def test_upgrade_and_ability_slots_are_mutually_exclusive():
    builder = _builder().set_ability_slots(1)
    with pytest.raises(ConflictingStateError) as excinfo:
        builder.set_upgrade_slots(1)
    assert (excinfo.value.upgrade_slots, excinfo.value.ability_slots) == (1, 1)
    assert builder.upgrade_slots == 0

    reverse = _builder().set_upgrade_slots(2)
    with pytest.raises(ConflictingStateError, match=r"Cannot set both upgrade and ability slots"):
        reverse.set_ability_slots(1)
    assert reverse.ability_slots == 0


def test_slots_can_be_reset_to_zero_and_switched():
    builder = _builder().set_upgrade_slots(1).set_upgrade_slots(0).set_ability_slots(1)
    document = builder.serialize(RecipeVariant.APPLY)
    assert document["ability_slots"] == 1
    assert "upgrade_slots" not in document


@pytest.mark.parametrize("level", [0, -1])
def test_max_level_must_be_positive(level):
    with pytest.raises(DomainValidationError, match=r"Max level must be greater than 0"):
        _builder().set_max_level(level)


def test_max_level_one_is_serialized():
    document = _builder().set_max_level(1).serialize(RecipeVariant.APPLY)
    assert document["max_level"] == 1


def test_min_salvage_level_must_be_positive():
    builder = _builder()
    with pytest.raises(DomainValidationError) as excinfo:
        builder.set_min_salvage_level(0)
    assert excinfo.value.field == "salvage_min_level"
    assert builder.salvage_min_level == 1


def test_salvage_level_range():
    with pytest.raises(DomainValidationError, match=r"greater than or equal to min level"):
        _builder().set_salvage_level_range(3, 2)

    document = _builder().set_salvage_level_range(2, 5).serialize(RecipeVariant.SALVAGE)
    assert document["min_level"] == 2
    assert document["max_level"] == 5


def test_failed_salvage_range_keeps_new_min_level():
    builder = _builder()
    with pytest.raises(DomainValidationError):
        builder.set_salvage_level_range(3, 2)
    assert builder.salvage_min_level == 3
    assert builder.salvage_max_level == 0


def test_salvage_max_is_not_rechecked_when_min_changes_later():
    builder = _builder().set_salvage_level_range(1, 2).set_min_salvage_level(4)
    document = builder.serialize(RecipeVariant.SALVAGE)
    assert (document["min_level"], document["max_level"]) == (4, 2)


def test_salvage_document_shares_slots_but_not_apply_max_level():
    builder = _builder().set_max_level(5).set_upgrade_slots(1)
    document = builder.serialize(RecipeVariant.SALVAGE)
    assert document == {
        "tools": DEFAULT_TOOLS_DOC,
        "modifier": "sharpness",
        "min_level": 1,
        "upgrade_slots": 1,
    }


def test_set_tools_twice_is_idempotent():
    tools = Ingredient.from_tag(ItemTag.of("tconstruct:modifiable/melee"))
    once = _builder().set_tools(tools).serialize(RecipeVariant.APPLY)
    twice = _builder().set_tools(tools).set_tools(tools).serialize(RecipeVariant.APPLY)
    assert once == twice
    assert once["tools"] == {"tag": "tconstruct:modifiable/melee"}


def test_set_tools_accepts_item_tag():
    document = _builder().set_tools(ItemTag.of("tconstruct:modifiable/harvest")).serialize(
        RecipeVariant.SALVAGE
    )
    assert document["tools"] == {"tag": "tconstruct:modifiable/harvest"}


def test_explicit_empty_tools_falls_back_to_default():
    document = _builder().set_tools(Ingredient.EMPTY).serialize(RecipeVariant.APPLY)
    assert document["tools"] == DEFAULT_TOOLS_DOC


def test_omission_law_for_defaults():
    document = _builder().set_requirements(ModifierMatch.ALWAYS).serialize(RecipeVariant.APPLY)
    for key in ("requirements", "max_level", "upgrade_slots", "ability_slots"):
        assert key not in document


def test_requirements_carry_error_key():
    builder = (
        _builder()
        .set_requirements(ModifierMatch.entry("tconstruct:reinforced", 2))
        .set_requirements_error("recipe.tconstruct.modifier.sharpness.requirements")
    )
    document = builder.serialize(RecipeVariant.APPLY)
    assert document["requirements"] == {
        "modifier": "tconstruct:reinforced",
        "level": 2,
        "error": "recipe.tconstruct.modifier.sharpness.requirements",
    }
    assert list(document) == ["tools", "requirements", "result"]


def test_requirements_without_error_key_are_flagged_not_rejected(caplog):
    builder = _builder().set_requirements(
        ModifierMatch.any_of(1, ModifierMatch.entry("a"), ModifierMatch.entry("b", 2))
    )
    builder_logger = logging.getLogger("modifier_datagen.recipes.builder")
    builder_logger.addHandler(caplog.handler)
    try:
        document = builder.serialize(RecipeVariant.APPLY)
    finally:
        builder_logger.removeHandler(caplog.handler)

    assert document["requirements"] == {
        "options": [{"modifier": "a", "level": 1}, {"modifier": "b", "level": 2}],
        "matches_needed": 1,
    }
    assert "no requirements error key" in caplog.text


def test_requirements_do_not_appear_in_salvage():
    builder = _builder().set_requirements(ModifierMatch.entry("a")).set_requirements_error("x")
    assert "requirements" not in builder.serialize(RecipeVariant.SALVAGE)


def test_apply_document_field_order():
    builder = _builder().set_max_level(3).set_ability_slots(1)
    assert list(builder.serialize(RecipeVariant.APPLY)) == [
        "tools",
        "result",
        "max_level",
        "ability_slots",
    ]


def test_result_is_fixed_after_construction():
    builder = _builder()
    with pytest.raises(AttributeError):
        builder.result = ModifierEntry.of("other")


def test_each_terminal_call_emits_exactly_one_document():
    calls = []

    class RecordingSink:
        def accept(self, identifier, document):
            calls.append((str(identifier), document))

    builder = _builder()
    assert builder.build_salvage(RecordingSink(), "a") is builder
    assert builder.build_salvage(RecordingSink(), "b") is builder
    assert [identifier for identifier, _ in calls] == ["a", "b"]


@pytest.mark.parametrize("value", [True, 1.5, 2.0, "2", None])
@pytest.mark.parametrize(
    ("setter", "field"),
    [
        ("set_min_salvage_level", "salvage_min_level"),
        ("set_max_level", "max_level"),
        ("set_upgrade_slots", "upgrade_slots"),
        ("set_ability_slots", "ability_slots"),
    ],
)
def test_numeric_setters_reject_non_int_values(setter, field, value):
    builder = _builder()
    before = getattr(builder, field)
    with pytest.raises(TypeError, match=rf"{field} must be an int"):
        getattr(builder, setter)(value)
    assert getattr(builder, field) == before


@pytest.mark.parametrize(("min_level", "max_level"), [(1.5, 2), (1, 2.5), (True, 2), (1, False)])
def test_salvage_level_range_rejects_non_int_values_without_changing_state(min_level, max_level):
    builder = _builder()
    with pytest.raises(TypeError, match=r"must be an int"):
        builder.set_salvage_level_range(min_level, max_level)
    assert (builder.salvage_min_level, builder.salvage_max_level) == (1, 0)
