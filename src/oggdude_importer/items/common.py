"""
Mappers for the substructures shared by every OggDude equipment file.

Each function takes one raw node of the parsed XML and returns a model.
Labels passed to mandatory coercions are prefixed with the category so
diagnostics point at the offending file.
"""

from __future__ import annotations

from typing import Any

from ..coercion import (
    mandatory_boolean,
    mandatory_number,
    mandatory_string,
    optional_array,
    optional_boolean,
    optional_number,
    optional_string,
)
from ..markup import TEXT_KEY, as_node, get_path
from ..models import (
    DieModifier,
    EraPrice,
    ItemMod,
    Quality,
    Source,
    WeaponModifier,
)


def map_source(raw: Any) -> Source:
    # <Source Page="12">Core Rulebook</Source> or a bare <Source>Core Rulebook</Source>
    if isinstance(raw, str):
        return Source(description=raw)
    raw = as_node(raw)
    return Source(
        description=optional_string(raw.get(TEXT_KEY)),
        page=optional_number(raw.get("Page")),
    )


def map_category(raw: Any) -> str:
    return optional_string(raw)


def map_quality(label: str, raw: Any) -> Quality:
    raw = as_node(raw)
    return Quality(
        key=mandatory_string(f"{label}.Quality.Key", raw.get("Key")),
        count=optional_number(raw.get("Count")),
    )


def map_era_price(label: str, raw: Any) -> EraPrice:
    raw = as_node(raw)
    return EraPrice(
        name=mandatory_string(f"{label}.EraPrice.Name", raw.get("Name")),
        price=mandatory_number(f"{label}.EraPrice.Price", raw.get("Price")),
        rarity=mandatory_number(f"{label}.EraPrice.Rarity", raw.get("Rarity")),
        restricted=mandatory_boolean(f"{label}.EraPrice.Restricted", raw.get("Restricted")),
    )


def map_die_modifier(raw: Any) -> DieModifier:
    raw = as_node(raw)
    return DieModifier(
        skill_key=optional_string(raw.get("SkillKey")),
        skill_type=optional_string(raw.get("SkillType")),
        skill_char=optional_string(raw.get("SkillChar")),
        add_set_back_count=optional_number(raw.get("AddSetBackCount")),
        advantage_count=optional_number(raw.get("AdvantageCount")),
        boost_count=optional_number(raw.get("BoostCount")),
        setback_count=optional_number(raw.get("SetbackCount")),
        success_count=optional_number(raw.get("SuccessCount")),
        threat_count=optional_number(raw.get("ThreatCount")),
        upgrade_ability_count=optional_number(raw.get("UpgradeAbilityCount")),
        upgrade_difficulty_count=optional_number(raw.get("UpgradeDifficultyCount")),
    )


def map_mod(raw: Any) -> ItemMod:
    raw = as_node(raw)
    return ItemMod(
        key=optional_string(raw.get("Key")),
        misc_desc=optional_string(raw.get("MiscDesc")),
        count=optional_number(raw.get("Count")),
        index=optional_number(raw.get("Index")),
        def_zone=optional_string(raw.get("DefZone")),
        die_modifiers=optional_array(
            get_path(raw, "DieModifiers.DieModifier"), map_die_modifier
        ),
    )


def map_weapon_modifier(label: str, raw: Any) -> WeaponModifier:
    raw = as_node(raw)
    return WeaponModifier(
        unarmed=optional_boolean(raw.get("Unarmed")),
        unarmed_name=optional_string(raw.get("UnarmedName")),
        skill_key=optional_string(raw.get("SkillKey")),
        all_skill_key=optional_string(raw.get("AllSkillKey")),
        damage=optional_number(raw.get("Damage")),
        damage_add=optional_number(raw.get("DamageAdd")),
        crit=optional_number(raw.get("Crit")),
        crit_sub=optional_number(raw.get("CritSub")),
        range_value=optional_number(raw.get("RangeValue")),
        qualities=optional_array(
            get_path(raw, "Qualities.Quality"),
            lambda quality: map_quality(f"{label}.WeaponModifier", quality),
        ),
    )


def map_item_fields(label: str, raw: Any) -> dict[str, Any]:
    """Map the fields every equipment record has.

    Returns:
        Keyword arguments for an ItemRecord subclass.
    """
    raw = as_node(raw)
    return {
        "name": mandatory_string(f"{label}.Name", raw.get("Name")),
        "key": mandatory_string(f"{label}.Key", raw.get("Key")),
        "description": mandatory_string(f"{label}.Description", raw.get("Description")),
        "restricted": optional_boolean(raw.get("Restricted")),
        "type": mandatory_string(f"{label}.Type", raw.get("Type")),
        "price": mandatory_number(f"{label}.Price", raw.get("Price")),
        "encumbrance": mandatory_number(f"{label}.Encumbrance", raw.get("Encumbrance")),
        "rarity": mandatory_number(f"{label}.Rarity", raw.get("Rarity")),
        "hp": mandatory_number(f"{label}.HP", raw.get("HP")),
        "sources": optional_array(get_path(raw, "Sources.Source"), map_source, scalars=True),
        "categories": optional_array(
            get_path(raw, "Categories.Category"), map_category, scalars=True
        ),
        "era_pricing": optional_array(
            get_path(raw, "EraPricing.Era"), lambda era: map_era_price(label, era)
        ),
        "weapon_modifiers": optional_array(
            get_path(raw, "WeaponModifiers.WeaponModifier"),
            lambda modifier: map_weapon_modifier(label, modifier),
        ),
    }
