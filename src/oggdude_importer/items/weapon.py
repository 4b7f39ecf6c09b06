"""
Weapon mapping and import context (``Data/Weapons.xml``).

Weapons carry their own quality list and combat profile on top of the
common equipment fields.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..coercion import (
    mandatory_number,
    mandatory_string,
    optional_array,
    optional_boolean,
    optional_string,
)
from ..config import ImporterSettings
from ..context import CategoryContext, build_img_world_path, build_item_img_system_path
from ..markup import as_node, get_path
from ..models import WeaponRecord
from .common import map_item_fields, map_mod, map_quality


def map_weapon(xml_weapon: Any) -> WeaponRecord:
    xml_weapon = as_node(xml_weapon)
    return WeaponRecord(
        **map_item_fields("weapon", xml_weapon),
        skill_key=mandatory_string("weapon.SkillKey", xml_weapon.get("SkillKey")),
        damage=mandatory_number("weapon.Damage", xml_weapon.get("Damage")),
        damage_add=mandatory_number("weapon.DamageAdd", xml_weapon.get("DamageAdd")),
        crit=mandatory_number("weapon.Crit", xml_weapon.get("Crit")),
        size_low=mandatory_number("weapon.SizeLow", xml_weapon.get("SizeLow")),
        size_high=mandatory_number("weapon.SizeHigh", xml_weapon.get("SizeHigh")),
        attach_cost_mult=mandatory_number(
            "weapon.AttachCostMult", xml_weapon.get("AttachCostMult")
        ),
        range=optional_string(xml_weapon.get("Range")),
        range_value=optional_string(xml_weapon.get("RangeValue")),
        no_melee=optional_boolean(xml_weapon.get("NoMelee")),
        scale=optional_string(xml_weapon.get("Scale")),
        hands=optional_string(xml_weapon.get("Hands")),
        ordnance=optional_boolean(xml_weapon.get("Ordnance")),
        vehicle_no_replace=optional_boolean(xml_weapon.get("VehicleNoReplace")),
        qualities=optional_array(
            get_path(xml_weapon, "Qualities.Quality"),
            lambda quality: map_quality("weapon", quality),
        ),
        mods=optional_array(get_path(xml_weapon, "BaseMods.Mod"), map_mod),
    )


def map_weapons(weapons: Sequence[Any]) -> list[WeaponRecord]:
    """Map the ``<Weapon>`` nodes of Weapons.xml, preserving order."""
    return [map_weapon(weapon) for weapon in weapons]


def build_weapon_context(settings: ImporterSettings) -> CategoryContext:
    return CategoryContext(
        category="weapon",
        markup_directory="Data",
        markup_file_name="Weapons.xml",
        image_criteria="Data/EquipmentImages/Weapon",
        image_prefix="Weapon",
        world_path=build_img_world_path(settings.world_id, "weapons"),
        system_path=build_item_img_system_path(settings.system_id, "weapon.svg"),
        folder_name="Swes - Weapons",
        folder_type="Item",
        json_criteria="Weapons.Weapon",
        mapper=map_weapons,
        document_type="weapon",
    )
