"""
Armor mapping and import context (``Data/Armor.xml``).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..coercion import mandatory_number, optional_array
from ..config import ImporterSettings
from ..context import CategoryContext, build_img_world_path, build_item_img_system_path
from ..markup import as_node, get_path
from ..models import ArmorRecord
from .common import map_item_fields, map_mod


def map_armor(xml_armor: Any) -> ArmorRecord:
    xml_armor = as_node(xml_armor)
    return ArmorRecord(
        **map_item_fields("armor", xml_armor),
        soak=mandatory_number("armor.Soak", xml_armor.get("Soak")),
        defense=mandatory_number("armor.Defense", xml_armor.get("Defense")),
        mods=optional_array(get_path(xml_armor, "BaseMods.Mod"), map_mod),
    )


def map_armors(armors: Sequence[Any]) -> list[ArmorRecord]:
    """Map the ``<Armor>`` nodes of Armor.xml, preserving order."""
    return [map_armor(armor) for armor in armors]


def build_armor_context(settings: ImporterSettings) -> CategoryContext:
    return CategoryContext(
        category="armor",
        markup_directory="Data",
        markup_file_name="Armor.xml",
        image_criteria="Data/EquipmentImages/Armor",
        image_prefix="Armor",
        world_path=build_img_world_path(settings.world_id, "armors"),
        system_path=build_item_img_system_path(settings.system_id, "armor.svg"),
        folder_name="Swes - Armors",
        folder_type="Item",
        json_criteria="Armors.Armor",
        mapper=map_armors,
        document_type="armor",
    )
