"""
Gear mapping and import context (``Data/Gear.xml``).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..coercion import mandatory_string
from ..config import ImporterSettings
from ..context import CategoryContext, build_img_world_path, build_item_img_system_path
from ..markup import as_node
from ..models import GearRecord
from .common import map_item_fields


def map_gear(xml_gear: Any) -> GearRecord:
    xml_gear = as_node(xml_gear)
    return GearRecord(
        **map_item_fields("gear", xml_gear),
        short=mandatory_string("gear.Short", xml_gear.get("Short")),
    )


def map_gears(gears: Sequence[Any]) -> list[GearRecord]:
    return [map_gear(gear) for gear in gears]


def build_gear_context(settings: ImporterSettings) -> CategoryContext:
    return CategoryContext(
        category="gear",
        markup_directory="Data",
        markup_file_name="Gear.xml",
        image_criteria="Data/EquipmentImages/Gear",
        image_prefix="Gear",
        world_path=build_img_world_path(settings.world_id, "gears"),
        system_path=build_item_img_system_path(settings.system_id, "gear.svg"),
        folder_name="Swes - Gears",
        folder_type="Item",
        json_criteria="Gears.Gear",
        mapper=map_gears,
        document_type="gear",
    )
