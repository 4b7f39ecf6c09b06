"""
Equipment categories imported from OggDude data.

Currently supports:
- Armor (Armor.xml)
- Weapons (Weapons.xml)
- Gear (Gear.xml)
"""

from collections.abc import Callable

from ..config import ImporterSettings
from ..context import CategoryContext
from .armor import build_armor_context, map_armors
from .gear import build_gear_context, map_gears
from .weapon import build_weapon_context, map_weapons

CATEGORY_BUILDERS: dict[str, Callable[[ImporterSettings], CategoryContext]] = {
    "armor": build_armor_context,
    "weapon": build_weapon_context,
    "gear": build_gear_context,
}

__all__ = [
    "CATEGORY_BUILDERS",
    "build_armor_context",
    "build_gear_context",
    "build_weapon_context",
    "map_armors",
    "map_gears",
    "map_weapons",
]
