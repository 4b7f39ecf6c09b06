"""
Normalized item records produced from OggDude XML data.

Field names are snake_case in Python and serialize to the camelCase keys
the host item data models expect (``model_dump(by_alias=True)``).
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Base for all records: camelCase aliases, construction by field name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_system(self) -> dict:
        """Serialize as the ``system`` payload of a host document."""
        return self.model_dump(by_alias=True)


class Source(RecordModel):
    """Sourcebook reference."""
    description: str = ""
    page: int = 0


class Quality(RecordModel):
    key: str = ""
    count: int = 0


class EraPrice(RecordModel):
    """Price and availability of an item in a given era."""
    name: str = ""
    price: int = 0
    rarity: int = 0
    restricted: bool = False


class DieModifier(RecordModel):
    """Dice added to or removed from checks of a skill."""
    skill_key: str = ""
    skill_type: str = ""
    skill_char: str = ""
    add_set_back_count: int = 0
    advantage_count: int = 0
    boost_count: int = 0
    setback_count: int = 0
    success_count: int = 0
    threat_count: int = 0
    upgrade_ability_count: int = 0
    upgrade_difficulty_count: int = 0


class ItemMod(RecordModel):
    """A built-in modification (``BaseMods/Mod``)."""
    key: str = ""
    misc_desc: str = ""
    count: int = 0
    index: int = 0
    def_zone: str = ""
    die_modifiers: list[DieModifier] = Field(default_factory=list)


class WeaponModifier(RecordModel):
    """Weapon profile granted by a non-weapon item, e.g. armor spikes."""
    unarmed: bool = False
    unarmed_name: str = ""
    skill_key: str = ""
    all_skill_key: str = ""
    damage: int = 0
    damage_add: int = 0
    crit: int = 0
    crit_sub: int = 0
    range_value: int = 0
    qualities: list[Quality] = Field(default_factory=list)


class ItemRecord(RecordModel):
    """Fields shared by every OggDude equipment record."""

    name: str
    key: str
    description: str = ""
    restricted: bool = False
    type: str = ""
    price: int = 0
    encumbrance: int = 0
    rarity: int = 0
    hp: int = 0
    sources: list[Source] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    era_pricing: list[EraPrice] = Field(default_factory=list)
    weapon_modifiers: list[WeaponModifier] = Field(default_factory=list)


class ArmorRecord(ItemRecord):
    soak: int = 0
    defense: int = 0
    mods: list[ItemMod] = Field(default_factory=list)


class WeaponRecord(ItemRecord):
    skill_key: str = ""
    damage: int = 0
    damage_add: int = 0
    crit: int = 0
    size_low: int = 0
    size_high: int = 0
    attach_cost_mult: int = 0
    range: str = ""
    range_value: str = ""
    no_melee: bool = False
    scale: str = ""
    hands: str = ""
    ordnance: bool = False
    vehicle_no_replace: bool = False
    qualities: list[Quality] = Field(default_factory=list)
    mods: list[ItemMod] = Field(default_factory=list)


class GearRecord(ItemRecord):
    short: str = ""
