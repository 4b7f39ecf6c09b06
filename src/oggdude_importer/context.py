"""
Per-category import context and host path builders.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from .models import ItemRecord

RecordMapper = Callable[[Sequence[Any]], list[ItemRecord]]


@dataclass(frozen=True)
class CategoryContext:
    """Everything one category import needs to know about its data.

    Attributes:
        category: Category name, e.g. "armor".
        markup_directory: Archive directory holding the XML file.
        markup_file_name: XML file name, e.g. "Armor.xml".
        image_criteria: Archive path prefix selecting this category's images.
        image_prefix: File name prefix of a record's image, before its key.
        world_path: World storage directory receiving the images.
        system_path: Default icon used when a record has no image.
        folder_name: Destination folder name.
        folder_type: Destination folder kind.
        json_criteria: Dotted path of the record list in the parsed XML.
        mapper: Maps raw records to normalized records.
        document_type: Type tag of the created documents.
    """

    category: str
    markup_directory: str
    markup_file_name: str
    image_criteria: str
    image_prefix: str
    world_path: str
    system_path: str
    folder_name: str
    folder_type: str
    json_criteria: str
    mapper: RecordMapper
    document_type: str

    def icon_path(self, key: str) -> str:
        """World storage path of the image for the record with ``key``."""
        return f"{self.world_path}/{self.image_prefix}{key}.png"


def build_item_img_system_path(system_id: str, image_file_name: str) -> str:
    return f"systems/{system_id}/assets/images/icons/{image_file_name}"


def build_img_world_path(world_id: str, kind: str) -> str:
    return f"worlds/{world_id}/swes-assets/images/{kind}"
