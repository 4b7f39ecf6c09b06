"""
Classification and grouping of OggDude archive entries.

Every archive member is wrapped once in a DataElement, which derives its
file name, parent directory and category (directory, image, xml or unknown)
from the raw path. Grouping helpers then index the elements by category and
by parent directory so that each category import can locate its XML file
and artwork without rescanning the archive.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .archive import ArchiveHandle, ArchiveMember


class ElementCategory(str, Enum):
    DIRECTORY = "directory"
    IMAGE = "image"
    XML = "xml"
    UNKNOWN = "unknown"


ALLOWED_IMAGE_EXTENSIONS = frozenset({"webp", "jpg", "jpeg", "png", "gif"})
XML_EXTENSION = "xml"


@dataclass(frozen=True)
class DataElement:
    """A classified archive entry.

    Attributes:
        name: File name with extension, empty for directories.
        relative_path: Directory holding the file; a directory's own path.
        category: Directory, image, xml or unknown.
        full_path: Path of the entry in the archive, including the file name.
    """

    name: str
    relative_path: str
    category: ElementCategory
    full_path: str

    @classmethod
    def from_entry(cls, path: str | None, is_dir: bool) -> "DataElement":
        """Classify a raw archive entry. Never raises."""
        full_path = path if isinstance(path, str) else ""
        trimmed = full_path.rstrip("/")
        if is_dir:
            return cls(
                name="",
                relative_path=trimmed,
                category=ElementCategory.DIRECTORY,
                full_path=full_path,
            )
        parent, _, name = trimmed.rpartition("/")
        return cls(
            name=name,
            relative_path=parent,
            category=_file_category(name),
            full_path=full_path,
        )

    def is_dir(self) -> bool:
        return self.category is ElementCategory.DIRECTORY

    def is_image(self) -> bool:
        return self.category is ElementCategory.IMAGE

    def is_xml(self) -> bool:
        return self.category is ElementCategory.XML


def _file_category(name: str) -> ElementCategory:
    if "." not in name:
        return ElementCategory.UNKNOWN
    extension = name.rsplit(".", 1)[1].lower()
    if extension in ALLOWED_IMAGE_EXTENSIONS:
        return ElementCategory.IMAGE
    if extension == XML_EXTENSION:
        return ElementCategory.XML
    return ElementCategory.UNKNOWN


def classify(member: ArchiveMember) -> DataElement:
    return DataElement.from_entry(member.path, member.is_dir)


def classify_all(archive: ArchiveHandle) -> list[DataElement]:
    """Classify every member of an archive, in archive order."""
    return [classify(member) for member in archive.files.values()]


def group_by_category(
    elements: Iterable[DataElement],
) -> dict[ElementCategory, list[DataElement]]:
    """Partition elements by category, preserving order.

    Categories with no element are absent from the result.
    """
    grouped: dict[ElementCategory, list[DataElement]] = {}
    for element in elements:
        grouped.setdefault(element.category, []).append(element)
    return grouped


def group_by_directory(elements: Iterable[DataElement]) -> dict[str, list[DataElement]]:
    """Partition non-directory elements by parent path, preserving order."""
    grouped: dict[str, list[DataElement]] = {}
    for element in elements:
        if element.is_dir():
            continue
        grouped.setdefault(element.relative_path, []).append(element)
    return grouped


def get_element_from(
    directories: dict[str, list[DataElement]], path: str, name: str
) -> DataElement | None:
    """Return the first element named ``name`` under ``path``, or None."""
    for element in directories.get(path, []):
        if element.name == name:
            return element
    return None
