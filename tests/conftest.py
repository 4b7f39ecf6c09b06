"""
Pytest configuration and fixtures for oggdude-importer tests.
"""

import io
import sys
import zipfile
from pathlib import Path

import pytest

# Add src directory to Python path to allow importing oggdude_importer
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from oggdude_importer.config import ImporterSettings  # noqa: E402
from oggdude_importer.host import HostServices  # noqa: E402
from oggdude_importer.storage import JsonDocumentStore, LocalFileStorage  # noqa: E402


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16

PADDED_ARMOR_XML = """<?xml version="1.0" encoding="utf-8"?>
<Armors>
  <Armor>
    <Name>Padded Armor</Name>
    <Key>PADDED</Key>
    <Soak>1</Soak>
    <Defense>0</Defense>
    <Encumbrance>1</Encumbrance>
    <Price>5</Price>
    <Rarity>1</Rarity>
    <HP>0</HP>
  </Armor>
</Armors>
"""


def build_zip(files: dict[str, bytes | str], directories: list[str] | None = None) -> bytes:
    """Build an in-memory zip archive.

    Args:
        files: Member path → content (str is UTF-8 encoded).
        directories: Explicit directory entries to add first.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for directory in directories or []:
            zf.writestr(directory.rstrip("/") + "/", b"")
        for path, content in files.items():
            zf.writestr(path, content.encode("utf-8") if isinstance(content, str) else content)
    return buffer.getvalue()


@pytest.fixture
def settings() -> ImporterSettings:
    return ImporterSettings(system_id="swes", world_id="test-world")


@pytest.fixture
def host(tmp_path) -> HostServices:
    return HostServices(
        files=LocalFileStorage(tmp_path / "files"),
        documents=JsonDocumentStore(tmp_path / "documents"),
    )


@pytest.fixture
def padded_archive() -> bytes:
    return build_zip(
        {
            "Data/Armor.xml": PADDED_ARMOR_XML,
            "Data/EquipmentImages/Armor/ArmorPADDED.png": PNG_BYTES,
        },
        directories=["Data", "Data/EquipmentImages", "Data/EquipmentImages/Armor"],
    )


@pytest.fixture
def zip_builder():
    """Return the in-memory zip builder."""
    return build_zip


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES
