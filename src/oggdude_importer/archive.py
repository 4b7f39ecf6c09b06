"""
Read OggDude data archives.

The OggDude generator exports its data as a zip file holding a ``Data/``
tree of XML files and an ``EquipmentImages/`` tree of artwork. This module
opens such an archive and exposes each member through an async ``read``
so that content reads are suspension points of the import pipeline.
"""

from __future__ import annotations

import asyncio
import io
import logging
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .base import MalformedArchiveError

logger = logging.getLogger("oggdude-importer.archive")

ReadKind = Literal["text", "binary"]


@dataclass(frozen=True)
class ArchiveMember:
    """One member of an archive: its path, directory flag and content accessor."""

    path: str
    is_dir: bool
    _zip: zipfile.ZipFile = field(repr=False, compare=False)

    async def read(self, kind: ReadKind = "binary") -> str | bytes:
        """Read the member content.

        Args:
            kind: "text" to decode as UTF-8 (BOM tolerated), "binary" for raw bytes.

        Returns:
            The decoded text or the raw bytes.

        Raises:
            MalformedArchiveError: If the member cannot be read or decoded.
        """
        if self.is_dir:
            raise MalformedArchiveError(f"Cannot read directory entry: {self.path}")
        try:
            data = await asyncio.to_thread(self._zip.read, self.path)
        except (zipfile.BadZipFile, KeyError, OSError) as e:
            raise MalformedArchiveError(f"Failed to read '{self.path}' from archive: {e}") from e

        if kind == "binary":
            return data
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedArchiveError(f"'{self.path}' is not valid UTF-8 text: {e}") from e


@dataclass
class ArchiveHandle:
    """An opened archive: member path → member."""

    files: dict[str, ArchiveMember]
    _zip: zipfile.ZipFile = field(repr=False)

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "ArchiveHandle":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def load_archive(source: bytes | bytearray | memoryview | str | Path) -> ArchiveHandle:
    """Open an OggDude data archive.

    Args:
        source: Raw zip bytes (any bytes-like object), or a path to the zip file.

    Returns:
        ArchiveHandle listing every member, in archive order.

    Raises:
        MalformedArchiveError: If the file is missing or is not a valid zip archive.
    """
    try:
        if isinstance(source, (bytes, bytearray, memoryview)):
            zf = zipfile.ZipFile(io.BytesIO(source))
        else:
            zf = zipfile.ZipFile(Path(source))
    except FileNotFoundError:
        raise MalformedArchiveError(f"Archive file not found: {source}") from None
    except (zipfile.BadZipFile, OSError) as e:
        raise MalformedArchiveError(f"Invalid OggDude archive: {e}") from None

    files = {
        info.filename: ArchiveMember(path=info.filename, is_dir=info.is_dir(), _zip=zf)
        for info in zf.infolist()
    }
    logger.debug(f"Loaded archive with {len(files)} members")
    return ArchiveHandle(files=files, _zip=zf)
