"""
Host application collaborators used by the import pipeline.

The importer never talks to the host directly: it receives a FileStorage
(world storage for images) and a DocumentStore (folders and item
documents) through HostServices. The helpers below add the idempotent
get-or-create behavior on top of those primitive operations.
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from typing import Any, Protocol

from pydantic import BaseModel, Field

logger = logging.getLogger("oggdude-importer.host")


class Folder(BaseModel):
    id: str
    name: str
    type: str


class Document(BaseModel):
    """An item document owned by the host document store."""

    id: str
    name: str
    img: str
    type: str
    system: dict[str, Any] = Field(default_factory=dict)
    folder: str | None = None


class DocumentPayload(BaseModel):
    """Data for one document to create or, with ``id`` set, update."""

    id: str | None = None
    name: str
    img: str
    type: str
    system: dict[str, Any]
    folder: str | None = None


@dataclass(frozen=True)
class UploadFile:
    name: str
    data: bytes
    mime_type: str = "application/octet-stream"

    @classmethod
    def from_bytes(cls, name: str, data: bytes) -> "UploadFile":
        mime_type, _ = mimetypes.guess_type(name)
        return cls(name=name, data=data, mime_type=mime_type or "application/octet-stream")


class FileStorage(Protocol):
    """Host storage for uploaded assets."""

    async def exists(self, path: str) -> bool:
        """Return True if a file or directory exists at ``path``."""
        ...

    async def create_directory(self, parent: str, segment: str) -> str:
        """Create directory ``segment`` under ``parent`` and return its path."""
        ...

    async def upload(self, path: str, file: UploadFile) -> str:
        """Store ``file`` in directory ``path`` and return the stored file path."""
        ...


class DocumentStore(Protocol):
    """Host persistence for folders and item documents."""

    async def find_folder(self, name: str, kind: str) -> Folder | None:
        ...

    async def create_folder(self, name: str, kind: str) -> Folder:
        ...

    async def find_documents(self, doc_type: str, folder_id: str | None) -> list[Document]:
        ...

    async def create_documents(self, payloads: list[DocumentPayload]) -> list[Document]:
        ...

    async def update_documents(self, payloads: list[DocumentPayload]) -> list[Document]:
        ...


@dataclass
class HostServices:
    files: FileStorage
    documents: DocumentStore


async def check_file_exists(files: FileStorage, path: str) -> bool:
    return await files.exists(path)


async def create_path_if_necessary(files: FileStorage, path: str) -> str:
    """Create every missing directory of ``path``, one segment at a time.

    Existing segments are left untouched, so the call is safe on a fully or
    partially existing tree.

    Returns:
        ``path`` unchanged.
    """
    if await files.exists(path):
        logger.debug(f"Path {path} exists on the server")
        return path

    logger.info(f"Path {path} does not exist on the server, creating it")
    current = ""
    for part in (p for p in path.split("/") if p):
        full = f"{current}/{part}" if current else part
        if not await files.exists(full):
            logger.debug(f"Sub-path {full} does not exist, creating it under '{current}'")
            await files.create_directory(current, part)
        current = full
    return path


async def upload_file(files: FileStorage, path: str, name: str, data: bytes) -> str:
    result = await files.upload(path, UploadFile.from_bytes(name, data))
    logger.debug(f"Image {name} uploaded to {result}")
    return result


async def get_or_create_folder(documents: DocumentStore, name: str, kind: str) -> Folder:
    """Return the folder matching name and kind exactly, creating it if absent."""
    folder = await documents.find_folder(name, kind)
    if folder is None:
        folder = await documents.create_folder(name, kind)
        logger.info(f"Created folder '{name}' ({kind})")
    return folder
