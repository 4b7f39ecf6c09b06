"""
Local implementations of the host collaborators.

LocalFileStorage maps world storage paths onto a directory tree, and
JsonDocumentStore keeps folders and item documents in JSON files, so an
import can run against a plain data directory.
"""

import json
import logging
from pathlib import Path

import shortuuid

from .host import Document, DocumentPayload, Folder, UploadFile

logger = logging.getLogger("oggdude-importer.storage")


def new_id() -> str:
    """Generate a new random 16-character document id."""
    return shortuuid.random(length=16)


class LocalFileStorage:
    """World storage backed by a local directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        logger.debug(f"📂 File storage root: {self.root.resolve()}")

    def _resolve(self, path: str) -> Path:
        resolved = (self.root / path.strip("/")).resolve()
        if not resolved.is_relative_to(self.root.resolve()):
            raise ValueError(f"Path escapes storage root: {path}")
        return resolved

    async def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    async def create_directory(self, parent: str, segment: str) -> str:
        target = f"{parent.rstrip('/')}/{segment}" if parent else segment
        self._resolve(target).mkdir(exist_ok=True)
        return target

    async def upload(self, path: str, file: UploadFile) -> str:
        directory = self._resolve(path)
        if not directory.is_dir():
            raise FileNotFoundError(f"Upload directory does not exist: {path}")
        (directory / file.name).write_bytes(file.data)
        return f"{path.rstrip('/')}/{file.name}"


class JsonDocumentStore:
    """Folders and documents persisted as two JSON files."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._folders_file = self.data_dir / "folders.json"
        self._documents_file = self.data_dir / "documents.json"
        self._folders: dict[str, Folder] = self._load(self._folders_file, Folder)
        self._documents: dict[str, Document] = self._load(self._documents_file, Document)
        logger.debug(
            f"📂 Document store loaded {len(self._folders)} folders, "
            f"{len(self._documents)} documents"
        )

    @staticmethod
    def _load(path: Path, model):
        if not path.exists():
            return {}
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return {item["id"]: model.model_validate(item) for item in data}

    def _save(self) -> None:
        with open(self._folders_file, "w", encoding="utf-8") as f:
            json.dump([x.model_dump(mode="json") for x in self._folders.values()], f, indent=2)
        with open(self._documents_file, "w", encoding="utf-8") as f:
            json.dump([x.model_dump(mode="json") for x in self._documents.values()], f, indent=2)

    @property
    def folders(self) -> list[Folder]:
        return list(self._folders.values())

    @property
    def documents(self) -> list[Document]:
        return list(self._documents.values())

    async def find_folder(self, name: str, kind: str) -> Folder | None:
        for folder in self._folders.values():
            if folder.name == name and folder.type == kind:
                return folder
        return None

    async def create_folder(self, name: str, kind: str) -> Folder:
        folder = Folder(id=new_id(), name=name, type=kind)
        self._folders[folder.id] = folder
        self._save()
        return folder

    async def find_documents(self, doc_type: str, folder_id: str | None) -> list[Document]:
        return [
            d for d in self._documents.values()
            if d.type == doc_type and d.folder == folder_id
        ]

    async def create_documents(self, payloads: list[DocumentPayload]) -> list[Document]:
        created = []
        for payload in payloads:
            document = Document(**payload.model_dump(exclude={"id"}), id=new_id())
            self._documents[document.id] = document
            created.append(document)
        self._save()
        return created

    async def update_documents(self, payloads: list[DocumentPayload]) -> list[Document]:
        updated = []
        for payload in payloads:
            if payload.id not in self._documents:
                raise KeyError(f"Document not found: {payload.id}")
            document = Document(**payload.model_dump())
            self._documents[document.id] = document
            updated.append(document)
        self._save()
        return updated
