"""Tests for host helpers and the local host implementations."""

from unittest.mock import AsyncMock

import pytest

from oggdude_importer.host import (
    DocumentPayload,
    UploadFile,
    check_file_exists,
    create_path_if_necessary,
    get_or_create_folder,
    upload_file,
)
from oggdude_importer.storage import JsonDocumentStore, LocalFileStorage


def mock_file_storage(existing: set[str]) -> AsyncMock:
    """Build a FileStorage mock whose tree starts with ``existing`` paths."""
    files = AsyncMock()
    files.exists.side_effect = lambda path: path in existing

    async def _create(parent, segment):
        path = f"{parent}/{segment}" if parent else segment
        existing.add(path)
        return path

    files.create_directory.side_effect = _create
    return files


class TestCreatePathIfNecessary:
    """Test segment-wise creation of storage directories."""

    @pytest.mark.asyncio
    async def test_existing_path_creates_nothing(self):
        files = mock_file_storage({"worlds/w/swes-assets/images/armors"})
        result = await create_path_if_necessary(files, "worlds/w/swes-assets/images/armors")

        assert result == "worlds/w/swes-assets/images/armors"
        files.create_directory.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_tree_creates_every_segment(self):
        files = mock_file_storage(set())
        await create_path_if_necessary(files, "worlds/w/swes-assets")

        assert [c.args for c in files.create_directory.call_args_list] == [
            ("", "worlds"),
            ("worlds", "w"),
            ("worlds/w", "swes-assets"),
        ]

    @pytest.mark.asyncio
    async def test_partial_tree_creates_only_missing_segments(self):
        files = mock_file_storage({"worlds", "worlds/w"})
        await create_path_if_necessary(files, "worlds/w/swes-assets/images")

        assert [c.args for c in files.create_directory.call_args_list] == [
            ("worlds/w", "swes-assets"),
            ("worlds/w/swes-assets", "images"),
        ]

    @pytest.mark.asyncio
    async def test_idempotent_on_local_storage(self, tmp_path):
        files = LocalFileStorage(tmp_path)
        await create_path_if_necessary(files, "worlds/w/swes-assets/images/armors")
        await create_path_if_necessary(files, "worlds/w/swes-assets/images/armors")

        assert (tmp_path / "worlds/w/swes-assets/images/armors").is_dir()
        assert await check_file_exists(files, "worlds/w/swes-assets/images/armors")

    @pytest.mark.asyncio
    async def test_storage_failure_propagates(self):
        files = mock_file_storage(set())
        files.create_directory.side_effect = PermissionError("denied")

        with pytest.raises(PermissionError):
            await create_path_if_necessary(files, "worlds/w")


class TestUploadFile:

    def test_mime_type_from_name(self):
        assert UploadFile.from_bytes("ArmorPADDED.png", b"x").mime_type == "image/png"
        assert UploadFile.from_bytes("noext", b"x").mime_type == "application/octet-stream"

    @pytest.mark.asyncio
    async def test_upload_to_local_storage(self, tmp_path, png_bytes):
        files = LocalFileStorage(tmp_path)
        await create_path_if_necessary(files, "worlds/w/images")

        path = await upload_file(files, "worlds/w/images", "ArmorPADDED.png", png_bytes)

        assert path == "worlds/w/images/ArmorPADDED.png"
        assert (tmp_path / path).read_bytes() == png_bytes
        assert await check_file_exists(files, path)

    @pytest.mark.asyncio
    async def test_upload_requires_directory(self, tmp_path, png_bytes):
        files = LocalFileStorage(tmp_path)
        with pytest.raises(FileNotFoundError):
            await upload_file(files, "worlds/missing", "a.png", png_bytes)

    @pytest.mark.asyncio
    async def test_paths_cannot_escape_root(self, tmp_path):
        files = LocalFileStorage(tmp_path / "root")
        with pytest.raises(ValueError):
            await files.exists("../outside")


class TestGetOrCreateFolder:

    @pytest.mark.asyncio
    async def test_creates_then_reuses(self, tmp_path):
        store = JsonDocumentStore(tmp_path)

        first = await get_or_create_folder(store, "Swes - Armors", "Item")
        second = await get_or_create_folder(store, "Swes - Armors", "Item")

        assert first.id == second.id
        assert len(store.folders) == 1

    @pytest.mark.asyncio
    async def test_kind_must_match(self, tmp_path):
        store = JsonDocumentStore(tmp_path)

        item = await get_or_create_folder(store, "Swes - Armors", "Item")
        actor = await get_or_create_folder(store, "Swes - Armors", "Actor")

        assert item.id != actor.id
        assert len(store.folders) == 2

    @pytest.mark.asyncio
    async def test_create_not_called_when_found(self):
        documents = AsyncMock()
        documents.find_folder.return_value = object()

        await get_or_create_folder(documents, "Swes - Gears", "Item")

        documents.create_folder.assert_not_called()


class TestJsonDocumentStore:

    @pytest.mark.asyncio
    async def test_documents_persist_across_instances(self, tmp_path):
        store = JsonDocumentStore(tmp_path)
        folder = await store.create_folder("Swes - Armors", "Item")
        [created] = await store.create_documents([
            DocumentPayload(
                name="Padded Armor",
                img="icons/armor.svg",
                type="armor",
                system={"key": "PADDED"},
                folder=folder.id,
            )
        ])

        reloaded = JsonDocumentStore(tmp_path)
        [document] = await reloaded.find_documents("armor", folder.id)

        assert document.id == created.id
        assert len(document.id) == 16
        assert document.system == {"key": "PADDED"}
        assert await reloaded.find_folder("Swes - Armors", "Item") == folder

    @pytest.mark.asyncio
    async def test_update_replaces_document(self, tmp_path):
        store = JsonDocumentStore(tmp_path)
        [created] = await store.create_documents([
            DocumentPayload(name="Old", img="a.svg", type="gear", system={"key": "K"})
        ])

        await store.update_documents([
            DocumentPayload(id=created.id, name="New", img="b.png", type="gear", system={"key": "K"})
        ])

        [document] = store.documents
        assert document.name == "New"
        assert document.img == "b.png"

    @pytest.mark.asyncio
    async def test_update_unknown_document(self, tmp_path):
        store = JsonDocumentStore(tmp_path)
        with pytest.raises(KeyError):
            await store.update_documents([
                DocumentPayload(id="missing", name="X", img="x", type="gear", system={})
            ])
