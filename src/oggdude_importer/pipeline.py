"""
OggDude import pipeline.

``process_elements`` imports one equipment category from an already
classified archive in nine sequential stages:

1. locate the category XML file
2. extract its raw bytes
3. provision the world storage directory for images
4. upload the category images (concurrently)
5. parse the XML
6. get or create the destination folder
7. select and map the records
8. resolve each record's icon (concurrently)
9. create (or update) the documents

``run_import`` opens an archive, classifies and groups its entries once,
then runs ``process_elements`` for each requested category.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from .archive import ArchiveHandle, load_archive
from .base import (
    CategoryImportResult,
    ConflictMode,
    ImportFailure,
    ImportPipelineError,
    ImportReport,
    ImportStage,
    MalformedArchiveError,
    MalformedMarkupError,
    MissingMarkupFileError,
    RemoteOperationError,
)
from .coercion import collect_diagnostics
from .config import ImporterSettings
from .context import CategoryContext
from .elements import (
    DataElement,
    ElementCategory,
    classify_all,
    get_element_from,
    group_by_category,
    group_by_directory,
)
from .host import (
    DocumentPayload,
    Folder,
    HostServices,
    check_file_exists,
    create_path_if_necessary,
    get_or_create_folder,
    upload_file,
)
from .items import CATEGORY_BUILDERS
from .markup import as_list, get_path, parse_xml_to_json
from .models import ItemRecord

logger = logging.getLogger("oggdude-importer.pipeline")


@dataclass
class ArchiveSource:
    """An opened archive with its entries classified and grouped once."""

    archive: ArchiveHandle
    elements: list[DataElement]
    by_category: dict[ElementCategory, list[DataElement]]
    by_directory: dict[str, list[DataElement]]

    @classmethod
    def from_archive(cls, archive: ArchiveHandle) -> "ArchiveSource":
        elements = classify_all(archive)
        by_category = group_by_category(elements)
        logger.debug(
            "Archive contents: "
            + ", ".join(f"{len(v)} {k.value}" for k, v in by_category.items())
        )
        return cls(
            archive=archive,
            elements=elements,
            by_category=by_category,
            by_directory=group_by_directory(elements),
        )

    def images_under(self, prefix: str) -> list[DataElement]:
        prefix = prefix.rstrip("/") + "/"
        return [
            e for e in self.by_category.get(ElementCategory.IMAGE, [])
            if e.full_path.startswith(prefix)
        ]


async def process_elements(
    context: CategoryContext,
    source: ArchiveSource,
    host: HostServices,
    *,
    conflict_mode: ConflictMode = ConflictMode.UPSERT,
) -> CategoryImportResult:
    """Import one category from the archive into the host.

    Args:
        context: The category context (file names, paths, folder, mapper).
        source: The classified archive.
        host: File storage and document store collaborators.
        conflict_mode: Whether existing documents with the same key are updated
            (UPSERT) or new documents are always created (APPEND).

    Returns:
        CategoryImportResult with counts and recovered field diagnostics.

    Raises:
        MissingMarkupFileError: The category XML file is not in the archive.
        MalformedMarkupError: The XML file cannot be read or parsed.
        RemoteOperationError: Path provisioning, folder lookup or document
            creation failed.
    """
    category = context.category
    result = CategoryImportResult(category=category)
    logger.info(f"Importing {category} from {context.markup_file_name}")

    # 1. Locate
    element = get_element_from(
        source.by_directory, context.markup_directory, context.markup_file_name
    )
    if element is None:
        raise MissingMarkupFileError(
            category,
            ImportStage.LOCATE,
            f"{context.markup_directory}/{context.markup_file_name} not found in archive",
        )

    # 2. Extract
    try:
        markup = await source.archive.files[element.full_path].read("binary")
    except MalformedArchiveError as e:
        raise MalformedMarkupError(category, ImportStage.EXTRACT, str(e)) from e

    # 3. Provision
    try:
        await create_path_if_necessary(host.files, context.world_path)
    except Exception as e:
        raise RemoteOperationError(
            category, ImportStage.PROVISION, f"Cannot create {context.world_path}: {e}"
        ) from e

    # 4. Upload images
    result.images_uploaded, result.images_failed = await _upload_images(
        context, source, host
    )

    # 5. Parse
    try:
        tree = parse_xml_to_json(markup)
    except ValueError as e:
        raise MalformedMarkupError(category, ImportStage.PARSE, str(e)) from e

    # 6. Destination folder
    try:
        folder = await get_or_create_folder(
            host.documents, context.folder_name, context.folder_type
        )
    except Exception as e:
        raise RemoteOperationError(
            category, ImportStage.FOLDER, f"Cannot get folder '{context.folder_name}': {e}"
        ) from e
    result.folder_id = folder.id

    # 7. Select & map
    selected = get_path(tree, context.json_criteria)
    if selected is None:
        logger.warning(f"No records at '{context.json_criteria}' in {context.markup_file_name}")
    with collect_diagnostics() as diagnostics:
        records = context.mapper(as_list(selected))
    result.records = len(records)
    result.diagnostics = diagnostics

    # 8. Resolve icons
    icons = await asyncio.gather(*(_resolve_icon(context, host, r) for r in records))
    result.icons_defaulted = sum(1 for icon in icons if icon == context.system_path)

    # 9. Create
    try:
        result.created, result.updated = await _save_documents(
            context, host, folder, records, icons, conflict_mode
        )
    except Exception as e:
        raise RemoteOperationError(
            category, ImportStage.CREATE, f"Cannot save documents: {e}"
        ) from e

    logger.info(
        f"Imported {result.records} {category} records "
        f"({result.created} created, {result.updated} updated, "
        f"{result.images_uploaded} images)"
    )
    return result


async def _upload_images(
    context: CategoryContext, source: ArchiveSource, host: HostServices
) -> tuple[int, int]:
    images = source.images_under(context.image_criteria)

    async def _upload_one(image: DataElement) -> str:
        data = await source.archive.files[image.full_path].read("binary")
        return await upload_file(host.files, context.world_path, image.name, data)

    results = await asyncio.gather(*(_upload_one(i) for i in images), return_exceptions=True)

    failed = 0
    for image, upload in zip(images, results):
        if isinstance(upload, Exception):
            failed += 1
            logger.warning(f"Failed to upload {image.full_path}: {upload}")
    return len(images) - failed, failed


async def _resolve_icon(
    context: CategoryContext, host: HostServices, record: ItemRecord
) -> str:
    if not record.key:
        return context.system_path
    path = context.icon_path(record.key)
    try:
        if await check_file_exists(host.files, path):
            return path
    except Exception as e:
        logger.warning(f"Could not check icon {path}, using default: {e}")
    return context.system_path


async def _save_documents(
    context: CategoryContext,
    host: HostServices,
    folder: Folder,
    records: list[ItemRecord],
    icons: list[str],
    conflict_mode: ConflictMode,
) -> tuple[int, int]:
    payloads = [
        DocumentPayload(
            name=record.name,
            img=icon,
            type=context.document_type,
            system=record.to_system(),
            folder=folder.id,
        )
        for record, icon in zip(records, icons)
    ]

    if conflict_mode is ConflictMode.APPEND:
        if payloads:
            await host.documents.create_documents(payloads)
        return len(payloads), 0

    # Upsert by record key; the last record wins when an archive repeats a key
    # but keeps the position of the first. Unkeyed records are indexed by position.
    pending: dict[str | int, DocumentPayload] = {}
    for index, (record, payload) in enumerate(zip(records, payloads)):
        if not record.key:
            pending[index] = payload
            continue
        if record.key in pending:
            logger.warning(f"Duplicate {context.category} key '{record.key}', keeping the last one")
        pending[record.key] = payload

    existing = {}
    for document in await host.documents.find_documents(context.document_type, folder.id):
        key = document.system.get("key")
        if key and key not in existing:
            existing[key] = document

    to_create = []
    to_update = []
    for key, payload in pending.items():
        if isinstance(key, str) and key in existing:
            to_update.append(payload.model_copy(update={"id": existing[key].id}))
        else:
            to_create.append(payload)

    if to_create:
        await host.documents.create_documents(to_create)
    if to_update:
        await host.documents.update_documents(to_update)
    return len(to_create), len(to_update)


def build_contexts(
    settings: ImporterSettings, categories: list[str] | None = None
) -> list[CategoryContext]:
    """Build the contexts of the requested categories, in request order."""
    requested = categories if categories is not None else settings.categories
    invalid = [c for c in requested if c not in CATEGORY_BUILDERS]
    if invalid:
        raise ValueError(
            f"Invalid categories: {invalid}. Valid categories: {list(CATEGORY_BUILDERS)}"
        )
    return [CATEGORY_BUILDERS[c](settings) for c in requested]


async def run_import(
    archive: bytes | bytearray | memoryview | str | Path,
    settings: ImporterSettings,
    host: HostServices,
    *,
    categories: list[str] | None = None,
    conflict_mode: ConflictMode | None = None,
    concurrent: bool = False,
    raise_on_error: bool = False,
) -> ImportReport:
    """Import OggDude equipment data from an archive.

    Args:
        archive: Zip bytes or path to the zip file.
        settings: Importer settings (world/system ids, default categories, mode).
        host: File storage and document store collaborators.
        categories: Categories to import; defaults to ``settings.categories``.
        conflict_mode: Overrides ``settings.conflict_mode``.
        concurrent: Run categories concurrently instead of one after another.
        raise_on_error: Re-raise the first category failure instead of
            recording it in the report.

    Returns:
        ImportReport with one result per imported category and one failure
        per category that could not be imported.

    Raises:
        MalformedArchiveError: If the archive cannot be opened.
        ValueError: If an unknown category is requested.
    """
    contexts = build_contexts(settings, categories)
    mode = conflict_mode or settings.conflict_mode
    report = ImportReport()

    with load_archive(archive) as handle:
        source = ArchiveSource.from_archive(handle)

        async def _run(context: CategoryContext) -> CategoryImportResult | ImportFailure:
            try:
                return await process_elements(context, source, host, conflict_mode=mode)
            except ImportPipelineError as e:
                logger.error(f"Import of {e.category} failed at stage '{e.stage.value}': {e.message}")
                if raise_on_error:
                    raise
                return ImportFailure(category=e.category, stage=e.stage, message=e.message)

        if concurrent:
            # Every category finishes while the archive is open; the first
            # failure is re-raised only after that.
            outcomes = await asyncio.gather(
                *(_run(c) for c in contexts), return_exceptions=True
            )
            for outcome in outcomes:
                if isinstance(outcome, BaseException):
                    raise outcome
        else:
            outcomes = [await _run(c) for c in contexts]

    for outcome in outcomes:
        if isinstance(outcome, ImportFailure):
            report.failures.append(outcome)
        else:
            report.results.append(outcome)
    return report
