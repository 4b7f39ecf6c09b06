"""
Base models and exceptions for the OggDude data import system.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ImportStage(str, Enum):
    """Stages of a single category import, in execution order."""

    LOCATE = "locate"
    EXTRACT = "extract"
    PROVISION = "provision"
    UPLOAD = "upload"
    PARSE = "parse"
    FOLDER = "folder"
    MAP = "map"
    RESOLVE_ICONS = "resolve_icons"
    CREATE = "create"


class ConflictMode(str, Enum):
    """How documents that already exist for a record key are handled."""

    UPSERT = "upsert"  # Update documents with a matching key, create the rest
    APPEND = "append"  # Always create new documents


class OggDudeImportError(Exception):
    """Raised when an OggDude data import fails.

    Provides a user-facing message explaining what went wrong
    and, where possible, how to fix it.
    """


class MalformedArchiveError(OggDudeImportError):
    """Raised when the uploaded archive cannot be opened or read."""


class ImportPipelineError(OggDudeImportError):
    """A fatal failure in one category import, tagged with the failing stage."""

    def __init__(self, category: str, stage: ImportStage, message: str):
        self.category = category
        self.stage = stage
        self.message = message
        super().__init__(f"[{category}/{stage.value}] {message}")


class MissingMarkupFileError(ImportPipelineError):
    """The category's XML file is not present in the archive."""


class MalformedMarkupError(ImportPipelineError):
    """The category's XML file could not be parsed."""


class RemoteOperationError(ImportPipelineError):
    """A blocking file storage or document store call failed."""


class CategoryImportResult(BaseModel):
    """Outcome of one category import."""

    category: str = Field(description="Category name, e.g. 'armor'")
    folder_id: str | None = Field(default=None, description="Destination folder id")
    records: int = Field(default=0, description="Number of records mapped from the XML file")
    created: int = Field(default=0, description="Documents created")
    updated: int = Field(default=0, description="Existing documents updated in place")
    images_uploaded: int = Field(default=0, description="Images uploaded to world storage")
    images_failed: int = Field(default=0, description="Images whose upload failed")
    icons_defaulted: int = Field(
        default=0,
        description="Records that fell back to the category's default icon",
    )
    diagnostics: list[str] = Field(
        default_factory=list,
        description="Missing or mistyped mandatory fields recovered with defaults",
    )


class ImportFailure(BaseModel):
    """A category that could not be imported."""

    category: str
    stage: ImportStage
    message: str


class ImportReport(BaseModel):
    """Structured report for a full archive import."""

    results: list[CategoryImportResult] = Field(default_factory=list)
    failures: list[ImportFailure] = Field(default_factory=list)

    @property
    def status(self) -> str:
        """Return "success", "success_with_warnings" or "failed"."""
        if self.failures and not self.results:
            return "failed"
        if self.failures or any(
            r.diagnostics or r.images_failed for r in self.results
        ):
            return "success_with_warnings"
        return "success"

    def format(self) -> str:
        """Format the report as a readable text block.

        Returns:
            Multi-line formatted string suitable for MCP tool response.
        """
        lines: list[str] = []

        lines.append("OggDude Import Report")
        lines.append(f"Status: {self.status.upper().replace('_', ' ')}")
        lines.append("")

        if self.results:
            lines.append(f"Imported ({len(self.results)} categories):")
            for r in self.results:
                lines.append(
                    f"  {r.category}: {r.records} records "
                    f"({r.created} created, {r.updated} updated), "
                    f"{r.images_uploaded} images"
                )
                if r.images_failed:
                    lines.append(f"    {r.images_failed} image uploads failed")
                if r.icons_defaulted:
                    lines.append(f"    {r.icons_defaulted} records use the default icon")
                if r.diagnostics:
                    lines.append(f"    {len(r.diagnostics)} fields defaulted")
            lines.append("")

        if self.failures:
            lines.append(f"Failed ({len(self.failures)}):")
            for f in self.failures:
                lines.append(f"  - {f.category} at stage '{f.stage.value}': {f.message}")
            lines.append("")

        return "\n".join(lines).rstrip()
