"""
OggDude Importer MCP Server
Imports OggDude character generator data into a host world.
"""

import logging
from pathlib import Path
from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from .base import ConflictMode, OggDudeImportError
from .config import load_settings
from .host import HostServices
from .items import CATEGORY_BUILDERS
from .pipeline import run_import
from .storage import JsonDocumentStore, LocalFileStorage

logger = logging.getLogger("oggdude-importer")

logging.basicConfig(
    level=logging.DEBUG,
    )

settings = load_settings()
data_path = settings.data_dir.resolve()
logger.debug(f"📂 Data path: {data_path}")

host = HostServices(
    files=LocalFileStorage(data_path / "files"),
    documents=JsonDocumentStore(data_path / "documents"),
)
logger.debug("✅ Host storage initialized")

mcp = FastMCP(
    name="oggdude-importer"
)


# ----------------------------------------------------------------------
# Tools
# ----------------------------------------------------------------------

@mcp.tool
async def import_oggdude_data(
    file_path: Annotated[str, Field(description="Path to the OggDude data zip file")],
    categories: Annotated[str | None, Field(description="Comma-separated categories to import: armor, weapon, gear. Omit for the configured default.")] = None,
    conflict_mode: Annotated[str | None, Field(description="Re-import behavior: 'upsert' (update documents with the same key) or 'append' (always create)")] = None,
) -> str:
    """Import equipment from an OggDude data archive.

    Reads the archive's XML files and equipment images, uploads the images to
    world storage, and creates one item document per record in a
    'Swes - <Category>' folder. Re-running an import updates existing items
    by key unless conflict_mode is 'append'.
    """
    category_list = [c.strip().lower() for c in categories.split(",")] if categories else None

    mode = None
    if conflict_mode:
        try:
            mode = ConflictMode(conflict_mode.lower())
        except ValueError:
            return f"Invalid conflict mode '{conflict_mode}'. Use: upsert, append"

    try:
        report = await run_import(
            Path(file_path),
            settings,
            host,
            categories=category_list,
            conflict_mode=mode,
        )
    except OggDudeImportError as e:
        return f"Import error: {e}"
    except ValueError as e:
        return f"Import error: {e}"

    return report.format()


@mcp.tool
def list_import_categories() -> str:
    """List the equipment categories the importer supports and where their data goes."""
    lines = []
    for name, build in CATEGORY_BUILDERS.items():
        context = build(settings)
        lines.append(
            f"- {name}: {context.markup_directory}/{context.markup_file_name} -> "
            f"folder '{context.folder_name}', images in {context.world_path}"
        )
    return "\n".join(lines)


logger.debug("✅ All tools successfully registered. OggDude importer running!")

def main() -> None:
    """Main entry point for the OggDude Importer MCP Server."""
    mcp.run()

if __name__ == "__main__":
    main()
