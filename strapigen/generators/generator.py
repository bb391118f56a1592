"""Orchestrator for code generation."""
import logging
from pathlib import Path
from typing import List, Optional, Set

from strapigen.generators.planner import OutputPlanner
from strapigen.generators.types import GeneratedFile, GenerationOptions
from strapigen.generators.writer import write_files
from strapigen.schema.models import ParsedSchema

log = logging.getLogger(__name__)


def generate_project(
    schema: ParsedSchema,
    options: GenerationOptions,
    out_dir: Optional[Path] = None,
    only: Optional[Set[str]] = None,
) -> List[GeneratedFile]:
    """
    Generate every enabled artifact for a parsed schema.

    Args:
        schema: Normalized schema
        options: Generation options
        out_dir: When given, files are also written there (unformatted)
        only: Feature names to render; the rest of the plan still shapes imports

    Returns:
        List of GeneratedFile objects, shared files first
    """
    if options.advanced_relations and options.v4:
        log.warning("Advanced relation format requires Strapi v5; using simple ids for v4")

    files = OutputPlanner(schema, options, only=only).plan()
    log.info(
        "Generated %d files for %d collections, %d singles, %d components",
        len(files), len(schema.collections), len(schema.singles), len(schema.components),
    )

    if out_dir is not None:
        write_files(files, out_dir)
    return files
