from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import httpx

from strapigen.core.config import Configuration
from strapigen.core.errors import StrapiGenError, SyncError
from strapigen.core.workflow import RunStage, StageResult
from strapigen.generators.generator import generate_project
from strapigen.generators.planner import OutputPlanner
from strapigen.generators.types import GeneratedFile, GenerationOptions
from strapigen.generators.writer import write_files
from strapigen.schema.fetcher import StrapiSchemaClient
from strapigen.schema.models import ParsedSchema
from strapigen.schema.parser import normalize
from strapigen.schema.raw import RawSchema

log = logging.getLogger(__name__)

FEATURE_NAMES = ("types", "services", "actions", "schemas", "upload")


@dataclass
class SyncResult:
    run_id: str
    strapi_version: str
    files: list[GeneratedFile] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    orphans: list[Path] = field(default_factory=list)
    stages: list[StageResult] = field(default_factory=list)
    schema: Optional[ParsedSchema] = None


class SyncEngine:
    """Runs Fetching -> Normalizing -> Generating -> Writing for one project."""

    def __init__(
        self,
        config: Configuration,
        out_dir: Path,
        only: Optional[set[str]] = None,
        dry_run: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        run_id: Optional[str] = None,
    ):
        self.config = config
        self.out_dir = out_dir
        self.only = only
        self.dry_run = dry_run
        self.run_id = run_id or uuid.uuid4().hex[:8]
        self.client = StrapiSchemaClient(config.url, config.token, config.api_prefix, transport=transport)
        self.stage = RunStage.IDLE

    def _set_stage(self, stage: RunStage) -> None:
        self.stage = stage
        log.info("Running stage", extra={"run_id": self.run_id, "stage": stage.value})

    def _fail(self, error: Exception) -> SyncError:
        stage = self.stage
        self.stage = RunStage.FAILED
        message = error.message if isinstance(error, StrapiGenError) else str(error) or type(error).__name__
        log.error("Stage failed: %s", message, extra={"run_id": self.run_id, "stage": stage.value})
        return SyncError(stage, message)

    def options(self, strapi_version: str) -> GenerationOptions:
        return GenerationOptions.from_config(self.config, strapi_version)  # type: ignore[arg-type]

    def _fetch(self) -> tuple[RawSchema, str]:
        raw = asyncio.run(self.client.fetch_schema())
        version = self.config.strapi_version
        if self.config.options.detect_version:
            detection = asyncio.run(self.client.detect_version(raw))
            log.debug(detection.message, extra={"run_id": self.run_id, "stage": self.stage.value})
            if detection.detected and detection.detected != version:
                log.warning(
                    "Configured strapiVersion %s but the server looks like %s; using %s",
                    version, detection.detected, detection.detected,
                    extra={"run_id": self.run_id, "stage": self.stage.value},
                )
                version = detection.detected
        return raw, version

    def run(self) -> SyncResult:
        """
        Execute one generation run.

        Raises:
            SyncError: On the first failing stage, chained to the cause
        """
        result = SyncResult(run_id=self.run_id, strapi_version=self.config.strapi_version)
        try:
            self._set_stage(RunStage.FETCHING)
            raw, result.strapi_version = self._fetch()
            result.stages.append(StageResult(self.stage, True, f"{len(raw.content_types)} content types"))

            self._set_stage(RunStage.NORMALIZING)
            schema = normalize(raw)
            result.schema = schema
            result.stages.append(StageResult(
                self.stage, True,
                f"{len(schema.collections)} collections, {len(schema.singles)} singles, "
                f"{len(schema.components)} components",
            ))

            self._set_stage(RunStage.GENERATING)
            options = self.options(result.strapi_version)
            result.files = generate_project(schema, options, only=self.only)
            result.orphans = OutputPlanner(schema, options).find_orphans(self.out_dir)
            result.stages.append(StageResult(
                self.stage, True, f"{len(result.files)} files", [f.path for f in result.files]
            ))

            self._set_stage(RunStage.WRITING)
            if not self.dry_run:
                result.written = write_files(result.files, self.out_dir, format=self.config.options.format)
            result.stages.append(StageResult(self.stage, True, f"{len(result.written)} files written"))
        except Exception as e:
            raise self._fail(e) from e

        self._set_stage(RunStage.DONE)
        return result
