"""File writer and optional pretty-printing for generated files."""
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, List

from strapigen.generators.types import GeneratedFile

log = logging.getLogger(__name__)


def format_code(code: str, filename: str) -> str:
    """
    Pretty-print with prettier when it is on PATH.

    Any failure returns the input unchanged; formatting never fails a run.
    """
    prettier = shutil.which("prettier")
    if prettier is None:
        return code
    try:
        result = subprocess.run(
            [prettier, "--stdin-filepath", filename],
            input=code,
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (OSError, subprocess.SubprocessError) as e:
        log.debug("prettier failed for %s: %s", filename, e)
        return code
    if result.returncode != 0:
        log.debug("prettier exited %d for %s: %s", result.returncode, filename, result.stderr.strip())
        return code
    return result.stdout


def write_files(files: List[GeneratedFile], out_dir: Path, format: bool = False) -> List[Path]:
    """
    Write generated files to the output directory.

    Args:
        files: List of GeneratedFile objects to write
        out_dir: Base output directory path
        format: Run each file through ``format_code`` first

    Returns:
        Absolute paths written, in input order
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for file in files:
        file_path = out_dir / file.path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        content = format_code(file.content, file.path) if format else file.content
        file_path.write_text(content, encoding="utf-8")
        written.append(file_path)
    return written


def remove_paths(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.is_dir():
            shutil.rmtree(path)
        elif path.exists():
            path.unlink()
        log.info("Removed %s", path)
