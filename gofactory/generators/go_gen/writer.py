"""File writer for Go generation."""
import os
import shutil
import tempfile
from pathlib import Path
from typing import List

from gofactory.core.errors import WriteError
from gofactory.generators.go_gen.types import GeneratedFile


def write_files(files: List[GeneratedFile], out_dir: Path) -> List[str]:
    """
    Write generated files under the output directory.

    Files are staged in a temporary directory next to ``out_dir`` and moved
    into place only once every file has been staged, so a failure while
    staging leaves ``out_dir`` as it was.

    Args:
        files: GeneratedFile objects to write
        out_dir: Base output directory path

    Returns:
        Relative paths written, in input order

    Raises:
        WriteError: if any file cannot be staged or moved into place
    """
    out_dir = Path(out_dir)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=".gofactory-", dir=out_dir.parent))
    except OSError as e:
        raise WriteError(f"cannot prepare output directory {out_dir}: {e}") from e

    try:
        for file in files:
            staged = _resolve(staging, file.path)
            staged.parent.mkdir(parents=True, exist_ok=True)
            staged.write_text(file.content, encoding="utf-8")

        written = []
        for file in files:
            target = _resolve(out_dir, file.path)
            target.parent.mkdir(parents=True, exist_ok=True)
            os.replace(staging / file.path, target)
            written.append(file.path)
        return written
    except OSError as e:
        raise WriteError(f"failed to write generated files: {e}") from e
    finally:
        shutil.rmtree(staging, ignore_errors=True)


def _resolve(root: Path, relative: str) -> Path:
    path = (root / relative).resolve()
    if not path.is_relative_to(root.resolve()):
        raise WriteError(f"refusing to write outside the output directory: {relative}")
    return path
