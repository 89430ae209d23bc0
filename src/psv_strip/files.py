"""PSV Strip - File-level strip and restore.

Everything is computed in memory first. Outputs are written to a temporary
file beside the destination, fsynced, then renamed into place, so a failed
run never leaves a complete-looking output behind. The input is only read.
"""
from __future__ import annotations

import os
import tempfile
from pathlib import Path

from psv_core.protocol import LIC_SUFFIX, RESTORED_MARKER, STRIPPED_MARKER
from .const import PsvError
from .logic import Progress, no_progress, restore_dump, strip_dump
from .sidecar import load_record, render_sidecar


def lic_path_for(path: Path) -> Path:
    return path.with_name(path.name + LIC_SUFFIX)


def stripped_path_for(path: Path) -> Path:
    return path.with_name(path.stem + STRIPPED_MARKER + path.suffix)


def restored_path_for(path: Path) -> Path:
    return path.with_name(path.stem + RESTORED_MARKER + path.suffix)


def _same_file(a: Path, b: Path) -> bool:
    return a.resolve() == b.resolve()


def _read_input(path: Path) -> bytes:
    if not path.is_file():
        raise PsvError("E_INPUT_MISSING", str(path))
    try:
        return path.read_bytes()
    except OSError as e:
        raise PsvError("E_INPUT_MISSING", f"{path}: {e.strerror}") from e


def write_atomic(path: Path, data: bytes) -> None:
    """Write data to path via a temporary sibling and os.replace."""
    path = Path(path)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise PsvError("E_WRITE_FAILED", f"{path}: {e.strerror or e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)


def strip_file(
    src: Path,
    out: Path | None = None,
    lic: Path | None = None,
    save: bool = False,
    progress: Progress = no_progress,
) -> tuple[Path, Path | None]:
    """Strip src into out (default <stem>.stripped<suffix>).

    With save, the removed content goes to lic (default <src>-lic), written
    after the stripped image is in place; if that write fails the stripped
    image is removed again. Returns (out, lic or None).
    """
    src = Path(src)
    out = Path(out) if out is not None else stripped_path_for(src)
    lic = Path(lic) if lic is not None else lic_path_for(src)

    data = _read_input(src)
    for dest in ([out, lic] if save else [out]):
        if _same_file(dest, src):
            raise PsvError("E_OUTPUT_IS_INPUT", str(dest))
    if save and _same_file(out, lic):
        raise PsvError("E_OUTPUT_IS_INPUT", f"{out} is also the header/license file")

    progress(f"Stripping PSV header and license from '{src}'...")
    stripped, record = strip_dump(data, lambda msg: progress(f"   {msg}"))

    write_atomic(out, stripped)
    if not save:
        progress("Process complete")
        return out, None

    try:
        write_atomic(lic, render_sidecar(record, source=str(src)).encode("utf-8"))
    except PsvError:
        # A stripped image without its saved license data is not a usable result.
        out.unlink(missing_ok=True)
        raise
    progress("Process complete")
    progress(f"   Header/license info saved to '{lic}'")
    return out, lic


def restore_file(
    src: Path,
    out: Path | None = None,
    lic: Path | None = None,
    progress: Progress = no_progress,
) -> Path:
    """Restore a stripped src into out (default <stem>.restored<suffix>) using lic (default <src>-lic)."""
    src = Path(src)
    out = Path(out) if out is not None else restored_path_for(src)
    lic = Path(lic) if lic is not None else lic_path_for(src)

    stripped = _read_input(src)
    if _same_file(out, src) or _same_file(out, lic):
        raise PsvError("E_OUTPUT_IS_INPUT", str(out))
    if not lic.is_file():
        raise PsvError("E_LIC_MISSING", str(lic))

    progress(f"Restoring PSV header and license to '{src}'...")
    progress("   Reading header/license data")
    record = load_record(lic)
    restored = restore_dump(stripped, record, lambda msg: progress(f"   {msg}"))

    write_atomic(out, restored)
    progress("Process complete")
    progress(f"   Restored to '{out}'")
    return out
