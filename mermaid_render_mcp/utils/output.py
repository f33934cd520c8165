from __future__ import annotations

import os
import stat
import tempfile
from datetime import datetime
from uuid import uuid4

from loguru import logger

from ..exceptions import OutputWriteError
from ..schema import InlineOutput, PersistedOutput
from ..shard import constants as C


def resolve_output_path(output_path: str | None, scratch_dir: str | None = None) -> str:
    """Return the absolute path an artifact should be written to.

    An explicit ``output_path`` is user-expanded and made absolute. Otherwise a
    unique file name is synthesised inside ``scratch_dir`` (or the system temp
    directory) from a timestamp and a short UUID, so concurrent calls never
    share a file.
    """
    if output_path:
        return os.path.abspath(os.path.expanduser(output_path))

    directory = os.path.abspath(scratch_dir) if scratch_dir else tempfile.gettempdir()
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    unique_id = uuid4().hex[:8]
    return os.path.join(directory, f"{C.OUTPUT_FILE_PREFIX}-{timestamp}-{unique_id}{C.OUTPUT_FILE_SUFFIX}")


def ensure_parent_directory(path: str) -> str:
    """Create the directory containing ``path`` if needed. Returns the directory."""
    directory = os.path.dirname(path)
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        raise OutputWriteError(path, e) from e
    return directory


def _target_mode(path: str) -> int:
    """Permission bits for ``path``: kept when it exists, else 0o666 minus the umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_artifact(data: bytes, path: str) -> PersistedOutput:
    """Write ``data`` to ``path`` atomically and report where it landed.

    Bytes go to a temporary sibling first and are moved into place with
    ``os.replace``; on any failure the temporary file is removed and nothing
    is left at ``path``.

    Raises:
        OutputWriteError: the directory or file could not be written.
    """
    directory = ensure_parent_directory(path)
    tmp_path: str | None = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=f".{os.path.basename(path)}.", suffix=".tmp", dir=directory)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            # mkstemp creates 0600; give the artifact the mode a plain open() would.
            os.fchmod(f.fileno(), _target_mode(path))
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError as e:
        raise OutputWriteError(path, e) from e
    finally:
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError as cleanup_error:
                logger.warning(f"Could not remove temporary file {tmp_path}: {cleanup_error}")

    return PersistedOutput(path=path, size_bytes=len(data))


def persist_artifact(data: bytes, output_path: str | None, scratch_dir: str | None = None) -> PersistedOutput:
    """Resolve the output location for ``data`` and write it there."""
    return write_artifact(data, resolve_output_path(output_path, scratch_dir))


def inline_artifact(text: str) -> InlineOutput:
    return InlineOutput(text=text)


__all__ = [
    "resolve_output_path",
    "ensure_parent_directory",
    "write_artifact",
    "persist_artifact",
    "inline_artifact",
]
