"""Filesystem helpers for gendoc."""

from __future__ import annotations

import mimetypes
import os
import stat
import tempfile
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE
from .exceptions import OutputWriteError
from .models import EmbeddedImage

MAX_FILE_SIZE_ENV_VAR = "GENDOC_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum size of an input, included or embedded file.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["GENDOC_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def resolve_relative(raw_path: str, current_file: str) -> Path:
    """Resolve `raw_path` against the directory of the file being parsed.

    Args:
        raw_path: Path as written in the document.
        current_file: File that contains the directive; empty for top-level
            inputs, which are taken relative to the working directory.

    Returns:
        Path: Path to open.

    Examples:
        resolve_relative("intro.xml", "docs/manual.xml")  # Path("docs/intro.xml")
        resolve_relative("manual.xml", "")  # Path("manual.xml")
    """
    path = Path(raw_path.strip())
    if not current_file or path.is_absolute():
        return path
    return Path(current_file).parent / path


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a regular file.

    Raises:
        IOError: If the path is inaccessible or not a regular file.
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        raise IOError(error.strerror or str(error)) from error
    except ValueError as error:
        raise IOError(str(error)) from error

    if not stat.S_ISREG(stat_result.st_mode):
        raise IOError("not a regular file")

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int):
    """Reject files larger than `max_size` bytes.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        raise IOError(f"exceeds the maximum allowed size of {max_size} bytes")


def read_binary(filepath: Path, max_size: int) -> bytes:
    """Read a whole file after checking its type and size.

    Raises:
        IOError: If the file is missing, not a regular file, too large or
            unreadable. The message does not repeat the file name.
    """
    enforce_file_size(collect_file_stat(filepath), max_size)
    try:
        return filepath.read_bytes()
    except OSError as error:
        raise IOError(error.strerror or str(error)) from error


def read_source(filepath: Path, max_size: int) -> str:
    """Read a UTF-8 document or source file.

    Raises:
        IOError: As `read_binary`, or when the content is not valid UTF-8.
    """
    data = read_binary(filepath, max_size)
    try:
        return data.decode("UTF-8")
    except UnicodeDecodeError as error:
        raise IOError(f"not valid UTF-8 ({error.reason} at byte {error.start})") from error


def read_image(filepath: Path, max_size: int) -> EmbeddedImage:
    """Load an image for embedding as a data URI.

    The MIME type is guessed from the file extension.

    Raises:
        IOError: If the file cannot be read, is empty, or does not look like
            an image.
    """
    mime, _ = mimetypes.guess_type(filepath.name)
    if mime is None or not mime.startswith("image/"):
        raise IOError("not an image")
    data = read_binary(filepath, max_size)
    if not data:
        raise IOError("empty file")
    return EmbeddedImage(mime, data)


def write_output(filepath: Path, content: str):
    """Write the finished document atomically.

    The content goes to a temporary file in the destination directory which
    then replaces `filepath`, so a failed build never leaves a truncated
    document behind.

    Raises:
        OutputWriteError: If the destination cannot be written.
    """
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent, newline=""
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.chmod(temp_path, 0o644)
        os.replace(temp_path, filepath)
    except OSError as error:
        raise OutputWriteError(filepath, error.strerror or str(error)) from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
