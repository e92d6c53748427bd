"""
Cross-platform file system utilities for BootstrapKit.

This module provides the file operations used while installing release assets:
- Archive extraction (tar.gz, zip) with directory traversal protection
- Safe file operations (atomic writes, safe deletion)
- Temporary scratch directories
"""

import os
import shutil
import sys
import tarfile
import tempfile
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

from bootstrapkit.core.exceptions import (
    BootstrapKitError,
    ExtractionError,
    InsecureArchiveError,
    UnsupportedArchiveFormat,
)

IS_WINDOWS = os.name == "nt"

TAR_GZ_SUFFIX = ".tar.gz"
ZIP_SUFFIX = ".zip"


class FilesystemError(BootstrapKitError):
    """Base exception for filesystem operations."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check whether ``path`` is located under ``parent``.

    Example:
        >>> is_relative_to(Path('/tmp/a/b'), Path('/tmp'))
        True
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_tar(archive_path: Union[str, Path], destination: Union[str, Path]) -> Path:
    """
    Extract a gzip compressed tarball.

    Args:
        archive_path: Path to the ``.tar.gz`` file
        destination: Directory to extract to (created if missing)

    Returns:
        The destination directory

    Raises:
        ExtractionError: If the archive is missing or corrupt
        InsecureArchiveError: If archive contains malicious paths
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ExtractionError(f"Archive not found: {archive_path}")

    destination.mkdir(parents=True, exist_ok=True)

    try:
        with tarfile.open(archive_path, "r:gz") as tar:
            # Validate all paths first
            for member in tar.getmembers():
                _validate_archive_path(member.name, destination)

            if sys.version_info >= (3, 12):
                tar.extractall(destination, filter="data")
            else:
                tar.extractall(destination)
    except InsecureArchiveError:
        raise
    except (tarfile.TarError, OSError, EOFError) as e:
        raise ExtractionError(f"Failed to extract {archive_path}: {e}") from e

    return destination


def extract_zip(archive_path: Union[str, Path], destination: Union[str, Path]) -> Path:
    """
    Extract a ZIP archive.

    Args:
        archive_path: Path to the ``.zip`` file
        destination: Directory to extract to (created if missing)

    Returns:
        The destination directory

    Raises:
        ExtractionError: If the archive is missing or corrupt
        InsecureArchiveError: If archive contains malicious paths
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ExtractionError(f"Archive not found: {archive_path}")

    destination.mkdir(parents=True, exist_ok=True)

    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            members = zf.namelist()

            for member in members:
                _validate_archive_path(member, destination)

            zf.extractall(destination)

            if not IS_WINDOWS:
                _restore_zip_modes(zf, destination)
    except InsecureArchiveError:
        raise
    except (zipfile.BadZipFile, OSError) as e:
        raise ExtractionError(f"Failed to extract {archive_path}: {e}") from e

    return destination


def _restore_zip_modes(zf: zipfile.ZipFile, destination: Path) -> None:
    # zipfile drops Unix permissions; the high 16 bits of external_attr hold them
    for info in zf.infolist():
        mode = (info.external_attr >> 16) & 0o777
        if mode and not info.is_dir():
            os.chmod(destination / info.filename, mode)


def extract_asset(archive_path: Union[str, Path]) -> Path:
    """
    Extract a downloaded release asset next to the archive.

    The archive is extracted into a sibling directory named after the
    archive without its extension. Release archives either wrap their
    contents in a folder carrying that same name or not; when such an inner
    folder exists it is returned instead of the extraction root.

    Args:
        archive_path: Path to a ``.tar.gz`` or ``.zip`` archive

    Returns:
        Directory containing the asset contents

    Raises:
        UnsupportedArchiveFormat: If the extension is not supported
        ExtractionError: If extraction fails

    Example:
        >>> extract_asset(Path('/tmp/my-app-1.0.0-x86_64-unknown-linux-gnu.tar.gz'))
        PosixPath('/tmp/my-app-1.0.0-x86_64-unknown-linux-gnu')
    """
    archive_path = Path(archive_path)
    archive_name = archive_path.name.lower()

    if archive_name.endswith(TAR_GZ_SUFFIX):
        base_name = archive_path.name[: -len(TAR_GZ_SUFFIX)]
        root = extract_tar(archive_path, archive_path.with_name(base_name))
    elif archive_name.endswith(ZIP_SUFFIX):
        base_name = archive_path.name[: -len(ZIP_SUFFIX)]
        root = extract_zip(archive_path, archive_path.with_name(base_name))
    else:
        raise UnsupportedArchiveFormat(f"Unsupported file extension: {archive_path}")

    inner = root / root.name
    return inner if inner.is_dir() else root


# ============================================================================
# Safe File Operations
# ============================================================================


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    This ensures the file is never in a partially-written state.
    If the write fails, the original file (if any) remains unchanged.

    Args:
        file_path: Path to write to
        content: Content to write (string or bytes)
        encoding: Text encoding (used only for string content)
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Create temp file in same directory (ensures same filesystem)
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)

    except Exception:
        temp_path.unlink(missing_ok=True)
        raise


def safe_rmtree(
    path: Union[str, Path], require_prefix: Union[str, Path, None] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails

    Example:
        >>> safe_rmtree('/tmp/build', require_prefix='/tmp')
        >>> safe_rmtree('/usr/bin', require_prefix='/home')  # ValueError
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not is_relative_to(path, require_prefix):
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        if IS_WINDOWS:

            def handle_remove_readonly(func, path, exc):
                """Error handler for Windows read-only files."""
                if not os.access(path, os.W_OK):
                    os.chmod(path, 0o777)
                    func(path)
                else:
                    raise

            shutil.rmtree(path, onerror=handle_remove_readonly)
        else:
            shutil.rmtree(path)

    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


@contextmanager
def temporary_directory(
    prefix: str = "bootstrapkit_", cleanup: bool = True, parent: Optional[Path] = None
):
    """
    Context manager for temporary directory with automatic cleanup.

    Args:
        prefix: Prefix for temp directory name
        cleanup: If True, remove directory on exit
        parent: Directory to create the temporary directory in

    Yields:
        Path to temporary directory

    Example:
        >>> with temporary_directory() as tmp:
        ...     (tmp / 'file.txt').write_text('test')
    """
    if parent is not None:
        Path(parent).mkdir(parents=True, exist_ok=True)
    temp_dir = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))

    try:
        yield temp_dir
    finally:
        if cleanup and temp_dir.exists():
            safe_rmtree(temp_dir)


__all__ = [
    "FilesystemError",
    "is_relative_to",
    "extract_tar",
    "extract_zip",
    "extract_asset",
    "atomic_write",
    "safe_rmtree",
    "temporary_directory",
]
