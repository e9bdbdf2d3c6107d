"""Dependency directory scanning for depsize."""

import logging
import os
import time
from pathlib import Path
from typing import Callable, Optional

from depsize.manifest import read_manifest
from depsize.models import PackageRecord

log = logging.getLogger(__name__)

DEFAULT_ROOT = "node_modules"
NO_EXTENSION = "(no extension)"


# =============================================================================
# Size aggregation
# =============================================================================


def get_directory_size(path: Path, strict: bool = False) -> int:
    """
    Total apparent size of all regular files below a directory.

    Symbolic links are neither followed nor counted.

    Args:
        path: Directory to measure
        strict: If True, any unreadable entry raises instead of being skipped

    Returns:
        Size in bytes
    """
    total_size = 0

    def _scan(p: str) -> None:
        nonlocal total_size
        try:
            with os.scandir(p) as entries:
                for entry in entries:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total_size += entry.stat(follow_symlinks=False).st_size
                        elif entry.is_dir(follow_symlinks=False):
                            _scan(entry.path)
                    except OSError as e:
                        if strict:
                            raise
                        log.warning("Skipping %s: %s", entry.path, e)
        except OSError as e:
            if strict:
                raise
            log.warning("Cannot read directory %s: %s", p, e)

    _scan(os.fspath(path))
    return total_size


# =============================================================================
# File type profile
# =============================================================================


def extension_label(filename: str) -> str:
    """Histogram label for a file name: its lower-cased extension."""
    stem, dot, ext = filename.rpartition(".")
    if not dot or not stem or not ext:
        return NO_EXTENSION
    return ext.lower()


def profile_file_types(path: Path) -> tuple[int, list[tuple[str, int]]]:
    """
    Count the regular files below a directory, grouped by extension.

    Directories that cannot be read are skipped.

    Returns:
        Tuple of (file_count, [(extension, count), ...]) with the most common
        extension first; equal counts keep the order they were first seen in
    """
    counts: dict[str, int] = {}
    file_count = 0

    def _on_error(e: OSError) -> None:
        log.warning("Skipping unreadable directory %s: %s", e.filename, e)

    for dirpath, _dirnames, filenames in os.walk(path, onerror=_on_error):
        for filename in filenames:
            # os.walk lists symlinks to files among filenames
            if os.path.islink(os.path.join(dirpath, filename)):
                continue
            label = extension_label(filename)
            counts[label] = counts.get(label, 0) + 1
            file_count += 1

    file_types = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return file_count, file_types


# =============================================================================
# Package scanning
# =============================================================================


def relative_age(mtime: float, now: Optional[float] = None) -> Optional[str]:
    """
    Describe how long ago a timestamp was, e.g. '5 minutes ago'.

    Returns None for timestamps in the future.
    """
    if now is None:
        now = time.time()
    seconds = int(now - mtime)
    if seconds < 0:
        return None
    if seconds < 60:
        return f"{seconds} seconds ago"
    elif seconds < 3600:
        return f"{seconds // 60} minutes ago"
    elif seconds < 86400:
        return f"{seconds // 3600} hours ago"
    else:
        return f"{seconds // 86400} days ago"


def scan_package(
    path: Path, now: Optional[float] = None, strict: bool = False
) -> PackageRecord:
    """
    Build the record for a single package directory.

    Args:
        path: Package directory
        now: Reference time for the relative age label (defaults to now)
        strict: If True, unreadable entries in the size walk raise OSError

    Returns:
        PackageRecord with size, file profile and manifest fields
    """
    size = get_directory_size(path, strict=strict)
    file_count, file_types = profile_file_types(path)

    try:
        last_updated = relative_age(path.stat().st_mtime, now)
    except OSError as e:
        log.warning("Cannot stat %s: %s", path, e)
        last_updated = None

    fields = {}
    manifest = read_manifest(path)
    if manifest is not None:
        fields = {
            "declared_name": manifest.name,
            "version": manifest.version,
            "description": manifest.description,
            "author": manifest.author,
            "license": manifest.license,
            "homepage": manifest.homepage,
            "repository": manifest.repository_url,
            "dependency_count": manifest.dependency_count,
        }

    return PackageRecord(
        name=path.name,
        path=str(path.absolute()),
        size_bytes=size,
        file_count=file_count,
        file_types=file_types,
        last_updated=last_updated,
        **fields,
    )


def scan_packages(
    root: Path,
    progress_callback: Optional[Callable[[str, int, int], None]] = None,
    strict: bool = False,
) -> list[PackageRecord]:
    """
    Scan every immediate subdirectory of a dependency directory.

    Files at the top level of the root are ignored.

    Args:
        root: Dependency directory, e.g. ./node_modules
        progress_callback: Optional callback(name, current, total) per package
        strict: If True, an unreadable entry inside any package aborts the scan

    Returns:
        Package records, largest first; equal sizes keep directory order

    Raises:
        OSError: If the root does not exist, is not a directory or cannot be read
    """
    with os.scandir(root) as entries:
        package_dirs = [Path(entry.path) for entry in entries if entry.is_dir()]

    log.debug("Found %d package directories in %s", len(package_dirs), root)

    now = time.time()
    records = []
    for i, package_dir in enumerate(package_dirs, 1):
        records.append(scan_package(package_dir, now=now, strict=strict))
        if progress_callback:
            progress_callback(package_dir.name, i, len(package_dirs))

    records.sort(key=lambda r: r.size_bytes, reverse=True)
    return records
