"""Recursive, deterministic file listing below a source root."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

IGNORED_DIRS = frozenset({"node_modules", "vendor", ".git", ".vite"})


def find_files_recursive(
    directory: Path,
    base: Path,
    extensions: tuple[str, ...] = (),
    ignore_dirs: frozenset[str] = IGNORED_DIRS,
) -> list[str]:
    """List files under directory as POSIX paths relative to base.

    Entries are visited in sorted order so the result, and therefore the
    "first candidate" fallback, does not depend on the filesystem.
    Unreadable directories are skipped.
    """
    results: list[str] = []
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return results

    for entry in entries:
        if entry.name in ignore_dirs:
            continue
        try:
            if entry.is_dir():
                results.extend(
                    find_files_recursive(entry, base, extensions, ignore_dirs)
                )
            elif entry.is_file() and (
                not extensions or entry.suffix in extensions
            ):
                results.append(entry.relative_to(base).as_posix())
        except OSError as exc:
            logger.debug("Skipping unreadable entry %s: %s", entry, exc)
    return results
