"""Logic for computing a stable content hash of the scanned PHP files."""

import hashlib
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def compute_files_hash(base: Path, relative_files: list[str]) -> str:
    """Hash the content of every existing file, tagged with its name.

    Each file is hashed on its own, the `name:digest` tags are joined in
    configuration order and the joined string is hashed again. Missing and
    unreadable files are left out, so adding one later changes the hash.
    """
    tags = []
    for name in relative_files:
        path = base / name
        if not path.is_file():
            continue
        try:
            content = path.read_bytes()
        except OSError as exc:
            logger.warning("Could not read %s, left out of the hash: %s", name, exc)
            continue
        tags.append(f"{name}:{hashlib.sha256(content).hexdigest()}")
    return hashlib.sha256("|".join(tags).encode("utf-8")).hexdigest()
