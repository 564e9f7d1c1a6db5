"""Heuristics telling authored source modules apart from third-party libraries."""

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

HEAD_BYTES = 2000
MINIFIED_LINE_LENGTH = 500
INDENT_WINDOW = 500

BANNER_RE = re.compile(
    r"^/\*[!*]?\s*(?:@preserve|@license|@version|@name|\w+\s+v\d+\.\d+)",
    re.IGNORECASE,
)
DOTTED_CALL_RE = re.compile(r"[a-z]\.[a-z]{1,3}\(")
INDENTED_LINE_RE = re.compile(r"\n\s{2,}")
MIN_SUFFIX_RE = re.compile(r"\.min\.(js|css)$")


class LibraryClassifier:
    """Classifies resolved source files as authored sources or libraries."""

    def __init__(self, theme_path: Path, known_sources: list[str]) -> None:
        """Initialize with the theme root and base names that are never libraries."""
        self.theme_path = theme_path
        self.known_sources = set(known_sources)

    def is_library(self, relative_path: str) -> bool:
        """Return True when the file looks like a bundled third-party library.

        Only the first 2000 bytes are read. I/O errors fall back to the
        filename convention.
        """
        try:
            with (self.theme_path / relative_path).open("rb") as fh:
                head = fh.read(HEAD_BYTES).decode("utf-8", errors="replace")
        except OSError as exc:
            logger.debug(
                "Library check falls back to filename for %s: %s", relative_path, exc
            )
            return self.is_library_by_name(relative_path)

        if BANNER_RE.match(head):
            return True

        if len(head.split("\n", 1)[0]) > MINIFIED_LINE_LENGTH:
            return True

        if DOTTED_CALL_RE.search(head) and not INDENTED_LINE_RE.search(
            head[:INDENT_WINDOW]
        ):
            return True

        return self.is_library_by_name(relative_path)

    def is_library_by_name(self, relative_path: str) -> bool:
        """Filename rule: '.min.' marks a library unless it is a known source."""
        file_name = relative_path.replace("\\", "/").rsplit("/", 1)[-1]
        if ".min." not in file_name:
            return False
        return MIN_SUFFIX_RE.sub("", file_name) not in self.known_sources
