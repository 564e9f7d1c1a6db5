"""Utilities for normalizing theme-relative paths."""

import re

MIN_MARKER_RE = re.compile(r"\.min\.(js|css)$")
SOURCE_EXT_RE = re.compile(r"\.(js|css|scss)$")


def normalize_path(path: str) -> str:
    """Convert Windows separators to forward slashes."""
    return path.replace("\\", "/")


def strip_slashes(path: str) -> str:
    """Remove leading and trailing path separators."""
    return normalize_path(path).strip("/")


def get_base_name(path: str) -> str:
    """Return the file name without the '.min' marker and extension.

    js/components/slider.min.js -> slider
    """
    file_name = normalize_path(path).split("/")[-1]
    file_name = MIN_MARKER_RE.sub(r".\1", file_name)
    return SOURCE_EXT_RE.sub("", file_name)
