"""Classification of resolved registration paths as build or raw assets."""

from asset_resolver.normalize_path import normalize_path

MIN_MARKER = ".min."
SCRIPT_SEGMENT = "js"
STYLE_SEGMENT = "css"


def remove_build_prefix(path: str, build_folders: list[str]) -> str:
    """Strip one leading build-folder segment.

    dist/css/components/slider.min.css -> css/components/slider.min.css
    """
    path = normalize_path(path)
    for folder in build_folders:
        if path.startswith(folder + "/"):
            return path[len(folder) + 1 :]
    return path


def is_build_path(path: str, build_folders: list[str]) -> bool:
    """Check whether a path points at compiled output rather than a source."""
    path = normalize_path(path)
    first_segment = path.split("/", 1)[0]
    if "/" in path and first_segment in build_folders:
        return True
    return MIN_MARKER in path.rsplit("/", 1)[-1]


def is_script_path(path: str) -> bool:
    """Check whether a path names a JavaScript file."""
    return normalize_path(path).endswith(".js")


def strip_type_segment(parts: list[str]) -> list[str]:
    """Drop a leading 'js' or 'css' directory.

    Build trees keep scripts and styles under js/ and css/ while source trees
    use other top-level folders (scss/, sources/js/, ...).
    """
    if parts and parts[0] in (SCRIPT_SEGMENT, STYLE_SEGMENT):
        return parts[1:]
    return parts
