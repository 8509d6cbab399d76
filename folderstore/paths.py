"""
Mapping between folder paths and flat object keys.

A folder path is a tuple of segments, the root is the empty tuple. Keys in the object
store are the segments joined with DELIMITER, so the file "x.txt" in folder ("a", "b")
is stored under "a/b/x.txt". A folder exists as long as some key starts with its prefix;
empty folders are kept alive by a zero-byte SENTINEL_NAME object.
"""

from typing import Final, Iterable

from folderstore.errors import DepthExceeded, InvalidSegment, NoParent

FolderPath = tuple[str, ...]

DELIMITER: Final[str] = "/"
SENTINEL_NAME: Final[str] = ".keep"
MAX_DEPTH: Final[int] = 6
ROOT: Final[FolderPath] = ()


def join(path: FolderPath, name: str) -> FolderPath:
    if not name:
        raise InvalidSegment(name, "name cannot be empty")
    if DELIMITER in name:
        raise InvalidSegment(name, f"name cannot contain {DELIMITER!r}")
    if name == SENTINEL_NAME:
        raise InvalidSegment(name, "this name is reserved")
    return path + (name,)


def depth(path: FolderPath) -> int:
    return len(path)


def parent(path: FolderPath) -> FolderPath:
    if not path:
        raise NoParent()
    return path[:-1]


def check_depth(path: FolderPath) -> FolderPath:
    """Return the path unchanged, or raise DepthExceeded if it is nested too deeply"""
    if depth(path) > MAX_DEPTH:
        raise DepthExceeded(format_path(path), MAX_DEPTH)
    return path


def object_key(path: FolderPath, leaf: str) -> str:
    return DELIMITER.join(path + (leaf,))


def key_prefix(path: FolderPath) -> str:
    """The listing prefix for a folder: "" for the root, "a/b/" for ("a", "b")"""
    if not path:
        return ""
    return DELIMITER.join(path) + DELIMITER


def leaf_name(key: str) -> str:
    return key.rstrip(DELIMITER).rsplit(DELIMITER, 1)[-1]


def validate_path(segments: Iterable[str]) -> FolderPath:
    """Build a folder path from its segments, validating every segment as in join and the total depth"""
    path = ROOT
    for name in segments:
        path = join(path, name)
    return check_depth(path)


def parse_path(text: str) -> FolderPath:
    """
    Parse a /-separated path. Empty parts are ignored, so "", "/" and "/a/b/" are all fine.
    Every segment is validated as in join, and the path cannot be deeper than MAX_DEPTH.
    """
    return validate_path(part for part in text.split(DELIMITER) if part)


def format_path(path: FolderPath) -> str:
    return DELIMITER.join(path)


def display_path(path: FolderPath) -> str:
    if not path:
        return DELIMITER
    return f"{DELIMITER}{format_path(path)}{DELIMITER}"
