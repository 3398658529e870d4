"""
Workspace locator: infer the open project's root directory.

The editor has no API for this. The project name comes from the window
title ("Name - Antigravity - file"), a file path from an open tab's label or
a data-uri attribute, and the root is the path prefix ending at the segment
named like the project. Tab label formats vary, so treat the answer as a
best guess.
"""

import re
from typing import Any, Optional
from urllib.parse import unquote

from antigravity_remote.targets import PRODUCT_NAME

MIN_LABEL_LENGTH = 5
DRIVE_PATTERN = re.compile(r"[A-Za-z]:[\\/]")
UNIX_ROOTS: tuple[str, ...] = ("/home/", "/Users/", "/var/", "/opt/")
WINDOWS_DELIMITERS: tuple[str, ...] = (",", ";", " - ")
UNIX_DELIMITERS: tuple[str, ...] = (",", ";", " - ", "'", '"')
FILE_URI_PREFIX = "file:///"


class FoundPath:
    __slots__ = ("path", "source", "is_windows")

    def __init__(self, path: str, source: str, is_windows: bool):
        self.path = path
        self.source = source  # "tab" | "data-uri"
        self.is_windows = is_windows

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FoundPath):
            return NotImplemented
        return (self.path, self.source, self.is_windows) == (other.path, other.source, other.is_windows)

    def __repr__(self) -> str:
        return f"FoundPath(path={self.path!r}, source={self.source!r}, is_windows={self.is_windows!r})"


def project_name_from_title(title: str, product_name: str = PRODUCT_NAME) -> Optional[str]:
    match = re.match(r"^([^-]+)\s*-\s*" + re.escape(product_name), title or "")
    if not match:
        return None
    return match.group(1).strip() or None


def _cut(fragment: str, delimiters: tuple[str, ...]) -> str:
    end = len(fragment)
    for delim in delimiters:
        idx = fragment.find(delim)
        if 0 < idx < end:
            end = idx
    return fragment[:end].strip()


def find_path_in_label(label: str) -> Optional[FoundPath]:
    """Pull the first filesystem path out of a tab's aria-label or title."""
    if not label or len(label) < MIN_LABEL_LENGTH:
        return None
    drive = DRIVE_PATTERN.search(label)
    if drive:
        return FoundPath(_cut(label[drive.start():], WINDOWS_DELIMITERS), "tab", True)
    for root in UNIX_ROOTS:
        idx = label.find(root)
        if idx >= 0:
            return FoundPath(_cut(label[idx:], UNIX_DELIMITERS), "tab", False)
    return None


def path_from_file_uri(uri: str) -> Optional[FoundPath]:
    if not uri or not uri.startswith(FILE_URI_PREFIX):
        return None
    decoded = unquote(uri[len(FILE_URI_PREFIX):])
    is_windows = len(decoded) > 1 and decoded[1] == ":"
    if is_windows:
        return FoundPath(decoded.replace("/", "\\"), "data-uri", True)
    return FoundPath("/" + decoded, "data-uri", False)


def find_file_path(sources: Any) -> Optional[FoundPath]:
    """Tab labels first, then data-uri attributes."""
    if not isinstance(sources, dict):
        return None
    for label in sources.get("labels") or []:
        if isinstance(label, str):
            found = find_path_in_label(label)
            if found:
                return found
    for uri in sources.get("uris") or []:
        if isinstance(uri, str):
            found = path_from_file_uri(uri)
            if found:
                return found
    return None


def _join(parts: list[str], is_windows: bool) -> str:
    if is_windows:
        if not parts:
            return ""
        return parts[0] + "\\" + "\\".join(parts[1:])
    return "/" + "/".join(parts)


def resolve_workspace_root(path: str, is_windows: bool, project_name: Optional[str] = None) -> str:
    """Truncate a file path at the project directory, else drop the file name."""
    separator = r"[\\/]+" if is_windows else r"/+"
    parts = [part for part in re.split(separator, path) if part]
    if project_name:
        wanted = project_name.lower()
        for i, part in enumerate(parts):
            if part.lower() == wanted:
                return _join(parts[: i + 1], is_windows)
    return _join(parts[:-1], is_windows)
