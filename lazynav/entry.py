"""Filesystem entry model for directory listings.

Entries fetch ``lstat`` metadata lazily and cache it once per instance.
Stat failures are captured on the entry instead of aborting a listing.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import cached_property
from pathlib import Path

try:
    import grp
    import pwd
except ImportError:  # not available on Windows
    grp = None
    pwd = None

log = logging.getLogger(__name__)

# Longest symlink chain followed when resolving what a link points to.
MAX_LINK_DEPTH = 8


class EntryType(Enum):
    DIRECTORY = "directory"
    REGULAR_FILE = "file"
    SYMBOLIC_LINK = "link"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PermissionSet:
    read: bool
    write: bool
    execute: bool

    def __str__(self) -> str:
        return (
            ("r" if self.read else "-")
            + ("w" if self.write else "-")
            + ("x" if self.execute else "-")
        )


@dataclass(frozen=True)
class Permissions:
    user: PermissionSet
    group: PermissionSet
    others: PermissionSet

    @classmethod
    def from_mode(cls, mode: int) -> Permissions:
        return cls(
            user=PermissionSet(bool(mode & stat.S_IRUSR), bool(mode & stat.S_IWUSR), bool(mode & stat.S_IXUSR)),
            group=PermissionSet(bool(mode & stat.S_IRGRP), bool(mode & stat.S_IWGRP), bool(mode & stat.S_IXGRP)),
            others=PermissionSet(bool(mode & stat.S_IROTH), bool(mode & stat.S_IWOTH), bool(mode & stat.S_IXOTH)),
        )

    def __str__(self) -> str:
        return f"{self.user}{self.group}{self.others}"


@dataclass(frozen=True)
class LinkTarget:
    """Where a symlink points: the raw (possibly relative) path and its entry."""

    path: Path
    target_entry: Entry


class Entry:
    """One filesystem item with lazily fetched, cached metadata."""

    def __init__(self, path: Path, link_depth: int = 0) -> None:
        self.path = path
        self.link_depth = link_depth

    def __repr__(self) -> str:
        return f"Entry({str(self.path)!r})"

    @property
    def name(self) -> str:
        return self.path.name

    @cached_property
    def _lstat(self) -> tuple[os.stat_result | None, str | None]:
        try:
            return os.lstat(self.path), None
        except FileNotFoundError:
            return None, "not found"
        except OSError as exc:
            return None, exc.strerror or str(exc)

    @property
    def stat(self) -> os.stat_result | None:
        return self._lstat[0]

    @property
    def error(self) -> str | None:
        return self._lstat[1]

    @cached_property
    def type(self) -> EntryType:
        st = self.stat
        if st is None:
            return EntryType.UNKNOWN
        if stat.S_ISDIR(st.st_mode):
            return EntryType.DIRECTORY
        if stat.S_ISREG(st.st_mode):
            return EntryType.REGULAR_FILE
        if stat.S_ISLNK(st.st_mode):
            return EntryType.SYMBOLIC_LINK
        return EntryType.UNKNOWN

    @cached_property
    def is_hidden(self) -> bool:
        if os.name == "nt":
            st = self.stat
            attributes = getattr(st, "st_file_attributes", 0) if st is not None else 0
            return bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)
        return self.name.startswith(".")

    @cached_property
    def permissions(self) -> Permissions | None:
        st = self.stat
        return Permissions.from_mode(st.st_mode) if st is not None else None

    @property
    def hard_link_count(self) -> int | None:
        st = self.stat
        return st.st_nlink if st is not None else None

    @cached_property
    def user_name(self) -> str | None:
        st = self.stat
        if st is None or pwd is None:
            return None
        try:
            return pwd.getpwuid(st.st_uid).pw_name
        except KeyError:
            return str(st.st_uid)

    @cached_property
    def group_name(self) -> str | None:
        st = self.stat
        if st is None or grp is None:
            return None
        try:
            return grp.getgrgid(st.st_gid).gr_name
        except KeyError:
            return str(st.st_gid)

    @property
    def size(self) -> int | None:
        st = self.stat
        if st is None or self.type is EntryType.DIRECTORY:
            return None
        return st.st_size

    @cached_property
    def last_modified(self) -> datetime | None:
        st = self.stat
        return datetime.fromtimestamp(st.st_mtime) if st is not None else None

    @cached_property
    def link_target(self) -> LinkTarget | None:
        """Target of a symlink, ``None`` for other types or past the depth limit."""
        if self.type is not EntryType.SYMBOLIC_LINK or self.link_depth >= MAX_LINK_DEPTH:
            return None
        try:
            raw_target = Path(os.readlink(self.path))
        except OSError as exc:
            log.debug("Cannot read link %s: %s", self.path, exc)
            return None
        resolved = Path(os.path.normpath(self.path.parent / raw_target))
        return LinkTarget(path=raw_target, target_entry=Entry(resolved, link_depth=self.link_depth + 1))

    @cached_property
    def resolved_type(self) -> EntryType:
        """Type of whatever a link chain ends in; ``UNKNOWN`` for cycles or dangling links."""
        entry = self
        visited: set[Path] = set()
        while entry.type is EntryType.SYMBOLIC_LINK:
            if entry.path in visited:
                return EntryType.UNKNOWN
            visited.add(entry.path)
            target = entry.link_target
            if target is None:
                return EntryType.UNKNOWN
            entry = target.target_entry
        return entry.type


def list_entries(directory: Path) -> list[Entry]:
    """Return fresh entries for ``directory``: directories first, then by name.

    An unreadable directory yields an empty list.
    """
    try:
        with os.scandir(directory) as children:
            entries = [Entry(Path(os.path.normpath(child.path))) for child in children]
    except OSError as exc:
        log.info("Cannot list %s: %s", directory, exc)
        return []
    entries.sort(key=lambda entry: entry.name)
    entries.sort(key=lambda entry: entry.type is not EntryType.DIRECTORY)
    return entries


__all__ = [
    "Entry",
    "EntryType",
    "LinkTarget",
    "MAX_LINK_DEPTH",
    "PermissionSet",
    "Permissions",
    "list_entries",
]
