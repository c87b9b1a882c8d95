"""
=============================================================================
FILESYSTEM LOOKUPS
=============================================================================

The only module that touches the disk. Everything above it works on
``FileInfo`` values and ``FileBody`` descriptors.

    regular_file_info(path)        → FileInfo | None   one os.stat() call
    read_range(path, offset, n)    → bytes             partial read
    read_file(path)                → bytes             whole file

Nothing is cached: every request stats again, so a file replaced on disk is
picked up by the very next request.

Only REGULAR files are servable. Directories, sockets, FIFOs and devices
are reported as absent, exactly like a missing file. So is a name too
long for the filesystem to look up.
=============================================================================
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union
import errno
import os
import stat


PathLike = Union[str, "os.PathLike[str]"]


class FileType(str, Enum):
    regular = "regular"
    directory = "directory"
    other = "other"


@dataclass(frozen=True)
class FileInfo:
    """Metadata from a single stat call. ``mtime`` is in nanoseconds."""

    size: int
    mtime: int
    type: FileType

    @property
    def is_regular(self) -> bool:
        return self.type is FileType.regular

    @classmethod
    def from_stat(cls, result: os.stat_result) -> "FileInfo":
        mode = result.st_mode
        if stat.S_ISREG(mode):
            file_type = FileType.regular
        elif stat.S_ISDIR(mode):
            file_type = FileType.directory
        else:
            file_type = FileType.other
        return cls(size=result.st_size, mtime=result.st_mtime_ns, type=file_type)


def file_info(path: PathLike) -> Optional[FileInfo]:
    """
    Stat ``path``, following symlinks.

    Returns None when the path does not exist, a parent is not a directory
    or a name is too long for the filesystem. Any other OSError, such as a
    permission error, propagates.
    """
    try:
        return FileInfo.from_stat(os.stat(path))
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as e:
        if e.errno == errno.ENAMETOOLONG:
            return None
        raise


def regular_file_info(path: PathLike) -> Optional[FileInfo]:
    """Like ``file_info`` but only regular files count as present."""
    info = file_info(path)
    if info is None or not info.is_regular:
        return None
    return info


def read_range(path: PathLike, offset: int, length: int) -> bytes:
    """Read ``length`` bytes starting at ``offset``."""
    with open(path, "rb") as f:
        f.seek(offset)
        return f.read(length)


def read_file(path: PathLike) -> bytes:
    with open(path, "rb") as f:
        return f.read()


@dataclass(frozen=True)
class FileBody:
    """
    A response body that lives on disk.

    ``length`` None means "to the end of the file". The bytes are only read
    when the response is serialized, so a 304 or a HEAD never reads them.
    """

    path: Path
    offset: int = 0
    length: Optional[int] = None

    @property
    def size(self) -> int:
        if self.length is not None:
            return self.length
        return os.stat(self.path).st_size - self.offset

    def read(self) -> bytes:
        if self.offset == 0 and self.length is None:
            return read_file(self.path)
        return read_range(self.path, self.offset, self.size)
