# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Access to the migration directory.

The bump pipeline only ever needs to list, read, write and rename files in a
single flat directory. ``LocalFileSystem`` does that on disk and
``InMemoryFileSystem`` keeps the files in a dict so the whole pipeline can
run without touching the disk.
"""

import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from .errors import (
    DirectoryNotFoundError,
    MigrationReadError,
    MigrationRenameError,
    MigrationWriteError,
)

class MigrationFileSystem(Protocol):
    """Capabilities the bump pipeline requires from a migration directory."""

    def list_names(self) -> List[str]:
        ...

    def exists(self, name: str) -> bool:
        ...

    def read_text(self, name: str) -> str:
        ...

    def write_text(self, name: str, content: str) -> None:
        ...

    def rename(self, old_name: str, new_name: str) -> None:
        ...


class LocalFileSystem:
    """A migration directory on disk."""

    def __init__(self, directory, encoding: str = 'utf-8'):
        self.directory = Path(directory)
        self.encoding = encoding

    def __repr__(self) -> str:
        return f"LocalFileSystem({str(self.directory)!r})"

    def path(self, name: str) -> Path:
        return self.directory / name

    def list_names(self) -> List[str]:
        """List entry names (files and directories), non-recursively, sorted by name."""
        try:
            return sorted(os.listdir(self.directory))
        except OSError as e:
            raise DirectoryNotFoundError(
                f"Could not find directory: {self.directory} ({e.strerror or e})"
            ) from e

    def exists(self, name: str) -> bool:
        return self.path(name).exists()

    def read_text(self, name: str) -> str:
        path = self.path(name)
        try:
            with open(path, 'r', encoding=self.encoding) as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise MigrationReadError(f"Unable to read {path}: {e}") from e

    def write_text(self, name: str, content: str) -> None:
        """Replace the content of ``name`` atomically.

        The content goes to a temporary file in the same directory which is
        then moved over the original, so a failed write leaves the original
        untouched.
        """
        path = self.path(name)
        tmp_name: Optional[str] = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{name}.", suffix=".tmp", dir=self.directory
            )
            with os.fdopen(fd, 'w', encoding=self.encoding) as f:
                f.write(content)
            if path.exists():
                os.chmod(tmp_name, path.stat().st_mode & 0o7777)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise MigrationWriteError(f"Could not write to file {path}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def rename(self, old_name: str, new_name: str) -> None:
        """Rename ``old_name`` to ``new_name``, refusing to overwrite."""
        src = self.path(old_name)
        dst = self.path(new_name)
        if old_name != new_name and dst.exists():
            raise MigrationRenameError(
                f"Cannot rename {src} to {dst}: destination already exists"
            )
        try:
            os.rename(src, dst)
        except OSError as e:
            raise MigrationRenameError(f"Cannot rename {src} to {dst}: {e}") from e


class InMemoryFileSystem:
    """A migration directory held in memory, keyed by filename."""

    def __init__(self, files: Optional[Dict[str, str]] = None, missing: bool = False):
        self.files: Dict[str, str] = dict(files or {})
        # Behave like a directory that does not exist
        self.missing = missing

    def __repr__(self) -> str:
        return f"InMemoryFileSystem({len(self.files)} files)"

    def list_names(self) -> List[str]:
        if self.missing:
            raise DirectoryNotFoundError("Could not find directory: <memory>")
        return sorted(self.files)

    def exists(self, name: str) -> bool:
        return not self.missing and name in self.files

    def read_text(self, name: str) -> str:
        if not self.exists(name):
            raise MigrationReadError(f"Unable to read {name}: no such file")
        return self.files[name]

    def write_text(self, name: str, content: str) -> None:
        if self.missing:
            raise MigrationWriteError(f"Could not write to file {name}: no such directory")
        self.files[name] = content

    def rename(self, old_name: str, new_name: str) -> None:
        if not self.exists(old_name):
            raise MigrationRenameError(f"Cannot rename {old_name}: no such file")
        if old_name != new_name and new_name in self.files:
            raise MigrationRenameError(
                f"Cannot rename {old_name} to {new_name}: destination already exists"
            )
        self.files[new_name] = self.files.pop(old_name)
