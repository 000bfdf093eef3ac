# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Data models for the migration bumper."""

import re
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .errors import NonNumericPrefixError
from .stems import strip_extension

# Optional sign followed by digits, no surrounding whitespace
_ID_PATTERN = re.compile(r'^[+-]?[0-9]+$')


class SequenceEntry(BaseModel):
    """A file in the migration directory whose name starts with ``<id><separator>``."""
    model_config = ConfigDict(frozen=True)

    id: int
    filename: str

    @classmethod
    def parse(cls, filename: str, separator: str = "_") -> "SequenceEntry":
        """
        Parse the leading sequence id of a filename.

        Only the segment before the first separator is considered; a name
        without any separator is parsed as a whole.

        Raises:
            NonNumericPrefixError: If that segment is not an integer
        """
        prefix = filename.split(separator, 1)[0]
        if not _ID_PATTERN.match(prefix):
            raise NonNumericPrefixError(
                f"Not a migration file, no numeric prefix: {filename!r}"
            )
        return cls(id=int(prefix), filename=filename)

    @property
    def prefix(self) -> str:
        """Raw text of the id as it appears in the filename."""
        match = re.match(r'[+-]?[0-9]+', self.filename)
        return match.group(0) if match else str(self.id)

    def stem(self, extension: str = ".py") -> str:
        """Filename with the migration extension removed."""
        return strip_extension(self.filename, extension)


class ScanResult(BaseModel):
    """Outcome of listing a migration directory."""
    entries: List[SequenceEntry] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.entries) + len(self.skipped)

    def sorted_entries(self) -> List[SequenceEntry]:
        """Entries ascending by id; ties keep their scan order."""
        return sorted(self.entries, key=lambda entry: entry.id)


class DependencyChange(BaseModel):
    """The dependency reference swapped inside a bumped migration."""
    old_reference: str
    new_reference: str
    occurrences: int = 0
    # Content before the rewrite, kept to undo it if the rename fails
    original_content: Optional[str] = Field(default=None, exclude=True, repr=False)


class BumpStatus(str, Enum):
    """Outcome of a single migration bump."""
    BUMPED = "bumped"
    PLANNED = "planned"
    FAILED = "failed"


class BumpResult(BaseModel):
    """Structured result of bumping one requested migration."""
    migration: str
    status: BumpStatus
    new_id: Optional[int] = None
    bumped_name: Optional[str] = None
    dependency: Optional[DependencyChange] = None
    skipped: List[str] = Field(default_factory=list)
    error_kind: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != BumpStatus.FAILED

    @property
    def failed(self) -> bool:
        return self.status == BumpStatus.FAILED
