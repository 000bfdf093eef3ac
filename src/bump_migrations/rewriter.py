# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Point a bumped migration's dependency at the current last migration.

A migration names its predecessor somewhere in its body, e.g. Django's
``dependencies = [('app', '0001_init')]``. Moving the migration to the end of
the sequence means it must depend on the migration that is currently last
instead. Only that one reference is touched; the file is not parsed.
"""

import logging
from typing import List

from .errors import MigrationNotFoundError, NoLastMigrationError, PredecessorIndexError
from .filesystem import MigrationFileSystem
from .models import DependencyChange, SequenceEntry
from .stems import replace_all

logger = logging.getLogger(__name__)


def last_migration(sequence: List[SequenceEntry]) -> SequenceEntry:
    """Return the entry with the greatest id of a sorted sequence."""
    if not sequence:
        raise NoLastMigrationError("No last migration found.")
    return sequence[-1]


def next_id(sequence: List[SequenceEntry]) -> int:
    """Sequence id a bumped migration receives: one past the current maximum."""
    if not sequence:
        raise NoLastMigrationError("No last migration found.")
    return max(entry.id for entry in sequence) + 1


def locate(sequence: List[SequenceEntry], filename: str) -> int:
    """Index of ``filename`` in the sequence (exact filename match)."""
    for idx, entry in enumerate(sequence):
        if entry.filename == filename:
            return idx
    raise MigrationNotFoundError(f"Migration not found in directory: {filename}")


def find_predecessor(sequence: List[SequenceEntry], index: int) -> SequenceEntry:
    """
    Find the migration the entry at ``index`` currently depends on.

    The entry right before it is the predecessor when its id is strictly
    smaller; otherwise (duplicate ids) the one before that is used.

    Raises:
        PredecessorIndexError: If the chosen position is before the start
            of the sequence
    """
    if index < 1:
        raise PredecessorIndexError(
            f"{sequence[index].filename if sequence else '<empty>'} is the first "
            f"migration and has no predecessor"
        )

    current = sequence[index]
    if current.id > sequence[index - 1].id:
        return sequence[index - 1]

    if index < 2:
        raise PredecessorIndexError(
            f"{current.filename} shares id {current.id} with "
            f"{sequence[index - 1].filename} and has no migration before them"
        )
    return sequence[index - 2]


def rewrite_dependency(
    fs: MigrationFileSystem,
    sequence: List[SequenceEntry],
    target: SequenceEntry,
    extension: str = ".py",
    dry_run: bool = False
) -> DependencyChange:
    """
    Rewrite the target's dependency reference in place.

    Every occurrence of the predecessor's stem in the target file becomes the
    stem of the last migration. The sequence is validated before the file is
    read, so nothing is touched when the target cannot be bumped.

    Args:
        fs: Migration directory
        sequence: Scanned entries, ascending by id
        target: Migration being bumped
        extension: Migration file extension stripped to build the stems
        dry_run: If True, compute the change without writing

    Returns:
        The reference swap that was applied

    Raises:
        NoLastMigrationError, MigrationNotFoundError, PredecessorIndexError,
        MigrationReadError, MigrationWriteError
    """
    last = last_migration(sequence)
    idx = locate(sequence, target.filename)
    predecessor = find_predecessor(sequence, idx)

    old_reference = predecessor.stem(extension)
    new_reference = last.stem(extension)
    if last.filename == target.filename:
        logger.warning(
            "%s is already the last migration, it will depend on itself",
            target.filename
        )

    contents = fs.read_text(target.filename)
    new_contents, occurrences = replace_all(contents, old_reference, new_reference)
    logger.debug(
        "%s: replacing %r with %r (%d occurrences)",
        target.filename, old_reference, new_reference, occurrences
    )

    if not dry_run:
        fs.write_text(target.filename, new_contents)

    return DependencyChange(
        old_reference=old_reference,
        new_reference=new_reference,
        occurrences=occurrences,
        original_content=contents
    )
