# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Move migrations to the end of their sequence.

For each requested migration the directory is scanned afresh, the migration
gets the id ``max(ids) + 1``, its dependency reference is pointed at the
current last migration and the file is renamed. Each migration is handled on
its own: a failure is recorded in its ``BumpResult`` and the next one is
still processed.
"""

import logging
from typing import Iterable, List, Optional

from .config import Settings
from .errors import BumpError, MigrationWriteError
from .filesystem import LocalFileSystem, MigrationFileSystem
from .models import BumpResult, BumpStatus, SequenceEntry
from .renamer import rename_migration
from .rewriter import next_id, rewrite_dependency
from .scanner import scan
from .stems import bumped_filename

logger = logging.getLogger(__name__)


class MigrationBumper:
    """Bumps migrations inside one directory."""

    def __init__(
        self,
        fs: MigrationFileSystem,
        settings: Optional[Settings] = None,
        dry_run: bool = False
    ):
        self.fs = fs
        self.settings = settings or Settings()
        self.dry_run = dry_run

    def bump_migration(self, migration_name: str) -> BumpResult:
        """Bump a single migration and report what happened."""
        result = BumpResult(migration=migration_name, status=BumpStatus.FAILED)
        try:
            self._bump(migration_name, result)
        except BumpError as e:
            logger.debug("Bumping %s failed: %s", migration_name, e)
            result.status = BumpStatus.FAILED
            result.error_kind = e.kind
            result.error = str(e)
        return result

    def bump(self, migration_names: Iterable[str]) -> List[BumpResult]:
        """Bump migrations one after the other, in the given order."""
        return [self.bump_migration(name) for name in migration_names]

    def _bump(self, migration_name: str, result: BumpResult) -> None:
        scanned = scan(self.fs, self.settings.separator)
        result.skipped = list(scanned.skipped)
        sequence = scanned.sorted_entries()

        # The target's id comes from its own name, not from the scan
        target = SequenceEntry.parse(migration_name, self.settings.separator)

        result.new_id = next_id(sequence)
        result.bumped_name = bumped_filename(
            target.filename,
            target.id,
            result.new_id,
            mode=self.settings.stem_replace,
            prefix=target.prefix
        )

        result.dependency = rewrite_dependency(
            self.fs,
            sequence,
            target,
            extension=self.settings.extension,
            dry_run=self.dry_run
        )

        if self.dry_run:
            result.status = BumpStatus.PLANNED
            return

        try:
            rename_migration(self.fs, target.filename, result.bumped_name)
        except BumpError:
            self._restore(target.filename, result)
            raise

        result.status = BumpStatus.BUMPED
        logger.debug("Bumped %s -> %s", target.filename, result.bumped_name)

    def _restore(self, filename: str, result: BumpResult) -> None:
        """Put back the content a failed bump already rewrote."""
        original = result.dependency.original_content if result.dependency else None
        if original is None:
            return
        try:
            self.fs.write_text(filename, original)
        except MigrationWriteError as e:
            logger.warning("Could not restore %s after failed rename: %s", filename, e)
        else:
            logger.debug("Restored %s after failed rename", filename)


def bump(
    directory,
    migration_names: Iterable[str],
    settings: Optional[Settings] = None,
    dry_run: bool = False
) -> List[BumpResult]:
    """Bump ``migration_names`` inside ``directory`` on disk."""
    bumper = MigrationBumper(LocalFileSystem(directory), settings=settings, dry_run=dry_run)
    return bumper.bump(migration_names)
