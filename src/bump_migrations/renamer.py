# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Give a bumped migration its new filename."""

import logging

from .filesystem import MigrationFileSystem

logger = logging.getLogger(__name__)


def rename_migration(fs: MigrationFileSystem, old_name: str, new_name: str) -> None:
    """
    Rename a migration file inside the directory.

    Raises:
        MigrationRenameError: On any underlying I/O failure, or when
            ``new_name`` already exists
    """
    fs.rename(old_name, new_name)
    logger.debug("Renamed %s -> %s", old_name, new_name)
