# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Collect the migrations present in a directory."""

import logging

from .errors import NonNumericPrefixError
from .filesystem import MigrationFileSystem
from .models import ScanResult, SequenceEntry

logger = logging.getLogger(__name__)


def scan(fs: MigrationFileSystem, separator: str = "_") -> ScanResult:
    """
    List the directory and parse the sequence id of every entry.

    Entries whose name does not start with an integer followed by
    ``separator`` are skipped (``__init__.py``, ``__pycache__``...). The
    entries are returned in listing order; sort them with
    ``ScanResult.sorted_entries()``.

    Raises:
        DirectoryNotFoundError: If the directory cannot be listed
    """
    result = ScanResult()
    for name in fs.list_names():
        try:
            result.entries.append(SequenceEntry.parse(name, separator))
        except NonNumericPrefixError:
            logger.debug("Not a migration file, carry on: (%s)", name)
            result.skipped.append(name)

    logger.debug(
        "Scanned %s: %d migrations, %d skipped",
        fs, len(result.entries), len(result.skipped)
    )
    return result
