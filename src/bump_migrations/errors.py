# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Error kinds raised while bumping migrations."""


class BumpError(Exception):
    """Base class for failures that abort a single migration bump."""
    kind = "bump_error"


class DirectoryNotFoundError(BumpError):
    """Raised when the migration directory cannot be listed."""
    kind = "directory_not_found"


class NonNumericPrefixError(BumpError, ValueError):
    """Raised when a filename does not start with a numeric sequence id."""
    kind = "non_numeric_prefix"


class NoLastMigrationError(BumpError):
    """Raised when the scanned sequence is empty."""
    kind = "no_last_migration"


class MigrationNotFoundError(BumpError):
    """Raised when the migration to bump is not in the scanned sequence."""
    kind = "migration_not_found"


class PredecessorIndexError(BumpError, IndexError):
    """Raised when the predecessor position falls before the start of the sequence."""
    kind = "predecessor_index"


class MigrationReadError(BumpError):
    """Raised when a migration file cannot be read."""
    kind = "read_error"


class MigrationWriteError(BumpError):
    """Raised when a migration file cannot be written."""
    kind = "write_error"


class MigrationRenameError(BumpError):
    """Raised when a migration file cannot be renamed."""
    kind = "rename_error"
