# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Shared pytest fixtures."""

import pytest

from bump_migrations.filesystem import LocalFileSystem
from helpers.migration_helpers import chain, memory_fs, write_migrations

MIGRATIONS = [
    "0001_init.py",
    "0002_add_field.py",
    "0003_remove_field.py",
]


@pytest.fixture
def migration_files():
    """
    Three chained migrations plus a package marker.

    Returns:
        Mapping of filename to content
    """
    files = chain(MIGRATIONS)
    files["__init__.py"] = ""
    return files


@pytest.fixture
def migrations_dir(tmp_path, migration_files):
    """
    Create a migration directory on disk.

    Returns:
        Path to the directory
    """
    return write_migrations(tmp_path / "migrations", migration_files)


@pytest.fixture
def local_fs(migrations_dir):
    return LocalFileSystem(migrations_dir)


@pytest.fixture(params=["local", "memory"])
def any_fs(request, migrations_dir, migration_files):
    """The same migration directory, on disk and in memory."""
    if request.param == "local":
        return LocalFileSystem(migrations_dir)
    return memory_fs(migration_files)
