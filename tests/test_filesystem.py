# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Tests for migration directory access."""

import os
import pytest
from unittest.mock import patch

from bump_migrations.errors import (
    MigrationReadError,
    MigrationRenameError,
    MigrationWriteError,
)
from bump_migrations.filesystem import InMemoryFileSystem, LocalFileSystem


def test_list_names_sorted(any_fs):
    assert any_fs.list_names() == [
        "0001_init.py",
        "0002_add_field.py",
        "0003_remove_field.py",
        "__init__.py",
    ]


def test_read_write_round_trip(any_fs):
    any_fs.write_text("0001_init.py", "changed\n")
    assert any_fs.read_text("0001_init.py") == "changed\n"


def test_read_missing_file(any_fs):
    with pytest.raises(MigrationReadError):
        any_fs.read_text("0009_missing.py")


def test_rename_preserves_content(any_fs):
    content = any_fs.read_text("0002_add_field.py")
    any_fs.rename("0002_add_field.py", "0004_add_field.py")
    assert not any_fs.exists("0002_add_field.py")
    assert any_fs.read_text("0004_add_field.py") == content


def test_rename_refuses_existing_destination(any_fs):
    with pytest.raises(MigrationRenameError, match="already exists"):
        any_fs.rename("0002_add_field.py", "0003_remove_field.py")
    assert any_fs.exists("0002_add_field.py")


def test_rename_missing_source(any_fs):
    with pytest.raises(MigrationRenameError):
        any_fs.rename("0009_missing.py", "0010_missing.py")


def test_local_paths_are_joined(migrations_dir):
    """The directory does not need a trailing separator."""
    fs = LocalFileSystem(str(migrations_dir).rstrip(os.sep))
    assert fs.path("0001_init.py") == migrations_dir / "0001_init.py"
    assert fs.exists("0001_init.py")


def test_local_write_is_atomic(local_fs, migrations_dir):
    """A failed replace leaves the original content and no temp file."""
    before = local_fs.read_text("0002_add_field.py")

    with patch("bump_migrations.filesystem.os.replace", side_effect=OSError("disk full")):
        with pytest.raises(MigrationWriteError, match="disk full"):
            local_fs.write_text("0002_add_field.py", "partial")

    assert local_fs.read_text("0002_add_field.py") == before
    assert not [p for p in migrations_dir.iterdir() if p.name.endswith(".tmp")]


def test_local_write_keeps_permissions(local_fs, migrations_dir):
    path = migrations_dir / "0002_add_field.py"
    os.chmod(path, 0o640)
    local_fs.write_text("0002_add_field.py", "new")
    assert (path.stat().st_mode & 0o777) == 0o640


def test_local_write_missing_directory(tmp_path):
    fs = LocalFileSystem(tmp_path / "gone")
    with pytest.raises(MigrationWriteError):
        fs.write_text("0001_init.py", "x")


def test_in_memory_copies_initial_files():
    files = {"0001_init.py": "a"}
    fs = InMemoryFileSystem(files)
    fs.write_text("0001_init.py", "b")
    assert files["0001_init.py"] == "a"
