# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Bump ordered migration files to the end of their sequence."""

from .bumper import MigrationBumper, bump
from .errors import BumpError
from .models import BumpResult, BumpStatus, SequenceEntry

__version__ = "0.1.0"

__all__ = [
    'MigrationBumper',
    'bump',
    'BumpError',
    'BumpResult',
    'BumpStatus',
    'SequenceEntry',
]
