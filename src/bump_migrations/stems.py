# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Text replacement primitives shared by renaming and dependency rewriting.

Both the new filename of a bumped migration and the rewritten dependency
reference are produced by plain substring replacement. Keeping every such
replacement in this module means a structural strategy can be switched on
(see ``StemReplaceMode.PREFIX``) without touching the rest of the pipeline.
"""

from enum import Enum
from typing import Optional, Tuple


class StemReplaceMode(str, Enum):
    """How the sequence id inside a filename is replaced."""
    FIRST = "first"    # first textual occurrence of the id, anywhere in the name
    PREFIX = "prefix"  # the leading id segment only, keeping its zero padding


def strip_extension(filename: str, extension: str) -> str:
    """Remove ``extension`` from the end of ``filename`` if present."""
    if extension and filename.endswith(extension):
        return filename[:-len(extension)]
    return filename


def replace_all(text: str, old: str, new: str) -> Tuple[str, int]:
    """
    Replace every occurrence of ``old`` with ``new``.

    Returns:
        Tuple of (new_text, number_of_replacements)
    """
    if not old:
        return text, 0
    count = text.count(old)
    return text.replace(old, new), count


def replace_first(text: str, old: str, new: str) -> str:
    """Replace the first occurrence of ``old`` with ``new``."""
    if not old:
        return text
    return text.replace(old, new, 1)


def bumped_filename(
    filename: str,
    old_id: int,
    new_id: int,
    mode: StemReplaceMode = StemReplaceMode.FIRST,
    prefix: Optional[str] = None
) -> str:
    """
    Compute the filename a migration gets once its id becomes ``new_id``.

    In FIRST mode the first occurrence of ``str(old_id)`` is replaced, so
    ``0002_add_field.py`` with new id 4 becomes ``0004_add_field.py`` while
    ``0009_x.py`` with new id 10 becomes ``00010_x.py``. PREFIX mode swaps
    the whole leading segment and pads to its width: ``0009_x.py`` becomes
    ``0010_x.py``.

    Args:
        filename: Current filename
        old_id: Sequence id parsed from the filename
        new_id: Sequence id to assign
        mode: Replacement strategy
        prefix: Raw id text at the start of the filename (PREFIX mode only)
    """
    if mode == StemReplaceMode.PREFIX and prefix and filename.startswith(prefix):
        new_prefix = str(new_id)
        digits = prefix.lstrip('+-')
        if digits.startswith('0') and new_id >= 0:
            new_prefix = new_prefix.zfill(len(digits))
        return new_prefix + filename[len(prefix):]

    return replace_first(filename, str(old_id), str(new_id))
