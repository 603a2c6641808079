# bibnet/errors.py

"""
Error taxonomy for bibnet.

- UsageError:  bad command-line arguments, raised before any record is read.
- InputError:  the input file is missing, unreadable, empty, not JSON, or
               contains a record that fails shape validation.
- OutputError: the destination file could not be created or written. The
               graph that was being written is still held by the caller.

The co-occurrence engine itself raises none of these.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union

PathLike = Union[str, Path]


class BibnetError(Exception):
    """Base class for all bibnet errors."""


class UsageError(BibnetError):
    """Invalid command-line usage (mode, output path, option values)."""


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------

class InputError(BibnetError):
    """Base class for problems with the input records file."""


class InputFileNotFoundError(InputError):
    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)
        super().__init__(
            f"The indicated file was not found. Please make sure the file "
            f"{self.path} exists at the specified path."
        )


class InputReadError(InputError):
    def __init__(self, path: PathLike, cause: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = f" ({cause})" if cause is not None else ""
        super().__init__(
            f"There was an error reading the file {self.path}. Make sure it exists "
            f"and that the proper permissions are given to it{detail}."
        )


class EmptyInputError(InputError):
    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)
        super().__init__(f"The input file {self.path} was empty.")


class MalformedJSONError(InputError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"The input file contained improper JSON: {reason}")


def _echo(record: Any) -> str:
    try:
        return json.dumps(record, ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError):
        return repr(record)


class InvalidRecordError(InputError):
    """A single input record failed shape validation; carries the raw record."""

    def __init__(self, index: int, record: Any, reason: str) -> None:
        self.index = index
        self.record = record
        self.reason = reason
        super().__init__(
            f"Was unable to parse record #{index} of the input: {reason}\n"
            f"Error at: {_echo(record)}"
        )


# ---------------------------------------------------------------------------
# Output errors
# ---------------------------------------------------------------------------

class OutputError(BibnetError):
    def __init__(self, path: PathLike, cause: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            f"Was not able to write to output file {self.path}. "
            f"Please check the file can be created{detail}"
        )
