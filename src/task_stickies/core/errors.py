# src/task_stickies/core/errors.py

"""
Error taxonomy shared by the storage layer and the tool dispatcher.

Every error is surfaced to the immediate caller; nothing here is retried
and nothing is fatal to the running process.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base class for failures reported back to the caller as error text."""


class NotFound(StoreError):
    """Unknown project name, missing notes/raw file or unknown task id."""


class ParseFailure(StoreError):
    """On-disk document does not conform to the expected shape."""


class IOFailure(StoreError):
    """Underlying read/write/rename failure (permissions, disk full, ...)."""


class ValidationFailure(StoreError):
    """Tool arguments did not match the expected request shape."""
