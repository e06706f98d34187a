# src/focuslist/errors.py

"""
Exceptions surfaced to the user.

Mutations on unknown task ids are not errors (they are no-ops), and a corrupt
snapshot is recovered inside the storage adapter, so neither appears here.
"""

from __future__ import annotations


class FocuslistError(Exception):
    """Base class for errors that should be reported to the user."""


class TaskImportError(FocuslistError):
    """A CSV import was aborted; the task collection is left untouched."""


class MalformedInputError(TaskImportError):
    """CSV text is empty or its header lacks a required column."""


class ReadFailureError(TaskImportError):
    """The import file could not be read."""


class PersistenceError(FocuslistError):
    """The task snapshot could not be written."""
