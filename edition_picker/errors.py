from __future__ import annotations


class EditionPickerError(RuntimeError):
    pass


class ConfigError(EditionPickerError, ValueError):
    pass


class EnvironmentUnavailable(EditionPickerError):
    """The deployment environment store could not be opened."""


class EnvironmentWriteError(EditionPickerError):
    pass


class SelectionError(EditionPickerError):
    pass


class SelectionCancelled(EditionPickerError):
    """The operator cancelled the selection. Not a failure, a terminal state."""
