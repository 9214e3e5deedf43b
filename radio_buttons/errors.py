"""Exception types raised by the radio button extension.

Synopsis:
Configuration problems surface when a host type is attached; invalid choices
surface only when validation is invoked explicitly. Storage failures are not
wrapped and propagate as SQLAlchemy exceptions.
"""

from __future__ import annotations


class RadioButtonsError(RuntimeError):
    """Base class for radio button errors."""


class RadioButtonsConfigurationError(RadioButtonsError):
    """Raised when a host type cannot be set up for radio buttons."""


class OptionsConfigurationError(RadioButtonsConfigurationError):
    """Raised when an options source is unreadable or malformed."""

    def __init__(self, message: str, *, source: str | None = None, type_name: str | None = None):
        self.source = source
        self.type_name = type_name
        details = []
        if type_name:
            details.append(f"type={type_name}")
        if source:
            details.append(f"source={source}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class InvalidChoiceError(RadioButtonsError, ValueError):
    """Raised by explicit validation when stored choices are not declared."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid radio button choice")
