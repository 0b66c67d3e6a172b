"""Error taxonomy for task generation and earnings bookkeeping.

Core modules raise these; the bot layer maps each class to its own
user-facing message.
"""

from __future__ import annotations


class EduWorkError(Exception):
    """Base class for all EduWork Tracker errors."""


class ConfigurationError(EduWorkError):
    """Raised when the task provider credential is missing."""


class ProviderError(EduWorkError):
    """Raised when the task provider call fails or returns non-JSON text."""


class ValidationError(EduWorkError):
    """Raised when provider output or user input breaks a shape/range rule.

    The message is human-readable and safe to show to the operator.
    """
