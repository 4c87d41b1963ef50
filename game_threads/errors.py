# game_threads/errors.py
"""
Exception hierarchy for a reconciliation run.

Every error here is fatal for the current pass: the CLI logs it, skips the
state write and exits non-zero. Recovery is the next scheduled invocation.
"""

from __future__ import annotations


class GameThreadsError(Exception):
    """Base class for all errors raised by the bot."""


class ConfigError(GameThreadsError):
    """Configuration could not be interpreted (unknown league, bad date, ...)."""


class StateError(GameThreadsError):
    """The persisted state file could not be read, decoded or written."""


class NoCurrentWeekError(GameThreadsError):
    """Today falls after the last generated game week."""

    def __init__(self, message: str = "no current week found") -> None:
        super().__init__(message)


class CollaboratorError(GameThreadsError):
    """An external call (schedule API, Discord) failed during a pass step."""

    def __init__(self, step: str, cause: BaseException) -> None:
        self.step = step
        self.cause = cause
        super().__init__(f"failed to {step}: {cause}")
