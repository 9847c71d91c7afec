"""Typed domain exceptions for the game engine.

Player input never raises: mistaken or stray taps are recorded or ignored.
These exceptions signal programming errors at the engine boundary, such as
asking for a mode that has no generation rule or passing an incomplete
configuration table.
"""


class GameRuleError(Exception):
    """Base exception for engine rule violations."""


class UnsupportedModeError(GameRuleError):
    """The requested game mode has no tile generation rule."""

    def __init__(self, mode: str) -> None:
        self.mode = mode
        super().__init__(f"game mode {mode} is not supported")


class InvalidConfigError(GameRuleError):
    """A configuration table or phrase bank cannot serve the request."""
