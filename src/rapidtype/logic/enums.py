"""
String enum definitions for Rapid Type game concepts.
"""

from enum import Enum


class GameMode(str, Enum):
    """Tile sets a player can be asked to tap through."""

    NUMBERS = "NUMBERS"  # tap 1 -> N in order
    FIND_NUMBER = "FIND_NUMBER"  # locate each announced target
    ALPHABET = "ALPHABET"  # tap A -> Z in order
    SENTENCE = "SENTENCE"  # spell out a Japanese phrase
    FLASH = "FLASH"  # placeholder panels
    ENDLESS = "ENDLESS"  # no completion rule yet


class Difficulty(str, Enum):
    EASY = "EASY"
    NORMAL = "NORMAL"
    HARD = "HARD"


class GameStatus(str, Enum):
    """Lifecycle state of a game session."""

    IDLE = "IDLE"
    COUNTDOWN = "COUNTDOWN"  # owned by the UI, never entered by the engine
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    FINISHED = "FINISHED"


class Rank(str, Enum):
    """Clear rank, best first."""

    S = "S"
    A = "A"
    B = "B"
    C = "C"


class TapOutcome(str, Enum):
    """What a single tile press did to the session."""

    IGNORED = "ignored"
    CORRECT = "correct"
    MISTAKE = "mistake"
    FINISHED = "finished"
