class GameError(Exception):
    """Base exception for rules-engine errors."""

    pass


class InvariantViolation(GameError, AssertionError):
    """Raised when engine state is inconsistent (an upstream sequencing bug)."""

    pass


class SnapshotError(GameError, ValueError):
    """Raised when an ingress snapshot cannot be turned into a game state."""

    pass
