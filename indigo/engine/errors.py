from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from indigo.engine.models import RejectionReason


class GameEngineError(Exception):
    """Base class for engine errors."""
    pass


class InvalidPlacementError(GameEngineError):
    """Tile cannot be placed at the requested position."""

    def __init__(self, message: str, reason: RejectionReason | None = None):
        self.message = message
        self.reason = reason
        super().__init__(message)


class EmptyDrawStackError(GameEngineError):
    """No tile left to deal. Not fatal: the hand simply stays empty."""
    pass


class InconsistentStateError(GameEngineError):
    """An engine invariant (such as gem conservation) was violated."""
    pass


class GameNotStartedError(GameEngineError):
    """Operation needs a running game."""
    pass


class GameSetupError(GameEngineError):
    """Player roster or options cannot start a game."""
    pass
