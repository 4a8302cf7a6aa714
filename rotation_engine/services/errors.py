"""
Exceptions raised by the rotation engine services.

Transition functions catch :class:`InvalidOperationError` and return the
unchanged state; :class:`InvariantViolationError` always reaches the caller.
"""


class RotationEngineError(Exception):
    """Base class for rotation engine errors."""
    pass


class InvalidOperationError(RotationEngineError):
    """The requested action is forbidden by the rules of the game."""
    pass


class InvariantViolationError(RotationEngineError):
    """The game state breaks a precondition the engine itself guarantees."""
    pass
