class SpringLabError(Exception):
    """Base class for errors raised by the simulation engine."""
    def __init__(self, message="Spring lab simulation error."):
        super().__init__(message)


class InvalidMassError(SpringLabError, ValueError):
    """Mass value is not strictly positive."""
    def __init__(self, message="Mass value must be greater than 0."):
        super().__init__(message)


class InvariantViolationError(SpringLabError):
    """A model invariant was broken (negative gravity or friction, inconsistent attachment)."""
    def __init__(self, message="Simulation invariant violated."):
        super().__init__(message)


class SpringOccupiedError(SpringLabError):
    """A mass was attached to a spring that already holds a different mass."""
    def __init__(self, message="Spring already holds a mass."):
        super().__init__(message)


class UnknownSpeedModeError(SpringLabError, ValueError):
    """Speed mode is neither normal nor slow."""
    def __init__(self, message="Invalid setting for model speed."):
        super().__init__(message)


class SceneModeError(SpringLabError):
    """Scene operation is not available in the current spring length mode."""
    def __init__(self, message="Operation not available in the current scene."):
        super().__init__(message)
