"""Error kinds raised or carried by the pressure tracker."""


class PressureTrackerError(Exception):
    """Base class for tracker errors."""


class ValidationError(PressureTrackerError):
    """Input failed the pressure rules. The message is shown to the user as is."""


class StoreError(PressureTrackerError):
    """The record store failed to read or write."""


class ScopeCancelledError(RuntimeError):
    """Work was launched on a scope that has already been torn down."""
