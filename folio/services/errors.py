"""Exceptions raised by Folio services."""


class FolioError(Exception):
    """Base class for Folio errors."""


class BackendError(FolioError):
    """A fetch from the backend data service failed (network or backend error)."""


class PortfolioNotFoundError(FolioError):
    """The requested public portfolio does not exist."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"Portfolio not found: {user_id}")


class PersistenceError(FolioError):
    """Saving theme or locale preferences failed."""


class InvalidTransitionError(FolioError, ValueError):
    """A view-state transition is not allowed from the current state."""

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move from {current.value} to {target.value}")
