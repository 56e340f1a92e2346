"""Service-layer exceptions."""


class FactoryError(Exception):
    """Raised when a runtime entity cannot be created."""


class GameInitError(Exception):
    """Raised when a new game cannot be started."""


class ItemUnavailableError(Exception):
    """Raised when an item is not where an action expects it to be."""
