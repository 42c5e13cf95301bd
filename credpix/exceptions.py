"""Exception hierarchy for credpix."""


class PixError(Exception):
    """Base exception for all credpix errors."""


class PixConfigurationError(PixError):
    """Raised at startup when the merchant profile is missing or invalid."""


class PixContractError(PixError, ValueError):
    """Raised when a caller passes a value the BR Code format cannot carry."""
