"""
Service error types
"""


class ValidationError(ValueError):
    """Input rejected before any store or provider access"""


class ProviderError(Exception):
    """The geolocation provider could not answer"""

    def __init__(self, message, address=None):
        super().__init__(message)
        self.address = address
