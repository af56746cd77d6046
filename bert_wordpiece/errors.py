"""Errors raised by the tokenizers."""


class TokenizerError(Exception):
    """Base class for every tokenizer error."""


class InvalidArgumentError(TokenizerError, ValueError):
    """Raised when a tokenizer is given null, empty or malformed input."""


class UnsupportedOperationError(TokenizerError, NotImplementedError):
    """
    Raised when a tokenizer does not implement a capability.

    Args:
        capability (str): Name of the operation or accessor that was requested.
        variant (str): Name of the tokenizer class that was asked for it.
    """

    def __init__(self, capability: str, variant: str) -> None:
        self.capability = capability
        self.variant = variant
        super().__init__(f"{variant} does not support {capability}")


class ConfigurationError(TokenizerError, ValueError):
    """Raised when a vocabulary or resource file cannot back a tokenizer."""
