"""Custom exceptions for the image variants pipeline."""


class VariantPipelineError(Exception):
    """Base exception for all image variants pipeline errors."""


class FetchError(VariantPipelineError):
    """Error raised when a source object cannot be read from storage."""


class DecodeError(VariantPipelineError):
    """Error raised when the codec cannot decode or encode an image."""


class WriteError(VariantPipelineError):
    """Error raised when a variant cannot be written to storage."""


class ConfigurationError(VariantPipelineError):
    """Error raised for invalid configuration options."""
