"""
Exception types raised by the Comfrey core and loaders.

Only invalid input and fatal fetch failures raise. "No match" and
"no data" conditions are expressed as empty results or pass/fail
defaults instead.
"""


class ComfreyError(Exception):
    """Base class for all project errors."""


class BoundaryValidationError(ComfreyError, ValueError):
    """A property boundary cannot be used for zone generation."""


class AnalysisError(ComfreyError):
    """Site analysis could not be completed. Message is user-facing."""
