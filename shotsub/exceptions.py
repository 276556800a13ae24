"""Custom Exceptions for the ShotSub application."""

class ShotSubError(Exception):
    """Base class for exceptions in this module."""
    pass

class ConfigurationError(ShotSubError):
    """Exception raised for errors in configuration loading."""
    pass

class RecognitionError(ShotSubError):
    """Exception raised when the OCR engine fails on an image."""
    pass

class FormattingError(ShotSubError):
    """Exception raised for errors while rendering or writing output files."""
    pass

class FileSystemError(ShotSubError):
    """Exception raised for file system related errors (permissions, not found etc)."""
    pass
