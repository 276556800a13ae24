"""ShotSub: OCR for timestamp-named screenshots, with SRT and transcript output."""

__version__ = "0.1.0"
