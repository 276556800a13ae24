"""Data models for ShotSub."""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .timestamps import match_timestamps, parse_timestamp
from .utils import file_stem

@dataclass(frozen=True)
class TextLine:
    """A single recognized line. Box is in pixels, origin at the top-left corner."""
    text: str
    confidence: float
    x: int
    y: int
    width: int
    height: int

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "x": self.x,
            "width": self.width,
            "y": self.y,
            "height": self.height,
        }

@dataclass(frozen=True)
class RecognitionResult:
    """Holds the OCR output for one image."""
    image: str
    lines: Tuple[TextLine, ...] = field(default_factory=tuple)

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)

    def to_dict(self) -> dict:
        return {
            "lines": [line.to_dict() for line in self.lines],
            "text": self.text,
            "image": self.image,
        }

@dataclass(frozen=True)
class ImageTask:
    """An image file together with the time range parsed from its name."""
    path: str
    start: str
    end: str

    @classmethod
    def from_path(cls, path: str) -> Optional["ImageTask"]:
        """Builds a task, or returns None if the filename has no time range."""
        times = match_timestamps(file_stem(path))
        if times is None:
            return None
        return cls(path=path, start=times[0], end=times[1])

    @property
    def filename(self) -> str:
        return os.path.basename(self.path)

    @property
    def start_seconds(self) -> float:
        # Tasks only exist for matching names, so the group always parses.
        return parse_timestamp(self.start) or 0.0

@dataclass(frozen=True)
class SubtitleEntry:
    """Recognized text of one screenshot, placed on the timeline."""
    start: str
    end: str
    text: str

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end, "text": self.text}
