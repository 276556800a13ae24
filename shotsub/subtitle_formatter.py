"""Handles formatting recognition results into subtitle and transcript files."""

import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from .models import SubtitleEntry
from .exceptions import FormattingError, FileSystemError
from .timestamps import format_timestamp
from .utils import ensure_dir_exists

logger = logging.getLogger(__name__)


def _write_text(content: str, output_path: str) -> None:
    parent = os.path.dirname(output_path)
    try:
        if parent:
            ensure_dir_exists(parent)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(content)
    except (IOError, FileSystemError) as e:
        logger.error(f"Failed to write {output_path}: {e}", exc_info=True)
        raise FormattingError(f"Could not write {output_path}: {e}") from e


class OutputFormatter(ABC):
    """Abstract base class for directory output formatters."""

    @abstractmethod
    def render(self, entries: Sequence[SubtitleEntry]) -> str:
        """
        Renders the entries, already sorted by start time, into file content.

        Args:
            entries: Subtitle entries in timeline order.

        Returns:
            The formatted content without leading or trailing whitespace.
        """
        pass

    def write(self, entries: Sequence[SubtitleEntry], output_path: str) -> None:
        """
        Renders the entries and writes them to a UTF-8 file.

        Raises:
            FormattingError: If the file cannot be written.
        """
        _write_text(self.render(entries), output_path)
        logger.info(f"Successfully wrote {len(entries)} entries to {output_path}")


class SRTFormatter(OutputFormatter):
    """Formats entries into the SRT (SubRip Text) format."""

    def render(self, entries: Sequence[SubtitleEntry]) -> str:
        blocks: List[str] = []
        for index, entry in enumerate(entries, start=1):
            start_time_str = format_timestamp(entry.start)
            end_time_str = format_timestamp(entry.end)
            blocks.append(f"{index}\n{start_time_str} --> {end_time_str}\n{entry.text}\n\n")
        return "".join(blocks).strip()


class TranscriptFormatter(OutputFormatter):
    """Formats entries as plain text, one image's text after another."""

    def render(self, entries: Sequence[SubtitleEntry]) -> str:
        return "".join(f"{entry.text}\n" for entry in entries).strip()


def formatter_for_path(output_path: str) -> OutputFormatter:
    """Chooses SRT for '.srt' destinations and a plain transcript otherwise."""
    if output_path.lower().endswith(".srt"):
        return SRTFormatter()
    return TranscriptFormatter()


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def write_json(data: Any, output_path: str) -> None:
    """
    Writes `data` as pretty-printed JSON.

    Raises:
        FormattingError: If the file cannot be written.
    """
    _write_text(to_json(data), output_path)
    logger.info(f"Wrote JSON result to {output_path}")
