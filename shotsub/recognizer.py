"""Handles text recognition in images using Tesseract."""

import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

import pytesseract
from PIL import Image, UnidentifiedImageError

from .models import RecognitionResult, TextLine
from .exceptions import RecognitionError

logger = logging.getLogger(__name__)

# BCP-47 style codes accepted on the command line -> Tesseract traineddata names.
LANGUAGE_CODES: Dict[str, str] = {
    "en": "eng", "en-US": "eng", "en-GB": "eng",
    "vi": "vie", "vi-VT": "vie",
    "fr": "fra", "fr-FR": "fra",
    "de": "deu", "de-DE": "deu",
    "es": "spa", "es-ES": "spa",
    "it": "ita", "it-IT": "ita",
    "pt": "por", "pt-BR": "por",
    "ru": "rus", "ru-RU": "rus",
    "uk": "ukr", "uk-UA": "ukr",
    "ja": "jpn", "ja-JP": "jpn",
    "ko": "kor", "ko-KR": "kor",
    "th": "tha", "th-TH": "tha",
    "zh-Hans": "chi_sim", "zh-CN": "chi_sim",
    "zh-Hant": "chi_tra", "zh-TW": "chi_tra",
}

ACCURATE_PSM = 3  # fully automatic page segmentation
FAST_PSM = 6      # assume a single uniform block of text


def to_tesseract_languages(languages: Sequence[str]) -> str:
    """Maps language codes to Tesseract names and joins them with '+'."""
    names: List[str] = []
    for code in languages:
        code = code.strip()
        if not code:
            continue
        name = LANGUAGE_CODES.get(code, code)
        if name not in names:
            names.append(name)
    return "+".join(names) or "eng"


class OcrEngine(ABC):
    """Abstract base class for OCR backends."""

    @abstractmethod
    def recognize(self, image_path: str) -> RecognitionResult:
        """
        Recognizes the text in the given image file.

        Args:
            image_path: Path to the image file.

        Returns:
            A RecognitionResult with one TextLine per recognized line.

        Raises:
            RecognitionError: If the image cannot be read or recognition fails.
        """
        pass

    @abstractmethod
    def supported_languages(self) -> List[str]:
        """Returns the recognition languages the backend can use."""
        pass


class TesseractEngine(OcrEngine):
    """Implements recognition with the Tesseract command line engine."""

    def __init__(
        self,
        languages: Sequence[str] = ("en",),
        fast_mode: bool = False,
        language_correction: bool = False,
        tesseract_cmd: Optional[str] = None,
        upscale_min_height: int = 64
    ):
        """
        Initializes the TesseractEngine.

        Args:
            languages: Recognition language codes, e.g. ["en", "vi"].
            fast_mode: Skip upscaling and page layout analysis.
            language_correction: Let Tesseract use its dictionaries to correct words.
            tesseract_cmd: Optional path to the tesseract executable.
                           If None, assumes tesseract is in the system PATH.
            upscale_min_height: In accurate mode, images shorter than this are enlarged.
        """
        self.languages = list(languages)
        self.lang = to_tesseract_languages(self.languages)
        self.fast_mode = fast_mode
        self.language_correction = language_correction
        self.upscale_min_height = upscale_min_height
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.config = self._build_config()
        logger.info(f"Initializing TesseractEngine (lang={self.lang}, fast_mode={self.fast_mode}, "
                    f"language_correction={self.language_correction})")

    def _build_config(self) -> str:
        psm = FAST_PSM if self.fast_mode else ACCURATE_PSM
        parts = ["--oem 1", f"--psm {psm}"]
        if not self.language_correction:
            parts.append("-c load_system_dawg=0 -c load_freq_dawg=0")
        return " ".join(parts)

    def _prepare(self, image: Image.Image) -> Tuple[Image.Image, float]:
        """Converts the image for Tesseract and returns it with the scale applied."""
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        if self.fast_mode or image.height >= self.upscale_min_height or image.height == 0:
            return image, 1.0
        scale = 2.0
        resized = image.resize((int(image.width * scale), int(image.height * scale)), Image.LANCZOS)
        logger.debug(f"Upscaled small image {image.size} -> {resized.size}")
        return resized, scale

    @staticmethod
    def _group_lines(data: dict, scale: float) -> List[TextLine]:
        """Groups word-level image_to_data rows into lines."""
        grouped: Dict[tuple, List[int]] = {}
        for i, word in enumerate(data.get("text", [])):
            if not str(word).strip():
                continue
            try:
                conf = float(data["conf"][i])
            except (TypeError, ValueError):
                continue
            if conf < 0:
                continue
            key = (data["page_num"][i], data["block_num"][i], data["par_num"][i], data["line_num"][i])
            grouped.setdefault(key, []).append(i)

        lines = []
        for indices in grouped.values():
            left = min(int(data["left"][i]) for i in indices)
            top = min(int(data["top"][i]) for i in indices)
            right = max(int(data["left"][i]) + int(data["width"][i]) for i in indices)
            bottom = max(int(data["top"][i]) + int(data["height"][i]) for i in indices)
            confidence = sum(float(data["conf"][i]) for i in indices) / len(indices) / 100.0
            lines.append(TextLine(
                text=" ".join(str(data["text"][i]).strip() for i in indices),
                confidence=round(confidence, 4),
                x=int(left / scale),
                y=int(top / scale),
                width=int((right - left) / scale),
                height=int((bottom - top) / scale),
            ))
        return lines

    def recognize(self, image_path: str) -> RecognitionResult:
        """
        Recognizes text with Tesseract.

        Args:
            image_path: Path to a JPEG or PNG file.

        Returns:
            A RecognitionResult.

        Raises:
            RecognitionError: If the file is missing, not an image, or Tesseract fails.
        """
        logger.debug(f"Starting recognition for: {image_path}")
        if not os.path.isfile(image_path):
            raise RecognitionError(f"Image file not found: {image_path}")

        try:
            with Image.open(image_path) as image:
                prepared, scale = self._prepare(image)
                data = pytesseract.image_to_data(
                    prepared,
                    lang=self.lang,
                    config=self.config,
                    output_type=pytesseract.Output.DICT
                )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
            logger.error(f"Tesseract error recognizing text in '{image_path}': {e}")
            raise RecognitionError(f"Tesseract failed for '{image_path}': {e}") from e
        except (UnidentifiedImageError, OSError) as e:
            logger.error(f"Failed to load or convert image '{image_path}': {e}")
            raise RecognitionError(f"Failed to load or convert image '{image_path}': {e}") from e

        lines = self._group_lines(data, scale)
        logger.debug(f"Recognized {len(lines)} lines in {image_path}")
        return RecognitionResult(image=os.path.basename(image_path), lines=tuple(lines))

    def supported_languages(self) -> List[str]:
        """Lists the languages installed for the configured tesseract binary."""
        try:
            return sorted(pytesseract.get_languages(config=''))
        except (pytesseract.TesseractError, OSError) as e:
            logger.error(f"Could not list Tesseract languages: {e}")
            raise RecognitionError(f"Could not list Tesseract languages: {e}") from e
