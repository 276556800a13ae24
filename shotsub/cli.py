"""Command-Line Interface handler for ShotSub."""

import argparse
import logging
import os
import sys
from typing import Callable, List, Optional, Sequence

from .config_loader import ConfigLoader
from .log_setup import setup_logging
from .recognizer import OcrEngine, TesseractEngine
from .dispatcher import DEFAULT_IMAGE_EXTENSIONS, RecognitionDispatcher, scan_images
from .subtitle_formatter import formatter_for_path, to_json, write_json
from .exceptions import ShotSubError, ConfigurationError, RecognitionError
from .utils import parse_flag

logger = logging.getLogger(__name__) # Get logger for this module

USAGE = """usage:
  shotsub language fastmode languageCorrection image_or_directory_path [output_path]
  --langs: list supported languages

examples:
  shotsub en false true ./image.jpg out.json        # OCR one image -> write JSON file
  shotsub en false true ./image.jpg                 # OCR one image -> print to console
  shotsub en false true ./images_folder out.srt     # OCR every image -> write SRT subtitles
  shotsub en,vi false true ./images_folder out.txt  # OCR every image -> write plain transcript
  shotsub en false true ./images_folder             # OCR every image -> print JSON to console"""

EngineFactory = Callable[[List[str], bool, bool, dict], OcrEngine]


def tesseract_engine_factory(languages: List[str], fast_mode: bool, language_correction: bool, config: dict) -> OcrEngine:
    return TesseractEngine(
        languages=languages,
        fast_mode=fast_mode,
        language_correction=language_correction,
        tesseract_cmd=config.get('tesseract_cmd'),
        upscale_min_height=config.get('upscale_min_height', 64)
    )


class CLIHandler:
    """Parses arguments and orchestrates the ShotSub process."""

    def __init__(self, engine_factory: EngineFactory = tesseract_engine_factory):
        self.parser = self._create_parser()
        self.engine_factory = engine_factory

    def _create_parser(self) -> argparse.ArgumentParser:
        """Creates the argument parser for the CLI."""
        parser = argparse.ArgumentParser(
            prog="shotsub",
            description="ShotSub: OCR timestamp-named screenshots into JSON, SRT subtitles or a transcript.",
            epilog=USAGE,
            formatter_class=argparse.RawDescriptionHelpFormatter
        )
        parser.add_argument("language", nargs="?", help="Comma-separated recognition languages, e.g. en,vi.")
        parser.add_argument("fastmode", nargs="?", help="'true' for fast recognition, anything else for accurate.")
        parser.add_argument("language_correction", nargs="?", help="'true' to enable dictionary correction.")
        parser.add_argument("path", nargs="?", help="An image file or a directory of timestamp-named images.")
        parser.add_argument("output_path", nargs="?", default=None,
                            help="Output file. Directories: .srt gives subtitles, anything else plain text. "
                                 "Images: JSON.")
        parser.add_argument(
            "--langs",
            action="store_true",
            help="List the supported recognition languages and exit."
        )
        parser.add_argument(
            "-c", "--config",
            default=None,
            help="Path to an optional configuration YAML file."
        )
        parser.add_argument(
            "--log-level",
            default="INFO",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Set the logging level for console and file output."
        )
        parser.add_argument(
            "--workers",
            type=int,
            default=None, # Default taken from config
            help="Override the maximum number of concurrent OCR calls (default: one per image)."
        )
        parser.add_argument(
            "--tesseract-cmd",
            default=None, # Default taken from config
            help="Override the path to the tesseract executable."
        )
        parser.add_argument(
            "--progress",
            action="store_true",
            help="Show a progress bar while a directory is processed."
        )
        return parser

    def _load_config(self, args: argparse.Namespace) -> dict:
        config = ConfigLoader().load_config(args.config)
        if args.workers is not None:
            if args.workers < 1:
                raise ConfigurationError(f"--workers must be at least 1, got {args.workers}")
            logger.info(f"Overriding max_workers from config with CLI argument: {args.workers}")
            config['max_workers'] = args.workers
        if args.tesseract_cmd:
            logger.info(f"Overriding tesseract_cmd from config with CLI argument: {args.tesseract_cmd}")
            config['tesseract_cmd'] = args.tesseract_cmd
        if args.progress:
            config['show_progress'] = True
        return config

    def _process_directory(self, engine: OcrEngine, config: dict, src: str, dst: Optional[str]) -> int:
        tasks = scan_images(src, config.get('image_extensions') or DEFAULT_IMAGE_EXTENSIONS)
        if not tasks:
            logger.error(f"No supported images found in '{src}'")
            return 1

        dispatcher = RecognitionDispatcher(
            engine,
            max_workers=config.get('max_workers'),
            show_progress=bool(config.get('show_progress'))
        )
        entries = dispatcher.build_entries(tasks)
        if not entries:
            logger.warning(f"OCR produced no results for the {len(tasks)} images in '{src}'")

        if dst:
            formatter_for_path(dst).write(entries, dst)
            logger.info(f"Created: {dst}")
        else:
            print(to_json([entry.to_dict() for entry in entries]))
        return 0

    def _process_image(self, engine: OcrEngine, src: str, dst: Optional[str]) -> int:
        try:
            result = engine.recognize(src)
        except RecognitionError as e:
            logger.error(f"OCR failed for {src}: {e}")
            return 1

        if dst:
            write_json(result.to_dict(), dst)
        else:
            print(f"Image: {result.image}")
            print(f"Text:\n{result.text}")
        return 0

    def execute(self, argv: Optional[Sequence[str]] = None) -> int:
        """Parses arguments, sets up logging, loads config, runs OCR and returns the exit code."""
        args = self.parser.parse_args(argv)

        # --- Setup Logging ---
        log_level = getattr(logging, args.log_level.upper(), logging.INFO)
        setup_logging(log_level=log_level)

        # --- Load Configuration ---
        try:
            config = self._load_config(args)
        except ConfigurationError as e:
            logger.critical(f"Failed to load configuration from {args.config}: {e}")
            return 1
        except FileNotFoundError:
            logger.critical(f"Configuration file not found: {args.config}")
            return 1

        if config.get('log_file'):
            setup_logging(log_level=log_level, log_dir=config.get('log_dir', 'logs'), log_file=config['log_file'])
            logger.info("Logging re-configured with settings from config file.")

        if not args.langs and args.path is None:
            print(USAGE)
            return 1

        try:
            if args.langs:
                engine = self.engine_factory(['en'], False, False, config)
                for lang in engine.supported_languages():
                    print(lang)
                return 0

            languages = [code for code in args.language.split(',') if code]
            engine = self.engine_factory(
                languages, parse_flag(args.fastmode), parse_flag(args.language_correction), config
            )

            if os.path.isdir(args.path):
                return self._process_directory(engine, config, args.path, args.output_path)
            if os.path.isfile(args.path):
                return self._process_image(engine, args.path, args.output_path)
            logger.error(f"Input path not found: {args.path}")
            return 1

        except ShotSubError as e:
             # Catch errors originating from our application logic
             logger.error(f"A ShotSub error occurred: {e}")
             return 1
        except KeyboardInterrupt:
             logger.warning("Process interrupted by user (Ctrl+C). Exiting.")
             return 1
        except Exception as e:
             # Catch any other unexpected errors
             logger.critical(f"An unexpected critical error occurred at the top level: {e}", exc_info=True)
             return 2 # Use a different exit code for unexpected crashes

    def run(self, argv: Optional[Sequence[str]] = None) -> None:
        sys.exit(self.execute(argv))


def main() -> None:
    CLIHandler().run()
