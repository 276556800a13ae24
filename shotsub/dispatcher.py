"""Scans screenshot directories and runs OCR on every image concurrently."""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from tqdm import tqdm

from .recognizer import OcrEngine
from .models import ImageTask, RecognitionResult, SubtitleEntry
from .exceptions import RecognitionError, FileSystemError
from .utils import has_extension

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_EXTENSIONS = ("jpg", "jpeg", "png")

def scan_images(directory: str, extensions: Iterable[str] = DEFAULT_IMAGE_EXTENSIONS) -> List[ImageTask]:
    """
    Finds the timestamp-named images in a directory.

    Args:
        directory: The directory to search (not recursive).
        extensions: Accepted image extensions, compared case-insensitively.

    Returns:
        A list of ImageTask in directory listing order.

    Raises:
        FileSystemError: If the directory cannot be listed.
    """
    extensions = tuple(extensions)
    try:
        filenames = sorted(os.listdir(directory))
    except OSError as e:
        logger.error(f"Could not list directory {directory}: {e}")
        raise FileSystemError(f"Could not list directory {directory}: {e}") from e

    tasks = []
    logger.info(f"Scanning directory for images: {directory}")
    for filename in filenames:
        path = os.path.join(directory, filename)
        if not has_extension(filename, extensions) or not os.path.isfile(path):
            continue
        task = ImageTask.from_path(path)
        if task is None:
            logger.warning(f"Skipped: Invalid filename format - {path}")
            continue
        tasks.append(task)

    logger.info(f"Found {len(tasks)} timestamped images in {directory}.")
    return tasks


class RecognitionDispatcher:
    """
    Fans out one OCR call per image and gathers the results in timeline order.
    """

    def __init__(self, engine: OcrEngine, max_workers: Optional[int] = None, show_progress: bool = False):
        """
        Initializes the RecognitionDispatcher.

        Args:
            engine: The OCR backend used for every image.
            max_workers: Optional cap on concurrent OCR calls. None runs every image at once.
            show_progress: Display a tqdm progress bar while images are recognized.
        """
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.engine = engine
        self.max_workers = max_workers
        self.show_progress = show_progress

    def _to_tasks(self, images: Sequence[Union[str, ImageTask]]) -> List[ImageTask]:
        tasks = []
        for image in images:
            if isinstance(image, ImageTask):
                tasks.append(image)
                continue
            task = ImageTask.from_path(image)
            if task is None:
                logger.warning(f"Skipped: Invalid filename format - {image}")
                continue
            tasks.append(task)
        return tasks

    def recognize_all(self, images: Sequence[Union[str, ImageTask]]) -> List[Tuple[ImageTask, RecognitionResult]]:
        """
        Recognizes every image and returns the successes sorted by start time.

        Args:
            images: Image paths or prepared ImageTask objects.

        Returns:
            (task, result) pairs ordered by ascending start time. Images with an
            unparseable name or a failed OCR call are left out.
        """
        tasks = self._to_tasks(images)
        if not tasks:
            return []

        workers = self.max_workers or len(tasks)
        slots: List[Optional[RecognitionResult]] = [None] * len(tasks)
        failed = 0
        start_time = time.time()
        logger.info(f"Recognizing {len(tasks)} images with {min(workers, len(tasks))} workers...")

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(self.engine.recognize, task.path): index
                       for index, task in enumerate(tasks)}
            with tqdm(total=len(tasks), unit="image", desc="OCR", disable=not self.show_progress) as pbar:
                for future in as_completed(futures):
                    index = futures[future]
                    try:
                        slots[index] = future.result()
                    except RecognitionError as e:
                        logger.error(f"OCR failed for {tasks[index].path}: {e}")
                        failed += 1
                    except Exception as e:
                        logger.error(f"Unexpected error during OCR for {tasks[index].path}: {e}", exc_info=True)
                        failed += 1
                    finally:
                        pbar.update(1)

        recognized = [(task, result) for task, result in zip(tasks, slots) if result is not None]
        # sorted() is stable, so equal start times keep their input order.
        recognized.sort(key=lambda pair: pair[0].start_seconds)
        logger.info(f"Recognized {len(recognized)}/{len(tasks)} images in {time.time() - start_time:.2f} seconds "
                    f"({failed} failed).")
        return recognized

    def build_entries(self, images: Sequence[Union[str, ImageTask]]) -> List[SubtitleEntry]:
        """Recognizes the images and turns the sorted results into subtitle entries."""
        return [
            SubtitleEntry(start=task.start, end=task.end, text=result.text)
            for task, result in self.recognize_all(images)
        ]
