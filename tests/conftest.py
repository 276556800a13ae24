"""
Shared fixtures for ShotSub tests.
"""

import logging

import pytest


@pytest.fixture
def make_files(tmp_path):
    """Creates empty files with the given names and returns their paths."""
    def _make(names, directory=None):
        directory = directory or tmp_path
        paths = []
        for name in names:
            path = directory / name
            path.write_bytes(b"")
            paths.append(str(path))
        return paths
    return _make


@pytest.fixture(autouse=True)
def restore_root_logging():
    """The CLI reconfigures the root logger; put the original handlers back."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
