# Area: Tests
"""Shared fakes for backend-driven tests."""

import os
import tempfile

import pytest

from lexigame._persistence.database import init_database
from lexigame.backends import GenerationBackend, ImageBackend
from lexigame.errors import BackendFailure


class ScriptedBackend(GenerationBackend):
    """Replays a script of replies; exceptions in the script are raised."""

    name = "scripted"

    def __init__(self, script):
        self.script = list(script)
        self.calls = []

    def generate(self, instructions, output_schema):
        self.calls.append((instructions, output_schema))
        step = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(step, BaseException):
            raise step
        return step


class RecordingImageBackend(ImageBackend):
    """Returns a distinct URI per prompt; fails for words in ``fail_words``."""

    name = "fake-images"

    def __init__(self, fail_words=()):
        self.fail_words = {w.casefold() for w in fail_words}
        self.prompts = []

    def generate_image(self, prompt):
        self.prompts.append(prompt)
        for word in self.fail_words:
            if f'"{word}"' in prompt.casefold():
                raise BackendFailure(self.name, "rate limited")
        return f"data:image/png;base64,{len(self.prompts)}"


@pytest.fixture
def scripted_backend():
    return ScriptedBackend


@pytest.fixture
def image_backend():
    return RecordingImageBackend


@pytest.fixture
def db_path():
    """Create temporary database for testing."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    init_database(path)
    yield path
    os.unlink(path)
