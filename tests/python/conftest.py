import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from node_build.config import ConfigLoader
from node_build.utils import Logger, ProcessResult


class FakeSupervisor:
    """Records commands instead of running them."""

    def __init__(self, exit_codes=None):
        self.calls = []
        self.exit_codes = list(exit_codes or [])

    def run(self, command, args, cwd=None):
        self.calls.append((command, list(args), cwd))
        code = self.exit_codes.pop(0) if self.exit_codes else 0
        return ProcessResult((command, *args), code)


class FakeDetector:
    def __init__(self, linux=True, tag="linux-x64", cpus=4):
        self.linux = linux
        self.tag = tag
        self.cpus = cpus

    def is_linux(self):
        return self.linux

    def current_platform(self):
        return self.tag

    def cpu_count(self):
        return self.cpus


class FixedRandom:
    def __init__(self, value):
        self.value = value

    def randint(self, a, b):
        assert a <= self.value <= b
        return self.value


class RecordingArchiver:
    def __init__(self):
        self.calls = []

    def build_symbols_archive(self, build_id, object_directory, library_names):
        self.calls.append((build_id, object_directory, library_names))


@pytest.fixture
def logger():
    return Logger(verbose=True)


@pytest.fixture
def settings():
    return ConfigLoader()


@pytest.fixture
def supervisor():
    return FakeSupervisor()
