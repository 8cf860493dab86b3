"""Exceptions raised by the node build orchestrator"""

from typing import Any


class BuildSystemError(Exception):
    """Base class for orchestration failures"""


class BuildError(BuildSystemError):
    """Raised when a supervised build step exits non-zero"""

    def __init__(self, step: str, result: Any):
        self.step = step
        self.result = result
        super().__init__(f"{step} failed with exit code {result.exit_code}")


class ArchiveError(BuildSystemError):
    """Raised when the symbol archiver could not be run or reported failure"""
