"""
Handoff of a finished build to the debug-symbol archiver
"""

import importlib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .exceptions import ArchiveError
from .identity import BuildIdentifier


@dataclass(frozen=True)
class ArtifactManifest:
    """What the archiver needs to package a build's symbols"""
    build_id: BuildIdentifier
    object_directory: Path
    library_names: Tuple[str, ...]


class CallableArchiver:
    """Archiver backed by a Python callable"""

    def __init__(self, func: Callable[[str, Path, List[str]], Any]):
        self.func = func

    @classmethod
    def from_path(cls, path: str) -> "CallableArchiver":
        """
        Resolve a "package.module:function" reference

        Args:
            path: Import path of the callable

        Returns:
            CallableArchiver wrapping it
        """
        module_name, sep, attr = path.partition(":")
        if not sep or not module_name or not attr:
            raise ArchiveError(f"Archiver must look like 'module:function', got {path!r}")
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise ArchiveError(f"Cannot import archiver module {module_name}: {e}") from e

        func = module
        for part in attr.split("."):
            func = getattr(func, part, None)
            if func is None:
                raise ArchiveError(f"Archiver {path} not found")
        if not callable(func):
            raise ArchiveError(f"Archiver {path} is not callable")
        return cls(func)

    def build_symbols_archive(self, build_id: str, object_directory: Path,
                              library_names: List[str]) -> None:
        self.func(build_id, object_directory, library_names)


class CommandArchiver:
    """Archiver backed by an external command"""

    def __init__(self, command: Sequence[str], supervisor: Any):
        if not command:
            raise ArchiveError("Archiver command is empty")
        self.command = [str(c) for c in command]
        self.supervisor = supervisor

    def build_symbols_archive(self, build_id: str, object_directory: Path,
                              library_names: List[str]) -> None:
        args = self.command[1:] + [build_id, str(object_directory)] + list(library_names)
        result = self.supervisor.run(self.command[0], args)
        if not result.succeeded:
            raise ArchiveError(f"Archiver exited with code {result.exit_code}")


def resolve_archiver(settings: Dict[str, Any], supervisor: Any):
    """
    Build an archiver from the "archive" settings section

    Args:
        settings: Archive section (keys: callable, command)
        supervisor: ProcessSupervisor for command archivers

    Returns:
        Archiver instance
    """
    if settings.get("callable"):
        return CallableArchiver.from_path(settings["callable"])
    command = settings.get("command")
    if command:
        if isinstance(command, str):
            command = [command]
        return CommandArchiver(command, supervisor)
    raise ArchiveError("No symbol archiver configured (set archive.callable or archive.command)")


def handoff(manifest: ArtifactManifest, archiver: Any, logger: Optional[Any] = None) -> None:
    """
    Pass a finished build to the archiver

    Library existence is not checked here; that is the archiver's job.

    Args:
        manifest: Build ID, object directory and library names
        archiver: Object with a build_symbols_archive method
        logger: Optional logger
    """
    if logger:
        logger.info(f"Archiving symbols for {manifest.build_id} "
                    f"from {manifest.object_directory}: {', '.join(manifest.library_names)}")
    try:
        archiver.build_symbols_archive(
            str(manifest.build_id),
            manifest.object_directory,
            list(manifest.library_names),
        )
    except ArchiveError:
        raise
    except Exception as e:
        raise ArchiveError(f"Symbol archiver failed: {e}") from e


__all__ = [
    "ArtifactManifest",
    "CallableArchiver",
    "CommandArchiver",
    "resolve_archiver",
    "handoff",
]
