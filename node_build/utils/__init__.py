"""
Utility modules for the build orchestrator
"""

import sys
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output"""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'SUCCESS': '\033[92m',  # Bright Green
        'RESET': '\033[0m'
    }

    def format(self, record):
        if sys.stdout.isatty():
            # Copy so the file handler still sees plain text
            record = logging.makeLogRecord(record.__dict__)
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            reset = self.COLORS['RESET']

            record.levelname = f"{color}{record.levelname}{reset}"
            record.msg = f"{color}{record.msg}{reset}"

        return super().format(record)


class Logger:
    """Build orchestrator logger"""

    SUCCESS = 25  # Between INFO and WARNING

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        """
        Initialize logger

        Args:
            verbose: Enable verbose output
            log_file: Optional log file path
        """
        self.verbose = verbose

        logging.addLevelName(self.SUCCESS, "SUCCESS")

        self.logger = logging.getLogger("node_build")
        self.logger.setLevel(logging.DEBUG if verbose else logging.INFO)
        self.logger.propagate = False

        # Remove existing handlers
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

        if verbose:
            fmt = "%(asctime)s [%(levelname)s] %(message)s"
        else:
            fmt = "[%(levelname)s] %(message)s"

        console_handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S"))
        self.logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            self.logger.addHandler(file_handler)

    def debug(self, msg: str):
        """Log debug message"""
        self.logger.debug(msg)

    def info(self, msg: str):
        """Log info message"""
        self.logger.info(msg)

    def warning(self, msg: str):
        """Log warning message"""
        self.logger.warning(msg)

    def error(self, msg: str):
        """Log error message"""
        self.logger.error(msg)

    def success(self, msg: str):
        """Log success message"""
        self.logger.log(self.SUCCESS, msg)


@dataclass(frozen=True)
class ProcessResult:
    """Exit status of one supervised subprocess"""
    command: Tuple[str, ...]
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class ProcessSupervisor:
    """Runs external commands attached to the orchestrator's own stdio"""

    # Exit status reported when the executable cannot be found
    NOT_FOUND_EXIT_CODE = 127

    def __init__(self, logger: Logger, dry_run: bool = False):
        """
        Initialize process supervisor

        Args:
            logger: Logger instance
            dry_run: If True, log commands instead of running them
        """
        self.logger = logger
        self.dry_run = dry_run

    def run(self,
            command: str,
            args: Sequence[str],
            cwd: Optional[Path] = None) -> ProcessResult:
        """
        Run a command and wait for it to exit

        The child inherits stdin, stdout and stderr, so its output is
        visible live. Arguments are passed as a list and never go
        through a shell.

        Args:
            command: Executable name or path
            args: Arguments, in order
            cwd: Working directory for the child

        Returns:
            ProcessResult with the child's exit status
        """
        cmd = (str(command), *(str(a) for a in args))
        cmd_str = " ".join(cmd)
        self.logger.debug(f"Running: {cmd_str}")
        if cwd is not None:
            self.logger.debug(f"  in: {cwd}")

        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would run: {cmd_str}")
            return ProcessResult(cmd, 0)

        try:
            completed = subprocess.run(list(cmd), cwd=cwd, check=False)
        except FileNotFoundError:
            if cwd is not None and not Path(cwd).is_dir():
                self.logger.error(f"Working directory not found: {cwd}")
            else:
                self.logger.error(f"Command not found: {command}")
            return ProcessResult(cmd, self.NOT_FOUND_EXIT_CODE)

        result = ProcessResult(cmd, completed.returncode)
        if not result.succeeded:
            self.logger.error(f"Command failed ({result.exit_code}): {cmd_str}")
        return result


__all__ = ["Logger", "ProcessResult", "ProcessSupervisor"]
