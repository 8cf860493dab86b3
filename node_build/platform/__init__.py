"""
Platform detection
"""

import os
import sys
import platform
from typing import Dict, Any


class PlatformDetector:
    """Detects and provides information about the current platform"""

    def detect(self) -> Dict[str, Any]:
        """
        Detect current platform and architecture

        Returns:
            Dictionary with platform information
        """
        return {
            "os": platform.system(),
            "platform": self._get_platform_name(),
            "arch": self._get_architecture(),
            "machine": platform.machine(),
        }

    def current_platform(self) -> str:
        """
        Get the platform tag used as the build ID prefix

        Returns:
            Tag such as "linux-x64" or "macos-aarch64"
        """
        return f"{self._get_platform_name()}-{self._get_architecture()}"

    def is_linux(self) -> bool:
        """Check if the host is Linux"""
        return self._get_platform_name() == "linux"

    def cpu_count(self) -> int:
        """Number of CPUs available to the build tool"""
        return os.cpu_count() or 1

    def _get_platform_name(self) -> str:
        """Get normalized platform name"""
        system = platform.system().lower()

        if system == "linux":
            return "linux"
        elif system == "windows":
            return "windows"
        elif system == "darwin":
            return "macos"
        else:
            return system

    def _get_architecture(self) -> str:
        """Get normalized architecture based on Python interpreter"""
        python_bits = 64 if sys.maxsize > 2**32 else 32
        machine = platform.machine().lower()

        if machine in ["aarch64", "arm64"]:
            return "aarch64" if python_bits == 64 else "arm"
        if python_bits == 32:
            return "x86"
        return "x64"


__all__ = ["PlatformDetector"]
