"""
Configuration management for the build orchestrator
"""

import yaml
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Optional

DEFAULT_CONFIG_FILE = Path(__file__).parent / "build.yaml"


class HostPlatform(str, Enum):
    """Host platform as far as strategy selection cares"""
    LINUX = "linux"
    OTHER = "other"


@dataclass(frozen=True)
class BuildConfig:
    """Per-invocation build settings, derived once at startup"""
    host_platform: HostPlatform
    use_container: bool
    parallelism: int
    working_dir: Path
    platform_tag: str

    def __post_init__(self):
        if isinstance(self.parallelism, bool) or not isinstance(self.parallelism, int) \
                or self.parallelism < 1:
            raise ValueError(f"parallelism must be a positive integer, got {self.parallelism!r}")
        if not Path(self.working_dir).is_absolute():
            raise ValueError(f"working_dir must be absolute: {self.working_dir}")

    @classmethod
    def detect(cls,
               detector: Any,
               use_container: bool = False,
               parallelism: Optional[int] = None,
               working_dir: Optional[Path] = None) -> "BuildConfig":
        """
        Build the configuration from host introspection and invocation flags

        Args:
            detector: PlatformDetector (or compatible) instance
            use_container: Rebuild the container image before building
            parallelism: Job count for make (default: CPU count)
            working_dir: Tree to build (default: current directory)

        Returns:
            BuildConfig instance
        """
        host = HostPlatform.LINUX if detector.is_linux() else HostPlatform.OTHER
        return cls(
            host_platform=host,
            use_container=use_container,
            parallelism=parallelism if parallelism is not None else detector.cpu_count(),
            working_dir=Path(working_dir or Path.cwd()).resolve(),
            platform_tag=detector.current_platform(),
        )


class ConfigLoader:
    """Loads and manages orchestrator settings"""

    SECTIONS = ["identity", "container", "native", "artifacts", "archive", "build_options"]

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration loader

        Args:
            config_file: YAML settings file (default: bundled build.yaml)
        """
        self.config_file = Path(config_file) if config_file else DEFAULT_CONFIG_FILE

        if not self.config_file.exists():
            raise FileNotFoundError(f"Build config not found: {self.config_file}")

        with open(self.config_file, 'r') as f:
            try:
                self.settings = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid build config {self.config_file}: {e}") from e

        if not isinstance(self.settings, dict):
            raise ValueError(f"Build config must be a mapping: {self.config_file}")

    def get_section(self, name: str) -> Dict[str, Any]:
        """
        Get a settings section

        Args:
            name: Section name

        Returns:
            Section dictionary (empty if the file omits it)
        """
        if name not in self.SECTIONS:
            raise ValueError(f"Unknown config section: {name}")
        return self.settings.get(name) or {}

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a single value from a section"""
        value = self.get_section(section).get(key)
        return default if value is None else value

    def get_option(self, key: str, default: Any = None) -> Any:
        """
        Get a build option

        Args:
            key: Option key
            default: Default value if not found

        Returns:
            Option value
        """
        return self.get("build_options", key, default)


__all__ = ["ConfigLoader", "BuildConfig", "HostPlatform", "DEFAULT_CONFIG_FILE"]
