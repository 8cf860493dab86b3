"""
Build orchestrator that picks a strategy for the host and runs it
"""

from typing import Any, Dict, List, Type

from .base_builder import BaseBuilder
from .container_builder import ContainerBuilder
from .native_builder import NativeBuilder
from .strategies import BuildStrategy, ContainerStrategy, NativeStrategy
from ..config import BuildConfig, HostPlatform
from ..utils import ProcessResult


def select_strategy(config: BuildConfig) -> BuildStrategy:
    """
    Select the build strategy for this invocation

    Linux always builds in a container, rebuilding the image only when
    asked. Every other host builds natively.
    """
    if config.host_platform == HostPlatform.LINUX:
        return ContainerStrategy(rebuild_image=config.use_container)
    return NativeStrategy(parallelism=config.parallelism)


class BuildOrchestrator:
    """Dispatches a build to the builder for the selected strategy"""

    # Map strategies to builder classes
    BUILDER_MAP: Dict[type, Type[BaseBuilder]] = {
        ContainerStrategy: ContainerBuilder,
        NativeStrategy: NativeBuilder,
    }

    def __init__(self, settings: Any, supervisor: Any, logger: Any):
        """
        Initialize build orchestrator

        Args:
            settings: ConfigLoader with the YAML settings
            supervisor: ProcessSupervisor for every build step
            logger: Logger instance
        """
        self.settings = settings
        self.supervisor = supervisor
        self.logger = logger

    def get_builder(self, strategy: BuildStrategy, config: BuildConfig) -> BaseBuilder:
        """
        Get the builder for a strategy

        Args:
            strategy: Selected strategy
            config: Per-invocation build configuration

        Returns:
            Builder instance
        """
        builder_class = self.BUILDER_MAP.get(type(strategy))
        if not builder_class:
            raise ValueError(f"Unknown build strategy: {strategy!r}")

        return builder_class(
            strategy=strategy,
            config=config,
            settings=self.settings,
            supervisor=self.supervisor,
            logger=self.logger
        )

    def dispatch(self, config: BuildConfig) -> List[ProcessResult]:
        """
        Run the build for this host

        Raises BuildError when a step fails; see BaseBuilder.finish for
        the main step.

        Args:
            config: Per-invocation build configuration

        Returns:
            Result of every step that ran, in order
        """
        strategy = select_strategy(config)
        self.logger.debug(f"Selected strategy: {strategy}")
        return self.get_builder(strategy, config).execute()
