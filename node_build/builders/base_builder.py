"""
Base builder class that all build strategies inherit from
"""

from abc import ABC, abstractmethod
from typing import List, Sequence, Any

from ..config import BuildConfig
from ..exceptions import BuildError
from ..utils import ProcessResult


class BaseBuilder(ABC):
    """Abstract base class for all builders"""

    def __init__(self,
                 strategy: Any,
                 config: BuildConfig,
                 settings: Any,
                 supervisor: Any,
                 logger: Any):
        """
        Initialize base builder

        Args:
            strategy: Strategy value selected for this run
            config: Per-invocation build configuration
            settings: ConfigLoader with the YAML settings
            supervisor: ProcessSupervisor used for every step
            logger: Logger instance
        """
        self.strategy = strategy
        self.config = config
        self.settings = settings
        self.supervisor = supervisor
        self.logger = logger

    @property
    def name(self) -> str:
        return type(self).__name__

    def run_step(self, step: str, command: str, args: Sequence[str]) -> ProcessResult:
        """
        Run one supervised step in the working directory

        Args:
            step: Human-readable step name
            command: Executable
            args: Arguments, in order

        Returns:
            ProcessResult of the step
        """
        self.logger.info(f"{step}: {command} {' '.join(args)}")
        return self.supervisor.run(command, args, cwd=self.config.working_dir)

    def require(self, step: str, result: ProcessResult) -> ProcessResult:
        """Raise BuildError unless the step succeeded"""
        if not result.succeeded:
            raise BuildError(step, result)
        return result

    def finish(self, step: str, result: ProcessResult) -> ProcessResult:
        """
        Check the main build step

        A failure aborts the build unless continue_on_build_failure is set,
        in which case it is only logged.
        """
        if result.succeeded:
            return result
        if self.settings.get_option("continue_on_build_failure", False):
            self.logger.warning(f"{step} exited with {result.exit_code}, continuing anyway")
            return result
        raise BuildError(step, result)

    @abstractmethod
    def build(self) -> List[ProcessResult]:
        """Run the build steps in order"""
        pass

    def execute(self) -> List[ProcessResult]:
        """Execute the build and return the result of every step run"""
        self.logger.info(f"Building with {self.name} ({self.config.host_platform.value})...")
        results = self.build()
        if all(r.succeeded for r in results):
            self.logger.success(f"{self.name} finished")
        return results
