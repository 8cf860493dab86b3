#!/usr/bin/env python3
"""
Main entry point for the node build orchestrator

Generates a build ID, compiles it into the Node sources, builds Node
(in a container on Linux, natively elsewhere) and hands the result to
the symbol archiver.
"""

import argparse
import sys
import random
from datetime import datetime
from pathlib import Path
from typing import Optional, List, Callable, Any

from . import identity
from .archive import ArtifactManifest, handoff, resolve_archiver
from .builders import BuildOrchestrator, select_strategy
from .config import BuildConfig, ConfigLoader
from .exceptions import BuildSystemError
from .identity import BuildIdentifier
from .platform import PlatformDetector
from .utils import Logger, ProcessResult, ProcessSupervisor


class BuildSystem:
    """Main build orchestrator class"""

    def __init__(self,
                 working_dir: Optional[Path] = None,
                 config_file: Optional[Path] = None,
                 use_container: bool = False,
                 parallelism: Optional[int] = None,
                 verbose: bool = False,
                 dry_run: bool = False,
                 log_file: Optional[str] = None,
                 detector: Optional[Any] = None,
                 supervisor: Optional[Any] = None,
                 archiver: Optional[Any] = None,
                 clock: Callable[[], datetime] = datetime.now,
                 rng: Optional[random.Random] = None):
        """
        Initialize the build orchestrator

        Args:
            working_dir: Node source tree (default: current directory)
            config_file: YAML settings file (default: bundled build.yaml)
            use_container: Rebuild the container image before building
            parallelism: make job count (default: CPU count)
            verbose: Enable verbose output
            dry_run: Log commands and the build ID file instead of running/writing
            log_file: Optional log file path
            detector: Platform detector (default: PlatformDetector)
            supervisor: Process supervisor (default: ProcessSupervisor)
            archiver: Symbol archiver (default: from the archive settings)
            clock: Source of the current time
            rng: Random source for the build ID
        """
        self.verbose = verbose
        self.dry_run = dry_run
        self.logger = Logger(verbose=verbose, log_file=log_file)

        self.settings = ConfigLoader(config_file)
        self.detector = detector or PlatformDetector()
        self.config = BuildConfig.detect(
            self.detector,
            use_container=use_container,
            parallelism=parallelism,
            working_dir=working_dir,
        )
        self.logger.info(f"Platform: {self.config.platform_tag} "
                         f"({self.config.host_platform.value}, {self.config.parallelism} jobs)")

        self.supervisor = supervisor or ProcessSupervisor(self.logger, dry_run=dry_run)
        self.orchestrator = BuildOrchestrator(
            settings=self.settings,
            supervisor=self.supervisor,
            logger=self.logger
        )
        self._archiver = archiver
        self.clock = clock
        self.rng = rng

    @property
    def source_file(self) -> Path:
        rel = self.settings.get("identity", "source_file", "src/node_build_id.cc")
        return self.config.working_dir / rel

    @property
    def object_directory(self) -> Path:
        rel = self.settings.get("artifacts", "object_directory", "out/Release")
        return self.config.working_dir / rel

    @property
    def libraries(self) -> List[str]:
        libraries = self.settings.get("artifacts", "libraries", ["node"])
        if isinstance(libraries, str):
            libraries = [libraries]
        return [str(lib) for lib in libraries]

    def generate_build_id(self) -> BuildIdentifier:
        """Generate the identifier for this build"""
        build_id = identity.generate(
            self.config.platform_tag,
            self.clock(),
            rng=self.rng,
            product=self.settings.get("identity", "product", "node"),
        )
        self.logger.info(f"Build ID: {build_id}")
        return build_id

    def inject_build_id(self, build_id: BuildIdentifier) -> Path:
        """
        Write the build ID source file

        Raises OSError if the file cannot be written.
        """
        namespace = self.settings.get("identity", "namespace", "node")
        symbol = self.settings.get("identity", "symbol", "gBuildId")

        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would write {self.source_file}: "
                             f"{identity.render_source(build_id, namespace, symbol)}")
            return self.source_file

        path = identity.inject(build_id, self.source_file, namespace, symbol)
        self.logger.debug(f"Wrote {path}")
        return path

    def build(self) -> List[ProcessResult]:
        """Dispatch the build; raises BuildError on failure"""
        return self.orchestrator.dispatch(self.config)

    def get_archiver(self):
        """Get the symbol archiver, resolving it from settings on first use"""
        if self._archiver is None:
            self._archiver = resolve_archiver(self.settings.get_section("archive"), self.supervisor)
        return self._archiver

    def archive(self, build_id: BuildIdentifier) -> ArtifactManifest:
        """Hand the finished build to the symbol archiver"""
        manifest = ArtifactManifest(
            build_id=build_id,
            object_directory=self.object_directory,
            library_names=tuple(self.libraries),
        )
        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would archive {manifest.library_names} "
                             f"from {manifest.object_directory}")
            return manifest
        handoff(manifest, self.get_archiver(), self.logger)
        return manifest

    def run(self, skip_archive: bool = False) -> BuildIdentifier:
        """
        Run the full pipeline

        Any failure propagates and stops the pipeline at that step.

        Args:
            skip_archive: Build without handing off to the archiver

        Returns:
            The build identifier
        """
        build_id = self.generate_build_id()
        self.inject_build_id(build_id)
        self.build()

        if skip_archive:
            self.logger.info("Skipping symbol archive")
        else:
            self.archive(build_id)

        self.logger.success(f"Build {build_id} complete")
        return build_id

    def show_info(self) -> None:
        """Show orchestrator information"""
        from . import __version__

        print(f"\nNode Build Orchestrator v{__version__}")
        print(f"{'='*50}")
        print(f"Platform tag: {self.config.platform_tag}")
        print(f"Host platform: {self.config.host_platform.value}")
        print(f"Strategy: {select_strategy(self.config)}")
        print(f"Parallelism: {self.config.parallelism}")
        print(f"Working Directory: {self.config.working_dir}")
        print(f"Build ID source: {self.source_file}")
        print(f"Object Directory: {self.object_directory}")
        print(f"Libraries: {', '.join(self.libraries)}")
        print(f"Config: {self.settings.config_file}")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build Node with an embedded build ID and archive its symbols",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        # Options meant for other tools must not prefix-match ours
        allow_abbrev=False,
        epilog="""
Examples:
  %(prog)s                          # Build and archive symbols
  %(prog)s --build-container        # Rebuild the build image first (Linux)
  %(prog)s --jobs 8 --skip-archive  # Native build with 8 jobs, no archive
  %(prog)s --info                   # Show platform and strategy
        """
    )

    parser.add_argument(
        "--info",
        action="store_true",
        help="Show platform and strategy instead of building"
    )

    parser.add_argument(
        "--build-container",
        action="store_true",
        help="Rebuild the container image before building (Linux only)"
    )

    parser.add_argument(
        "--jobs", "-j",
        type=int,
        help="Parallel jobs for the native build (default: CPU count)"
    )

    parser.add_argument(
        "--working-dir",
        type=Path,
        help="Node source tree (default: current directory)"
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Alternative YAML settings file"
    )

    parser.add_argument(
        "--skip-archive",
        action="store_true",
        help="Do not hand the build to the symbol archiver"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--log-file",
        help="Also write the log to this file"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log commands instead of running them"
    )

    return parser


def main(argv: Optional[List[str]] = None):
    """Command-line interface"""
    parser = create_parser()
    # Arguments meant for other tools are ignored
    args, _ = parser.parse_known_args(argv)

    try:
        bs = BuildSystem(
            working_dir=args.working_dir,
            config_file=args.config,
            use_container=args.build_container,
            parallelism=args.jobs,
            verbose=args.verbose,
            dry_run=args.dry_run,
            log_file=args.log_file
        )
    except (OSError, ValueError) as e:
        print(f"Error initializing build orchestrator: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.info:
            bs.show_info()
        else:
            bs.run(skip_archive=args.skip_archive)
    except KeyboardInterrupt:
        print("\nBuild interrupted by user", file=sys.stderr)
        sys.exit(130)
    except (OSError, BuildSystemError, ValueError) as e:
        bs.logger.error(f"Build failed: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
