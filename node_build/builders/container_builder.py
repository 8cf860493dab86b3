"""
Container builder: runs the build inside the node-build Docker image
"""

from typing import List

from .base_builder import BaseBuilder
from ..utils import ProcessResult


class ContainerBuilder(BaseBuilder):
    """Builds inside a container for a consistent glibc and toolchain"""

    DOCKER = "docker"

    @property
    def image(self) -> str:
        return self.settings.get("container", "image", "node-build")

    def image_build_args(self) -> List[str]:
        """Arguments for building the build-environment image"""
        dockerfile = self.settings.get("container", "dockerfile", "Dockerfile.build")
        return ["build", ".", "-f", dockerfile, "-t", self.image]

    def run_args(self) -> List[str]:
        """Arguments for running the build with the working tree mounted"""
        mount_point = self.settings.get("container", "mount_point", "/node")
        return ["run", "-v", f"{self.config.working_dir}:{mount_point}", self.image]

    def build(self) -> List[ProcessResult]:
        results = []

        if self.strategy.rebuild_image:
            result = self.run_step("Image build", self.DOCKER, self.image_build_args())
            results.append(self.require("Image build", result))

        result = self.run_step("Container run", self.DOCKER, self.run_args())
        results.append(self.finish("Container run", result))
        return results
