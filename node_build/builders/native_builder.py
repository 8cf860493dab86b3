"""
Native builder: runs make against the host toolchain
"""

from typing import List

from .base_builder import BaseBuilder
from ..utils import ProcessResult


class NativeBuilder(BaseBuilder):
    """Builds directly on the host"""

    MAKE = "make"

    def make_args(self) -> List[str]:
        make_dir = self.settings.get("native", "make_dir", "out")
        build_type = self.settings.get("native", "build_type", "Release")
        return [f"-j{self.strategy.parallelism}", "-C", make_dir, f"BUILDTYPE={build_type}"]

    def build(self) -> List[ProcessResult]:
        result = self.run_step("Native build", self.MAKE, self.make_args())
        return [self.finish("Native build", result)]
