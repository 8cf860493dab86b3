"""
Build strategies the orchestrator can dispatch to
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ContainerStrategy:
    """Build inside the node-build image, optionally rebuilding it first"""
    rebuild_image: bool = False


@dataclass(frozen=True)
class NativeStrategy:
    """Build with the host toolchain"""
    parallelism: int


BuildStrategy = Union[ContainerStrategy, NativeStrategy]

__all__ = ["ContainerStrategy", "NativeStrategy", "BuildStrategy"]
