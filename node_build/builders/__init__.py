"""
Builder components for the supported build strategies
"""

from .base_builder import BaseBuilder
from .container_builder import ContainerBuilder
from .native_builder import NativeBuilder
from .orchestrator import BuildOrchestrator, select_strategy
from .strategies import BuildStrategy, ContainerStrategy, NativeStrategy

__all__ = [
    "BaseBuilder",
    "ContainerBuilder",
    "NativeBuilder",
    "BuildOrchestrator",
    "select_strategy",
    "BuildStrategy",
    "ContainerStrategy",
    "NativeStrategy",
]
