"""
Node Build Orchestrator
Generates a build ID, builds Node in a container (Linux) or natively,
and hands the result to the symbol archiver
"""

__version__ = "1.0.0"
__supported_platforms__ = ["linux", "other"]

from .main import BuildSystem

__all__ = ["BuildSystem", "__version__", "__supported_platforms__"]
