"""
Build identifier generation and injection into the Node sources
"""

import random
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

# Upper bound (inclusive) of the random suffix
RANDOM_ID_MAX = 10**9

SOURCE_TEMPLATE = 'namespace {namespace} {{ char {symbol}[] = "{build_id}"; }}'


@dataclass(frozen=True)
class BuildIdentifier:
    """Identifier tagging one build's output and its debug symbols"""
    platform_tag: str
    date: str
    random_suffix: str
    product: str = "node"

    def __str__(self) -> str:
        return f"{self.platform_tag}-{self.product}-{self.date}-{self.random_suffix}"


def format_date(now: datetime) -> str:
    """Format a date as YYYYMMDD"""
    return f"{now.year:04d}{now.month:02d}{now.day:02d}"


def generate(platform_tag: str,
             now: datetime,
             rng: Optional[random.Random] = None,
             product: str = "node") -> BuildIdentifier:
    """
    Generate a new build identifier

    Args:
        platform_tag: Host platform tag, e.g. "linux-x64"
        now: Timestamp supplying the date component
        rng: Random source (default: system entropy)
        product: Product name embedded in the identifier

    Returns:
        BuildIdentifier instance
    """
    rng = rng or random.SystemRandom()
    suffix = rng.randint(0, RANDOM_ID_MAX)
    return BuildIdentifier(
        platform_tag=platform_tag,
        date=format_date(now),
        random_suffix=str(suffix),
        product=product,
    )


def render_source(build_id: BuildIdentifier,
                  namespace: str = "node",
                  symbol: str = "gBuildId") -> str:
    """Render the C++ definition embedding the build ID"""
    return SOURCE_TEMPLATE.format(namespace=namespace, symbol=symbol, build_id=build_id)


def inject(build_id: BuildIdentifier,
           target_path: Path,
           namespace: str = "node",
           symbol: str = "gBuildId") -> Path:
    """
    Write the build ID source file, replacing any previous content

    Raises OSError if the file cannot be written. Parent directories
    are not created.

    Args:
        build_id: Identifier to embed
        target_path: Source file to write
        namespace: C++ namespace of the definition
        symbol: Name of the char array

    Returns:
        Path that was written
    """
    target_path = Path(target_path)
    target_path.write_text(render_source(build_id, namespace, symbol), encoding="utf-8")
    return target_path


__all__ = ["BuildIdentifier", "generate", "inject", "render_source", "format_date"]
