"""Configuration for locating and loading projectile records."""

from dataclasses import dataclass, field
from pathlib import Path

# Built-in record files ship inside the package
BUILT_IN_DATA_DIR = Path(__file__).parent / "data"


@dataclass
class BallisticsConfig:
    """Configuration for the record storage and locator.

    ``data_dir`` holds one subdirectory per record group, e.g.
    ``data/projectiles/hornady.yaml``.
    """

    data_dir: Path = field(default_factory=lambda: BUILT_IN_DATA_DIR)

    # File suffix of record sources within a group directory
    record_suffix: str = ".yaml"

    # Log a warning when a merged load sees the same id in two sources
    warn_on_collision: bool = True
