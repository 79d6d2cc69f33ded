"""Filesystem storage for YAML record sources.

Record sources are organized by group under a base directory::

    base_dir/
      projectiles/
        hornady.yaml
        sierra.yaml

Each file maps record identifiers to raw record mappings.
"""

import functools
import logging
from pathlib import Path
from typing import Any

import yaml

from ballistics.config import BallisticsConfig
from ballistics.exceptions import LoadError
from ballistics.records import RecordLocator

logger = logging.getLogger(__name__)


class RecordStorage:
    """YAML discover/load filesystem layer.

    Usage::

        storage = RecordStorage("data")
        registry = storage.discover()   # {"projectiles": ["hornady", ...]}
        records = storage.load("projectiles", "hornady")
    """

    def __init__(self, base_dir: str | Path, suffix: str = ".yaml") -> None:
        self.base_dir = Path(base_dir)
        self.suffix = suffix

    def discover(self) -> dict[str, list[str]]:
        """Map each group directory to its sorted source names.

        Directories without any record file are skipped.
        """
        registry: dict[str, list[str]] = {}
        if not self.base_dir.is_dir():
            logger.warning("Record directory %s does not exist", self.base_dir)
            return registry

        for group_dir in sorted(p for p in self.base_dir.iterdir() if p.is_dir()):
            names = sorted(
                f.name[: -len(self.suffix)]
                for f in group_dir.iterdir()
                if f.is_file() and f.name.endswith(self.suffix)
            )
            if names:
                registry[group_dir.name] = names
        return registry

    def path_for(self, group: str, source: str) -> Path:
        """Return the file path for a source within a group."""
        return self.base_dir / group / f"{source}{self.suffix}"

    def load(self, group: str, source: str) -> Any:
        """Parse one source file.

        The file is read as bytes so PyYAML detects the encoding and
        reports undecodable input as a YAMLError.

        Raises:
            LoadError: If the file is missing, unreadable, or is not
                valid YAML.
        """
        path = self.path_for(group, source)
        try:
            with path.open("rb") as f:
                return yaml.safe_load(f)
        except FileNotFoundError:
            raise LoadError(f"record file not found: {path}") from None
        except OSError as exc:
            raise LoadError(f"cannot read {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise LoadError(f"invalid YAML in {path}: {exc}") from exc

    def locator(self, *, warn_on_collision: bool = True) -> RecordLocator:
        """Build a RecordLocator over a snapshot of the current registry."""
        return RecordLocator(
            self.discover(), self.load, warn_on_collision=warn_on_collision
        )


def locator_from_config(config: BallisticsConfig) -> RecordLocator:
    """Build a RecordLocator for ``config.data_dir``."""
    storage = RecordStorage(config.data_dir, suffix=config.record_suffix)
    return storage.locator(warn_on_collision=config.warn_on_collision)


@functools.lru_cache(maxsize=None)
def built_in_locator() -> RecordLocator:
    """Return the process-wide locator over the packaged record files."""
    return locator_from_config(BallisticsConfig())
