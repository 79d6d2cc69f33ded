"""Record locator: resolves record groups and sources to raw records.

A record group (e.g. ``"projectiles"``) names a set of like-structured
sources. Each source parses to a mapping of identifier -> raw record
mapping. The locator knows nothing about file formats; it is handed a
registry of available source names per group and a loader callable.

Usage::

    locator = RecordLocator(
        {"projectiles": ["hornady", "sierra"]},
        loader=storage.load,
    )
    raw = locator.find_raw("projectiles", id="hornady_168_eld_m")
    entities = locator.find(
        Projectile.model_validate, "projectiles", predicate=lambda p: p.g7
    )
"""

import logging
from typing import Any, Callable, Mapping, Sequence, TypeVar

from ballistics.exceptions import LoadError, NotFound

logger = logging.getLogger(__name__)

RawRecord = Mapping[str, Any]
Loader = Callable[[str, str], Any]

T = TypeVar("T")


class RecordLocator:
    """Resolve raw records from a registry of group -> source names.

    The registry is read-only after construction; lookups never modify it.
    """

    def __init__(
        self,
        registry: Mapping[str, Sequence[str]],
        loader: Loader,
        *,
        warn_on_collision: bool = True,
    ) -> None:
        self._registry = {group: tuple(names) for group, names in registry.items()}
        self._loader = loader
        self.warn_on_collision = warn_on_collision

    @property
    def groups(self) -> list[str]:
        """Known record group names."""
        return sorted(self._registry)

    def sources(self, group: str) -> tuple[str, ...]:
        """Return the source names registered for ``group``.

        Raises:
            LoadError: If the group is unknown.
        """
        try:
            return self._registry[group]
        except KeyError:
            raise LoadError(f"unknown record group: {group}") from None

    def load(self, group: str, source: str) -> dict[str, RawRecord]:
        """Load one source of ``group`` as an identifier-keyed mapping.

        Identifiers are stringified, so a YAML key like ``308`` becomes
        ``"308"``.

        Raises:
            LoadError: If the group or source is unknown, or the source
                does not contain a mapping of identifier -> mapping.
        """
        if source not in self.sources(group):
            raise LoadError(f"unknown source {source!r} in group {group!r}")

        data = self._loader(group, source)
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise LoadError(
                f"{group}/{source} is not a mapping of records "
                f"(got {type(data).__name__})"
            )
        for record_id, raw in data.items():
            if not isinstance(raw, Mapping):
                raise LoadError(
                    f"record {record_id!r} in {group}/{source} is not a mapping"
                )

        logger.debug("Loaded %d records from %s/%s", len(data), group, source)
        return {str(record_id): raw for record_id, raw in data.items()}

    def candidates(
        self, group: str, file: str | None = None
    ) -> dict[str, RawRecord]:
        """Return raw records for one source, or all sources merged.

        When merging, a later source overwrites an earlier one on
        identifier collision (last wins). Collisions are logged.
        """
        if file is not None:
            return self.load(group, file)

        merged: dict[str, RawRecord] = {}
        origin: dict[str, str] = {}
        for source in self.sources(group):
            for record_id, raw in self.load(group, source).items():
                if record_id in merged and self.warn_on_collision:
                    logger.warning(
                        "Record %r in %s/%s overrides the one from %s/%s",
                        record_id, group, source, group, origin[record_id],
                    )
                merged[record_id] = raw
                origin[record_id] = source
        return merged

    def find_raw(
        self,
        group: str,
        file: str | None = None,
        id: str | None = None,
    ) -> RawRecord | dict[str, RawRecord]:
        """Return the raw record for ``id``, or every candidate record.

        Raises:
            LoadError: For an unknown group or file.
            NotFound: If ``id`` is given but absent.
        """
        records = self.candidates(group, file)
        if id is None:
            return records
        try:
            return records[id]
        except KeyError:
            where = f"{group}/{file}" if file else group
            raise NotFound(f"no record {id!r} in {where}", value=id) from None

    def find(
        self,
        factory: Callable[[RawRecord], T],
        group: str,
        file: str | None = None,
        id: str | None = None,
        predicate: Callable[[T], Any] | None = None,
    ) -> T | dict[str, T]:
        """Construct entities from raw records.

        Args:
            factory: Builds one entity from a raw record (e.g. ``Projectile.model_validate``).
            group: Record group name.
            file: Restrict to a single source.
            id: Return only this entity.
            predicate: Keep only entities for which this returns truthy.
                Ignored when ``id`` is given.

        Construction errors are not caught: one malformed record fails
        the whole batch.
        """
        if id is not None:
            return factory(self.find_raw(group, file, id))

        entities: dict[str, T] = {}
        for record_id, raw in self.candidates(group, file).items():
            entity = factory(raw)
            if predicate is None or predicate(entity):
                entities[record_id] = entity
        return entities
