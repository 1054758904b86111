"""Channel to template relation sets.

A channel links to many hook templates and many thumbnail templates. Each
link set is an unordered collection of template ids without duplicates.
Mutations only touch the in-memory draft; they reach the REST service when
the owning channel is submitted.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any


class RelationSet:
    """Set of foreign-key ids with O(1) add, remove and membership.

    Backed by a dict so ``to_list`` returns ids in the order they were
    first added, which keeps payloads stable between submissions.

    Example:
        >>> hooks = RelationSet("hook template")
        >>> hooks.add(5)
        >>> hooks.add(5)
        >>> hooks.to_list()
        [5]
    """

    def __init__(self, target: str, ids: Iterable[int] = ()) -> None:
        """Initialize the set.

        Args:
            target: Name of the related entity (for error messages)
            ids: Initial ids; repeats collapse into one entry
        """
        self.target = target
        self._ids: dict[int, None] = {}
        for relation_id in ids:
            self.add(relation_id)

    def _check(self, relation_id: Any) -> int:
        if isinstance(relation_id, bool) or not isinstance(relation_id, int):
            raise TypeError(f"{self.target} id must be an int, got {type(relation_id).__name__}")
        if relation_id <= 0:
            raise ValueError(f"{self.target} id must be positive, got {relation_id}")
        return relation_id

    def add(self, relation_id: int) -> None:
        self._ids[self._check(relation_id)] = None

    def remove(self, relation_id: int) -> None:
        """Remove an id; removing an absent id is a no-op."""
        self._ids.pop(relation_id, None)

    def contains(self, relation_id: int) -> bool:
        return relation_id in self._ids

    def replace(self, ids: Iterable[int]) -> None:
        """Replace the whole selection (multi-select submit)."""
        checked = [self._check(relation_id) for relation_id in ids]
        self._ids = dict.fromkeys(checked)

    def clear(self) -> None:
        self._ids.clear()

    def to_list(self) -> list[int]:
        return list(self._ids)

    def __contains__(self, relation_id: object) -> bool:
        return relation_id in self._ids

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"RelationSet({self.target!r}, {self.to_list()!r})"


class ChannelRelations:
    """The hook and thumbnail template selections of one channel draft."""

    def __init__(
        self,
        hook_ids: Iterable[int] = (),
        thumbnail_ids: Iterable[int] = (),
    ) -> None:
        self.hooks = RelationSet("hook template", hook_ids)
        self.thumbnails = RelationSet("thumbnail template", thumbnail_ids)

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> "ChannelRelations":
        """Load selections from channel values (``hook_ids`` / ``thumbnail_ids``).

        Non-list values are treated as empty selections, and ids that are not
        positive ints are skipped; static validation reports them on the
        raw values.
        """
        return cls(
            hook_ids=_valid_ids(values.get("hook_ids")),
            thumbnail_ids=_valid_ids(values.get("thumbnail_ids")),
        )

    def to_values(self) -> dict[str, list[int]]:
        return {"hook_ids": self.hooks.to_list(), "thumbnail_ids": self.thumbnails.to_list()}


def _valid_ids(raw: Any) -> list[int]:
    if not isinstance(raw, list):
        return []
    return [
        relation_id
        for relation_id in raw
        if isinstance(relation_id, int) and not isinstance(relation_id, bool) and relation_id > 0
    ]


__all__ = ["RelationSet", "ChannelRelations"]
