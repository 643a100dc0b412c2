"""
Item parameter table and dichotomy index.

The table is a versioned configuration asset: 93 calibrated 2PL items, each
scoring exactly one dichotomy. It is loaded in full once and never mutated;
the dichotomy index is derived from it at construction time.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ValidationError

from scoring_service.core.data_models import Dichotomy, Item
from scoring_service.core.errors import ItemTableError, UnknownItemError
from scoring_service.core.paths import DATA_DIR

logger = logging.getLogger(__name__)

DEFAULT_ITEM_TABLE_PATH = DATA_DIR / "item_parameters.json"


class ItemTableDocument(BaseModel):
    """On-disk representation of the item parameter table."""

    version: str
    items: list[Item]


class DichotomyIndex:
    """
    Read-only mapping from dichotomy to the ordered ids of its items.

    A dichotomy with no items maps to an empty tuple.
    """

    def __init__(self, items: Iterable[Item]) -> None:
        grouped: dict[Dichotomy, list[int]] = {d: [] for d in Dichotomy}
        for item in items:
            grouped[item.dichotomy].append(item.item_id)
        self._mapping: Mapping[Dichotomy, tuple[int, ...]] = MappingProxyType(
            {d: tuple(sorted(ids)) for d, ids in grouped.items()}
        )

    def items_for(self, dichotomy: Dichotomy | str) -> tuple[int, ...]:
        return self._mapping.get(Dichotomy(dichotomy), ())

    def counts(self) -> dict[Dichotomy, int]:
        return {d: len(ids) for d, ids in self._mapping.items()}

    def __getitem__(self, dichotomy: Dichotomy | str) -> tuple[int, ...]:
        return self.items_for(dichotomy)

    def __iter__(self) -> Iterator[Dichotomy]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)


class ItemParameterTable:
    """
    Immutable catalogue of calibrated items.

    Attributes:
        version: Version tag of the calibration; changing the table changes
            results, so the version travels with every scoring result.
        index: Dichotomy index derived from the items.
    """

    def __init__(self, items: Iterable[Item], version: str) -> None:
        ordered = tuple(sorted(items, key=lambda item: item.item_id))
        ids = [item.item_id for item in ordered]

        if not ordered:
            raise ItemTableError("Item table is empty")
        if len(set(ids)) != len(ids):
            duplicates = sorted({i for i in ids if ids.count(i) > 1})
            raise ItemTableError(f"Duplicate item ids: {duplicates}")
        if ids != list(range(len(ids))):
            raise ItemTableError(
                f"Item ids must be contiguous from 0, got {ids[0]}..{ids[-1]} "
                f"for {len(ids)} items"
            )

        self._items = ordered
        self.version = version
        self.index = DichotomyIndex(ordered)

    @classmethod
    def from_json(
        cls, path: Path, require_all_dichotomies: bool = True
    ) -> "ItemParameterTable":
        """
        Load and validate an item table JSON document.

        Args:
            path: Path to a JSON file of the form
                {"version": "...", "items": [{"item_id", "dichotomy", "a", "b"}, ...]}.
            require_all_dichotomies: Reject tables where a dichotomy has no items.

        Raises:
            ItemTableError: If the file is missing or malformed.
        """
        try:
            text = path.read_text()
        except OSError as e:
            raise ItemTableError(f"Cannot read item table {path}: {e}") from e

        try:
            document = ItemTableDocument.model_validate_json(text)
        except ValidationError as e:
            raise ItemTableError(f"Invalid item table {path}: {e}") from e

        table = cls(document.items, version=document.version)

        if require_all_dichotomies:
            empty = [d.value for d, n in table.index.counts().items() if n == 0]
            if empty:
                raise ItemTableError(f"Dichotomies without items: {empty}")

        logger.info(
            f"Loaded item table v{table.version}: {table.n_items} items "
            f"from {path.name}"
        )
        return table

    @property
    def n_items(self) -> int:
        return len(self._items)

    def parameter_arrays(
        self, item_ids: Iterable[int]
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """(discriminations, difficulties) arrays for the given item ids."""
        items = [self[i] for i in item_ids]
        a = np.array([item.a for item in items], dtype=np.float64)
        b = np.array([item.b for item in items], dtype=np.float64)
        return a, b

    def __getitem__(self, item_id: int) -> Item:
        if not 0 <= item_id < len(self._items):
            raise UnknownItemError(item_id)
        return self._items[item_id]

    def __contains__(self, item_id: object) -> bool:
        return isinstance(item_id, int) and 0 <= item_id < len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


@lru_cache(maxsize=8)
def load_item_table(path: Path | None = None) -> ItemParameterTable:
    """
    Load the item parameter table once per path.

    Args:
        path: Table location. Defaults to the packaged calibration.

    Returns:
        The shared, immutable ItemParameterTable.
    """
    return ItemParameterTable.from_json(path or DEFAULT_ITEM_TABLE_PATH)
