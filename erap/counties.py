from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from .rules import DEFAULT_COUNTY_MAP


class CountyResolver:
    """Read-only lookup of (state, locality) -> canonical county name."""

    def __init__(self, table: Mapping[str, Mapping[str, str]]):
        self._table = MappingProxyType(
            {state: MappingProxyType(dict(localities)) for state, localities in table.items()}
        )

    @classmethod
    def from_path(cls, path: str | Path) -> "CountyResolver":
        path = Path(path)
        with path.open("r", encoding="utf-8") as fh:
            return cls(json.load(fh))

    def resolve(self, state: Optional[str], locality: Optional[str]) -> Optional[str]:
        if state is None or locality is None:
            return None
        return self._table.get(state, {}).get(locality)

    def __len__(self) -> int:
        return sum(len(localities) for localities in self._table.values())


@lru_cache(maxsize=1)
def load_default_counties() -> CountyResolver:
    """The packaged county map, loaded once per process."""
    return CountyResolver.from_path(DEFAULT_COUNTY_MAP)
