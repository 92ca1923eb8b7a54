"""Named package indexes."""

from collections.abc import Iterable
from dataclasses import dataclass

import httpx

from index_keyring.exceptions import IndexNotFoundError

from .settings import IndexConfig


@dataclass(frozen=True)
class Index:
    """A package index addressed by name."""

    name: str
    url: httpx.URL

    @classmethod
    def from_config(cls, config: IndexConfig) -> "Index":
        return cls(name=config.name, url=httpx.URL(config.url))


def find_index(indexes: Iterable[Index], name: str) -> Index:
    """Return the index called ``name``.

    Raises:
        IndexNotFoundError: If no index carries that name
    """
    for index in indexes:
        if index.name == name:
            return index
    raise IndexNotFoundError(name)
