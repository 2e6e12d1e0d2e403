from __future__ import annotations

"""Rate provider abstraction.

A provider returns a whole table in one call; the cache layer owns
normalisation, fallback and scheduling.
"""
from abc import ABC, abstractmethod
from typing import Mapping


class RateProvider(ABC):
    #: label recorded on tables produced by this provider
    source: str = "remote"

    @abstractmethod
    def fetch_rates(self) -> Mapping[str, object]:
        """Return currency -> units per 1 unit of the base currency."""
        raise NotImplementedError
