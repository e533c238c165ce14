from abc import ABC, abstractmethod

from signgrid.models import MultiSeries


class SourceError(ValueError):
    pass


class StatusSource(ABC):
    @abstractmethod
    def fetch(self) -> MultiSeries:
        pass
