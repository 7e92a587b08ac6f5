import abc
from collections.abc import Iterable

from stwindow.records import PointRecord
from stwindow.window import SpatioTemporalWindow


class AbstractDBHandler(abc.ABC):
    """
    A connection to a store holding one point table.

    Handlers are context managers: the connection is opened in the
    constructor and released by ``close()`` on leaving the ``with`` block.
    """

    @abc.abstractmethod
    def __init__(self):
        raise NotImplementedError

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @abc.abstractmethod
    def create_point_table(self, replace: bool = False) -> None:
        """Create the point table, dropping an existing one if replace is set."""
        raise NotImplementedError

    @abc.abstractmethod
    def load_records(self, records: Iterable[PointRecord]) -> list[PointRecord]:
        """Insert records and return them with their store-assigned ids, in input order."""
        raise NotImplementedError

    @abc.abstractmethod
    def create_indexes(self) -> None:
        """Build the spatial and temporal indexes."""
        raise NotImplementedError

    @abc.abstractmethod
    def query_window(self, window: SpatioTemporalWindow) -> list[PointRecord]:
        """Evaluate the window in the store and return normalised records."""
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_all(self) -> list[PointRecord]:
        """Return every stored record ordered by id."""
        raise NotImplementedError

    @abc.abstractmethod
    def close(self):
        pass
