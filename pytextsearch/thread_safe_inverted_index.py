from .inverted_index import InvertedIndex, SearchResult
from .read_write_lock import ReadWriteLock


class ThreadSafeInvertedIndex(object):
    """Wraps an InvertedIndex so every public operation holds the lock.

    Reads share the read lock, `add_entry` and `add_all` take the write lock.
    """

    def __init__(self, index: InvertedIndex = None):
        self.index = index if index is not None else InvertedIndex()
        self.lock = ReadWriteLock()

    def _read(self, method, *args):
        with self.lock.read_lock():
            return method(*args)

    def _write(self, method, *args):
        with self.lock.write_lock():
            return method(*args)

    def add_entry(self, term: str, location: str, position: int) -> bool:
        return self._write(self.index.add_entry, term, location, position)

    def add_entries(self, terms, location: str, start: int = 1) -> int:
        return self._write(self.index.add_entries, list(terms), location, start)

    def add_all(self, other):
        if other is self or other is self.index:
            raise ValueError("cannot merge an index into itself")
        if isinstance(other, ThreadSafeInvertedIndex):
            # never hold both locks, so opposite merges cannot deadlock
            snapshot = other._read(other.index.copy)
            self._write(self.index.add_all, snapshot)
        else:
            self._write(self.index.add_all, other)

    def copy(self) -> InvertedIndex:
        return self._read(self.index.copy)

    def contains(self, term: str, location: str = None, position: int = None) -> bool:
        return self._read(self.index.contains, term, location, position)

    def __contains__(self, term):
        return self._read(self.index.__contains__, term)

    def __len__(self):
        return self._read(self.index.__len__)

    def num_terms(self) -> int:
        return self._read(self.index.num_terms)

    def terms(self) -> list[str]:
        return self._read(self.index.terms)

    def locations(self, term: str = None) -> list[str]:
        return self._read(self.index.locations, term)

    def positions(self, term: str, location: str) -> list[int]:
        return self._read(self.index.positions, term, location)

    def word_count(self, location: str) -> int:
        return self._read(self.index.word_count, location)

    def word_counts(self) -> dict[str, int]:
        return self._read(self.index.word_counts)

    def to_dict(self) -> dict[str, dict[str, list[int]]]:
        return self._read(self.index.to_dict)

    def search(self, query, exact: bool) -> list[SearchResult]:
        return self._read(self.index.search, query, exact)

    def exact_search(self, query) -> list[SearchResult]:
        return self._read(self.index.exact_search, query)

    def partial_search(self, query) -> list[SearchResult]:
        return self._read(self.index.partial_search, query)

    def prefix_terms(self, prefix: str) -> list[str]:
        return self._read(lambda: list(self.index.prefix_terms(prefix)))

    def write_index(self, path):
        self._read(self.index.write_index, path)

    def write_counts(self, path):
        self._read(self.index.write_counts, path)

    def __str__(self):
        return self._read(self.index.__str__)
