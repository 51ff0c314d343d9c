from bisect import bisect_left, insort

from .json_writer import index_to_string, write_counts, write_index


class SearchResult(object):

    def __init__(self, where: str):
        self.where = where
        self.count = 0
        self.score = 0.0

    def update(self, matches: int, word_count: int):
        self.count += matches
        self.score = self.count / word_count

    def sort_key(self):
        return -self.score, -self.count, self.where.lower()

    def __lt__(self, other):
        return self.sort_key() < other.sort_key()

    def __eq__(self, other):
        if not isinstance(other, SearchResult):
            return NotImplemented
        return (self.where, self.count, self.score) == (other.where, other.count, other.score)

    def __repr__(self):
        return f"SearchResult(where={self.where!r}, count={self.count}, score={self.score:.8f})"


class InvertedIndex(object):
    """Maps each term to the locations it appears in, and each location to
    the 1-based positions of the term there.

    Terms are also kept in a sorted list so that partial search can scan
    the range of terms sharing a prefix.
    """

    def __init__(self):
        self.data: dict[str, dict[str, set[int]]] = dict()
        self.sorted_terms: list[str] = []
        self.counts: dict[str, int] = dict()

    def add_entry(self, term: str, location: str, position: int) -> bool:
        if term in self.data:
            locations = self.data[term]
        else:
            locations = self.data[term] = dict()
            insort(self.sorted_terms, term)
        if location in locations:
            positions = locations[location]
        else:
            positions = locations[location] = set()
        if position in positions:
            return False
        positions.add(position)
        self.counts[location] = self.counts.get(location, 0) + 1
        return True

    def add_entries(self, terms, location: str, start: int = 1) -> int:
        position = start
        for term in terms:
            self.add_entry(term, location, position)
            position += 1
        return position - start

    def contains(self, term: str, location: str = None, position: int = None) -> bool:
        locations = self.data.get(term)
        if locations is None:
            return False
        if location is None:
            return True
        positions = locations.get(location)
        if positions is None:
            return False
        if position is None:
            return True
        return position in positions

    def __contains__(self, term):
        return term in self.data

    def __len__(self):
        return len(self.data)

    def num_terms(self) -> int:
        return len(self.data)

    def terms(self) -> list[str]:
        return list(self.sorted_terms)

    def locations(self, term: str = None) -> list[str]:
        if term is None:
            return sorted(self.counts)
        return sorted(self.data.get(term, ()))

    def positions(self, term: str, location: str) -> list[int]:
        return sorted(self.data.get(term, {}).get(location, ()))

    def word_count(self, location: str) -> int:
        return self.counts.get(location, 0)

    def word_counts(self) -> dict[str, int]:
        return {location: self.counts[location] for location in sorted(self.counts)}

    def to_dict(self) -> dict[str, dict[str, list[int]]]:
        return {
            term: {
                location: sorted(positions)
                for location, positions in sorted(self.data[term].items())
            }
            for term in self.sorted_terms
        }

    def search(self, query, exact: bool) -> list[SearchResult]:
        if exact:
            return self.exact_search(query)
        return self.partial_search(query)

    def exact_search(self, query) -> list[SearchResult]:
        results = []
        lookup = {}
        for term in query:
            if term in self.data:
                self._score(lookup, results, term)
        results.sort()
        return results

    def partial_search(self, query) -> list[SearchResult]:
        results = []
        lookup = {}
        for prefix in query:
            for term in self.prefix_terms(prefix):
                self._score(lookup, results, term)
        results.sort()
        return results

    def prefix_terms(self, prefix: str):
        i = bisect_left(self.sorted_terms, prefix)
        while i < len(self.sorted_terms):
            term = self.sorted_terms[i]
            if not term.startswith(prefix):
                break
            yield term
            i += 1

    def _score(self, lookup: dict, results: list, term: str):
        for location, positions in self.data[term].items():
            result = lookup.get(location)
            if result is None:
                result = lookup[location] = SearchResult(location)
                results.append(result)
            result.update(len(positions), self.counts[location])

    def copy(self) -> 'InvertedIndex':
        other = InvertedIndex()
        other.data = {
            term: {location: set(positions) for location, positions in locations.items()}
            for term, locations in self.data.items()
        }
        other.sorted_terms = list(self.sorted_terms)
        other.counts = dict(self.counts)
        return other

    def add_all(self, other: 'InvertedIndex'):
        """Merge another index into this one.

        Word counts of `other` are added unconditionally, so merging the same
        index twice counts its words twice. Callers merge each local index
        exactly once.
        """
        new_terms = []
        for term, other_locations in other.data.items():
            locations = self.data.get(term)
            if locations is None:
                self.data[term] = other_locations
                new_terms.append(term)
                continue
            for location, other_positions in other_locations.items():
                if location in locations:
                    locations[location].update(other_positions)
                else:
                    locations[location] = other_positions
        if new_terms:
            # both runs are sorted, so this is a linear merge
            self.sorted_terms.extend(sorted(new_terms))
            self.sorted_terms.sort()
        for location, count in other.counts.items():
            self.counts[location] = self.counts.get(location, 0) + count

    def write_index(self, path):
        write_index(self.to_dict(), path)

    def write_counts(self, path):
        write_counts(self.word_counts(), path)

    def __str__(self):
        return index_to_string(self.to_dict())
