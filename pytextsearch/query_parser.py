import logging
import threading

from .json_writer import write_results
from .tokenize import new_stemmer, unique_stems

logger = logging.getLogger(__name__)


def query_key(query) -> str:
    return ' '.join(sorted(query))


class QueryParser(object):
    """Runs each distinct query line against an index and keeps the results.

    With a work queue every line is searched as its own task, so the index
    should be a ThreadSafeInvertedIndex.
    """

    def __init__(self, index, work_queue=None):
        self.index = index
        self.work_queue = work_queue
        self.query_results: dict[str, list] = dict()
        self.lock = threading.Lock()
        self.local = threading.local()

    def _stemmer(self):
        # nltk stemmers are not shared between threads
        stemmer = getattr(self.local, 'stemmer', None)
        if stemmer is None:
            stemmer = self.local.stemmer = new_stemmer()
        return stemmer

    def parse_query(self, line: str, exact: bool) -> bool:
        """Search one query line. Returns False for empty or repeated queries."""
        query = unique_stems(line, self._stemmer())
        if not query:
            return False
        key = query_key(query)
        with self.lock:
            if key in self.query_results:
                return False
            # reserve the key so another thread does not search it again
            self.query_results[key] = None
        results = self.index.search(query, exact)
        with self.lock:
            self.query_results[key] = results
        return True

    def parse_queries(self, path, exact: bool):
        if self.work_queue is None:
            with open(path, 'r', encoding='utf-8') as f:
                for line in f:
                    self.parse_query(line, exact)
            return
        try:
            with open(path, 'r', encoding='utf-8') as f:
                for line in f:
                    self.work_queue.execute(QueryTask(self, line, exact))
        finally:
            self.work_queue.finish()

    def queries(self) -> list[str]:
        with self.lock:
            return sorted(self.query_results)

    def results(self) -> dict[str, list]:
        with self.lock:
            return {
                key: self.query_results[key]
                for key in sorted(self.query_results)
                if self.query_results[key] is not None
            }

    def __len__(self):
        with self.lock:
            return len(self.query_results)

    def write_results(self, path):
        write_results(self.results(), path)


class QueryTask(object):

    def __init__(self, parser: QueryParser, line: str, exact: bool):
        self.parser = parser
        self.line = line
        self.exact = exact

    def __call__(self):
        self.parser.parse_query(self.line, self.exact)
