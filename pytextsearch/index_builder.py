import logging

from .inverted_index import InvertedIndex
from .text_file_finder import find
from .tokenize import new_stemmer, stems

logger = logging.getLogger(__name__)


def add_file(path, index, stemmer=None) -> int:
    """Add every word of a text file to the index, numbering positions from 1.

    Returns the number of words read.
    """
    if stemmer is None:
        stemmer = new_stemmer()
    location = str(path)
    position = 0
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            for term in stems(line, stemmer):
                position += 1
                index.add_entry(term, location, position)
    return position


def build_index(index, path) -> int:
    """Index every text file under `path` on the calling thread.

    Files that cannot be read are logged and skipped. Returns the number of
    files indexed.
    """
    stemmer = new_stemmer()
    indexed = 0
    for file in find(path):
        try:
            add_file(file, index, stemmer)
            indexed += 1
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("unable to index %s: %s", file, e)
    return indexed


class IndexFileTask(object):

    def __init__(self, path, index):
        self.path = path
        self.index = index

    def __call__(self):
        logger.info("indexing %s started", self.path)
        try:
            local = InvertedIndex()
            add_file(self.path, local)
            self.index.add_all(local)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("unable to index %s: %s", self.path, e)
        finally:
            logger.info("indexing %s ended", self.path)


def build_index_concurrent(index, path, work_queue) -> int:
    """Index every text file under `path`, one work queue task per file.

    Each task builds its own index and merges it into `index`, which should
    be a ThreadSafeInvertedIndex. Returns once every merge is done, with the
    number of files handed to the queue.
    """
    files = find(path)
    for file in files:
        work_queue.execute(IndexFileTask(file, index))
    work_queue.finish()
    return len(files)
