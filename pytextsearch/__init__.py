from .index_builder import (
    add_file,
    build_index,
    build_index_concurrent,
)
from .inverted_index import InvertedIndex, SearchResult
from .query_parser import QueryParser
from .read_write_lock import ConcurrentModificationError, ReadWriteLock
from .text_file_finder import find
from .thread_safe_inverted_index import ThreadSafeInvertedIndex
from .tokenize import stems, unique_stems
from .work_queue import WorkQueue


VERSION = '0.1.0'
