import argparse
import logging
import os
import sys

from pytextsearch.index_builder import build_index, build_index_concurrent
from pytextsearch.inverted_index import InvertedIndex
from pytextsearch.query_parser import QueryParser
from pytextsearch.thread_safe_inverted_index import ThreadSafeInvertedIndex
from pytextsearch.work_queue import DEFAULT_NUM_THREADS, WorkQueue

logger = logging.getLogger('pytextsearch')

DEFAULT_INDEX_PATH = 'index.json'
DEFAULT_COUNTS_PATH = 'counts.json'
DEFAULT_RESULTS_PATH = 'results.json'

LOG_FORMAT = '%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s'
LOG_LEVEL_ENV = 'PYTEXTSEARCH_LOG_LEVEL'


def arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='pytextsearch', allow_abbrev=False,
                                     description="Build an inverted index of text files and search it.")
    parser.add_argument('-threads', nargs='?', const='', default=None, metavar='N',
                        help=f"index and search with N worker threads (default {DEFAULT_NUM_THREADS})")
    parser.add_argument('-path', nargs='?', const='', default=None,
                        help="text file or directory to index")
    parser.add_argument('-index', nargs='?', const=DEFAULT_INDEX_PATH, default=None, metavar='OUT',
                        help=f"write the index as JSON (default {DEFAULT_INDEX_PATH})")
    parser.add_argument('-counts', nargs='?', const=DEFAULT_COUNTS_PATH, default=None, metavar='OUT',
                        help=f"write word counts as JSON (default {DEFAULT_COUNTS_PATH})")
    parser.add_argument('-query', nargs='?', const='', default=None, metavar='FILE',
                        help="file with one query per line")
    parser.add_argument('-exact', action='store_true',
                        help="match whole words only instead of prefixes")
    parser.add_argument('-results', nargs='?', const=DEFAULT_RESULTS_PATH, default=None, metavar='OUT',
                        help=f"write search results as JSON (default {DEFAULT_RESULTS_PATH})")
    return parser


def num_threads(value) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return DEFAULT_NUM_THREADS
    return n if n > 0 else DEFAULT_NUM_THREADS


def configure_logging():
    level = os.environ.get(LOG_LEVEL_ENV, 'WARNING').upper()
    logging.basicConfig(format=LOG_FORMAT, level=getattr(logging, level, logging.WARNING))


def run(args) -> int:
    work_queue = None
    if args.threads is not None:
        work_queue = WorkQueue(num_threads(args.threads))
        index = ThreadSafeInvertedIndex()
    else:
        index = InvertedIndex()

    try:
        if args.path:
            try:
                if work_queue is not None:
                    build_index_concurrent(index, args.path, work_queue)
                else:
                    build_index(index, args.path)
            except OSError as e:
                logger.warning("unable to build the inverted index from %s: %s", args.path, e)
        else:
            logger.warning("the -path argument is required to build an index")

        if args.index is not None:
            try:
                index.write_index(args.index)
            except OSError as e:
                logger.warning("unable to write the inverted index to %s: %s", args.index, e)

        if args.counts is not None:
            try:
                index.write_counts(args.counts)
            except OSError as e:
                logger.warning("unable to write word counts to %s: %s", args.counts, e)

        query_parser = QueryParser(index, work_queue)
        if args.query:
            try:
                query_parser.parse_queries(args.query, args.exact)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("unable to search for queries in %s: %s", args.query, e)

        if args.results is not None:
            try:
                query_parser.write_results(args.results)
            except OSError as e:
                logger.warning("unable to write search results to %s: %s", args.results, e)
    finally:
        if work_queue is not None:
            work_queue.shutdown()
    return 0


def main(argv=None) -> int:
    configure_logging()
    args = arg_parser().parse_args(argv)
    return run(args)


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
