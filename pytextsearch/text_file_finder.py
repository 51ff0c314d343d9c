import errno
import logging
import os

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = ('.txt', '.text')


def is_text_file(path) -> bool:
    return os.path.basename(str(path)).lower().endswith(TEXT_EXTENSIONS) and os.path.isfile(path)


def find(start) -> list[str]:
    """Text files under `start`, or `start` itself if it is a text file.

    Raises FileNotFoundError if `start` does not exist.
    """
    start = str(start)
    if not os.path.exists(start):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), start)
    if not os.path.isdir(start):
        return [start] if is_text_file(start) else []

    def on_error(e: OSError):
        logger.warning("unable to list %s: %s", e.filename, e.strerror)

    files = []
    # real paths of the directories from start down to each walked directory
    ancestors = {start: frozenset()}
    for dirpath, dirnames, filenames in os.walk(start, onerror=on_error, followlinks=True):
        real = os.path.realpath(dirpath)
        chain = ancestors.pop(dirpath, frozenset())
        if real in chain:
            logger.warning("skipping symlink loop at %s", dirpath)
            dirnames[:] = []
            continue
        chain = chain | {real}
        dirnames.sort()
        for dirname in dirnames:
            ancestors[os.path.join(dirpath, dirname)] = chain
        for filename in sorted(filenames):
            path = os.path.join(dirpath, filename)
            if is_text_file(path):
                files.append(path)
    return files
