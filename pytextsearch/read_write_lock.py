import logging
import threading

logger = logging.getLogger(__name__)


class ConcurrentModificationError(RuntimeError):
    pass


class SimpleLock(object):

    def lock(self):
        raise NotImplementedError()

    def unlock(self):
        raise NotImplementedError()

    def __enter__(self):
        self.lock()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.unlock()


class ReadWriteLock(object):
    """Any number of readers or a single writer.

    Only the thread that acquired the write lock may release it. There is no
    fairness: a steady stream of readers can keep a writer waiting forever.
    """

    def __init__(self):
        self.condition = threading.Condition()
        self.readers = 0
        self.writers = 0
        self.writer_ident = None
        self._read_lock = ReadLock(self)
        self._write_lock = WriteLock(self)

    def read_lock(self) -> SimpleLock:
        return self._read_lock

    def write_lock(self) -> SimpleLock:
        return self._write_lock

    def is_write_owner(self) -> bool:
        with self.condition:
            return self.writers > 0 and self.writer_ident == threading.get_ident()


class ReadLock(SimpleLock):

    def __init__(self, parent: ReadWriteLock):
        self.parent = parent

    def lock(self):
        parent = self.parent
        with parent.condition:
            while parent.writers > 0:
                parent.condition.wait()
            parent.readers += 1

    def unlock(self):
        parent = self.parent
        with parent.condition:
            if parent.readers < 1:
                logger.critical("read unlock without a matching lock in %s", threading.current_thread().name)
                raise ConcurrentModificationError("read lock is not held")
            parent.readers -= 1
            parent.condition.notify_all()


class WriteLock(SimpleLock):

    def __init__(self, parent: ReadWriteLock):
        self.parent = parent

    def lock(self):
        parent = self.parent
        with parent.condition:
            while parent.writers > 0 or parent.readers > 0:
                parent.condition.wait()
            parent.writer_ident = threading.get_ident()
            parent.writers += 1
            logger.debug("write lock acquired by %s", threading.current_thread().name)

    def unlock(self):
        parent = self.parent
        with parent.condition:
            if parent.writers < 1 or parent.writer_ident != threading.get_ident():
                logger.critical("write unlock by %s, which does not hold the write lock",
                                threading.current_thread().name)
                raise ConcurrentModificationError("write lock is not held by the current thread")
            parent.writer_ident = None
            parent.writers -= 1
            logger.debug("write lock released by %s", threading.current_thread().name)
            parent.condition.notify_all()
