import logging
import threading
from collections import deque

logger = logging.getLogger(__name__)

DEFAULT_NUM_THREADS = 5


class WorkQueue(object):
    """A fixed pool of worker threads taking tasks from one FIFO queue.

    `finish()` waits until every task handed to `execute()` has run, and can
    be called again for the next batch. `shutdown()` stops the workers once
    their current task is done; tasks still queued are dropped.
    """

    def __init__(self, num_threads: int = DEFAULT_NUM_THREADS):
        if num_threads < 1:
            raise ValueError(f"num_threads must be positive: {num_threads}")
        self.queue = deque()
        self.queue_condition = threading.Condition()
        self.pending = 0
        self.pending_condition = threading.Condition()
        self.shutdown_requested = False
        self.workers = [
            threading.Thread(target=self._run, name=f"WorkQueue-worker-{i}", daemon=True)
            for i in range(num_threads)
        ]
        for worker in self.workers:
            worker.start()

    def execute(self, task):
        with self.queue_condition:
            if self.shutdown_requested:
                raise RuntimeError("cannot execute tasks after shutdown")
            self._increment_pending()
            self.queue.append(task)
            self.queue_condition.notify()
        logger.debug("task added to work queue, %d pending", self.pending)

    def finish(self):
        with self.pending_condition:
            while self.pending > 0:
                self.pending_condition.wait()

    def shutdown(self):
        with self.queue_condition:
            self.shutdown_requested = True
            dropped = len(self.queue)
            self.queue.clear()
            self.queue_condition.notify_all()
        if dropped:
            logger.debug("shutdown dropped %d queued tasks", dropped)
            self._decrement_pending(dropped)

    def join(self, timeout=None):
        for worker in self.workers:
            worker.join(timeout)

    def size(self) -> int:
        return len(self.workers)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()

    def _increment_pending(self):
        with self.pending_condition:
            self.pending += 1

    def _decrement_pending(self, n=1):
        with self.pending_condition:
            assert self.pending >= n
            self.pending -= n
            if self.pending == 0:
                self.pending_condition.notify_all()

    def _run(self):
        name = threading.current_thread().name
        while True:
            with self.queue_condition:
                while not self.queue and not self.shutdown_requested:
                    self.queue_condition.wait()
                if self.shutdown_requested:
                    break
                task = self.queue.popleft()
            try:
                logger.debug("%s starting task, %d pending", name, self.pending)
                task()
            except Exception:
                logger.exception("%s: task raised an exception", name)
            finally:
                self._decrement_pending()
                logger.debug("%s finished task, %d pending", name, self.pending)
