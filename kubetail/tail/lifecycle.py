"""Teardown of every child process spawned during a run"""
import atexit
import signal
import subprocess
import threading
from typing import List

from ..core.logger import Logger

TERMINATE_GRACE_SECONDS = 2


class LifecycleManager:
    """Own the child processes of a run and terminate them exactly once

    Usable as a context manager; install() additionally hooks interpreter
    exit and termination signals.
    """

    def __init__(self, grace: float = TERMINATE_GRACE_SECONDS):
        self.grace = grace
        self.processes: List[subprocess.Popen] = []
        self._lock = threading.RLock()
        self._stopping = threading.Event()
        self._terminated: set[int] = set()
        self._previous_handlers = {}

    @property
    def stopping(self) -> bool:
        return self._stopping.is_set()

    def track(self, process: subprocess.Popen) -> subprocess.Popen:
        with self._lock:
            self.processes.append(process)
        # A child spawned after teardown started would be orphaned
        if self.stopping:
            self._terminate(process)
        return process

    def install(self):
        atexit.register(self.teardown)
        for name in ("SIGTERM", "SIGHUP"):
            signum = getattr(signal, name, None)
            if signum is None:
                continue
            try:
                self._previous_handlers[signum] = signal.signal(signum, self._on_signal)
            except ValueError:
                # Not the main thread
                Logger.debug(f"Cannot install {name} handler outside the main thread")
        return self

    def uninstall(self):
        atexit.unregister(self.teardown)
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler)
        self._previous_handlers.clear()

    def _on_signal(self, signum, frame):
        Logger.verbose_log(f"Received signal {signum}, stopping")
        self.teardown()

    def teardown(self):
        with self._lock:
            if self._stopping.is_set():
                return
            self._stopping.set()
            processes = list(self.processes)

        Logger.debug(f"Terminating {len(processes)} child process(es)")
        for process in processes:
            self._terminate(process)

    def _terminate(self, process: subprocess.Popen):
        with self._lock:
            if id(process) in self._terminated:
                return
            self._terminated.add(id(process))

        if process.poll() is None:
            try:
                process.terminate()
                process.wait(timeout=self.grace)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()
            except ProcessLookupError:
                pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.teardown()
        self.uninstall()
        return False
