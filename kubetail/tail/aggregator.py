"""Merge every log stream into one output"""
import sys
import threading
from queue import Queue
from typing import List, Optional, Sequence, TextIO

from ..core.colors import Palette
from ..core.errors import StreamError
from ..core.logger import Logger
from .models import ColorAssignment, StreamHandle


class _EndOfStream:
    """Queued by a reader once its source is exhausted"""

    def __init__(self, handle: StreamHandle, error: Optional[StreamError]):
        self.handle = handle
        self.error = error


class Aggregator:
    """Fan-in of N log streams onto a single sink

    Lines of one source keep their order; lines of different sources are
    written in arrival order.
    """

    def __init__(self, sink: Optional[TextIO] = None, line_buffered: bool = False,
                 palette: Optional[Palette] = None, with_context: bool = False):
        self.sink = sink or sys.stdout
        self.line_buffered = line_buffered
        self.palette = palette or Palette()
        self.with_context = with_context

    def preview(self, assignments: Sequence[ColorAssignment]):
        self.sink.write(f"Will tail {len(assignments)} logs...\n")
        for assignment in assignments:
            name = assignment.container_ref.display_name(self.with_context)
            self.sink.write(self.palette.paint(name, assignment.color_index) + "\n")
        self.sink.flush()

    def stream(self, handles: Sequence[StreamHandle], lifecycle=None) -> List[StreamError]:
        """Write lines from every handle until all of them end"""
        queue: Queue = Queue()
        readers = []
        for handle in handles:
            reader = threading.Thread(
                target=self.read, args=(handle, queue, lifecycle),
                name=f"reader-{handle.label}", daemon=True)
            reader.start()
            readers.append(reader)

        errors: List[StreamError] = []
        active = len(readers)
        while active:
            item = queue.get()
            if isinstance(item, _EndOfStream):
                active -= 1
                if item.error:
                    errors.append(item.error)
                continue
            self.sink.write(item)
            if self.line_buffered:
                self.sink.flush()

        self.sink.flush()
        return errors

    @staticmethod
    def read(handle: StreamHandle, queue: Queue, lifecycle=None):
        error = None
        output = handle.output
        try:
            for line in iter(output.readline, ""):
                queue.put(handle.format_line(line) + "\n")
        except (OSError, ValueError) as e:
            # Pipe closed under us during teardown
            Logger.debug(f"Stopped reading {handle.label}: {e}")
        finally:
            output.close()
            returncode = handle.wait()
            if returncode and not (lifecycle and lifecycle.stopping):
                error = StreamError(handle.label, returncode)
                queue.put(handle.format_line(f"{error}") + "\n")
            queue.put(_EndOfStream(handle, error))
