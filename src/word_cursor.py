import os
import enum
import logging
from dataclasses import dataclass, field

from cursor_errors import ClosedCursorError, ConfigurationError, ExhaustedError
from line_source import LineSource

logger = logging.getLogger(__name__)

NO_POSITION = -1


class CursorState(enum.Enum):
    PRIMING = "priming"
    BUFFERED = "buffered"
    DRAINED = "drained"
    CLOSED = "closed"


@dataclass
class _CursorRecord:
    source: LineSource
    buffer: list = field(default_factory=list)
    position: int = NO_POSITION
    state: CursorState = CursorState.PRIMING
    source_exhausted: bool = False

    def has_word_in_buffer(self) -> bool:
        return 0 <= self.position < len(self.buffer)


class WordCursor:
    def __init__(self, source, encoding: str = "utf-8"):
        """
        Iterates over a text source word by word, where a word is any run of non-whitespace characters.
        Lines are pulled from the source only when the current line has run out of words,
        so the whole text is never held in memory.

        source can be a LineSource, a file path, or an already open text/binary stream.
        The cursor owns the source from here on and releases it on close().

        Note that a word broken over two lines with a trailing '-' comes out as two words.
        """
        self._record = _CursorRecord(source=self._resolve_source(source, encoding))

    @staticmethod
    def _resolve_source(source, encoding):
        if source is None:
            raise ConfigurationError("Source is required")
        if isinstance(source, LineSource):
            return source
        if isinstance(source, (str, os.PathLike)):
            return LineSource.open(source, encoding=encoding)
        return LineSource.from_stream(source, encoding=encoding)

    @property
    def state(self) -> CursorState:
        return self._record.state

    def has_next(self) -> bool:
        """Returns True if next() would return a word rather than raise."""
        self._ensure_open()
        record = self._record
        if record.has_word_in_buffer():
            return True
        if not record.source_exhausted:
            self._refill()
        return record.has_word_in_buffer()

    def next(self) -> str:
        self._ensure_open()
        if not self.has_next():
            raise ExhaustedError("No words to read")

        record = self._record
        word = record.buffer[record.position]
        record.position += 1
        if not record.has_word_in_buffer():
            record.state = CursorState.DRAINED
        return word

    def close(self):
        """
        Releases the source. Closing twice is a no-op.
        The cursor counts as closed even if releasing the source fails.
        """
        record = self._record
        if record.state is CursorState.CLOSED:
            return

        record.state = CursorState.CLOSED
        record.buffer = []
        record.position = NO_POSITION
        logger.debug("Closing word cursor over %s", record.source.name)
        record.source.release()

    def _ensure_open(self):
        if self._record.state is CursorState.CLOSED:
            raise ClosedCursorError("Word cursor closed")

    def _refill(self):
        """
        Pulls lines until one of them has words or the source runs dry.
        Empty lines are skipped outright, whitespace-only lines split into nothing and we keep going.
        """
        record = self._record
        while True:
            line = record.source.read_line()
            if line is None:
                record.buffer = []
                record.position = NO_POSITION
                record.state = CursorState.DRAINED
                record.source_exhausted = True
                logger.debug("Reached end of %s", record.source.name)
                return
            if len(line) == 0:
                continue

            words = line.split()
            if words:
                record.buffer = words
                record.position = 0
                record.state = CursorState.BUFFERED
                return

    def __iter__(self):
        return self

    def __next__(self) -> str:
        try:
            return self.next()
        except ExhaustedError:
            raise StopIteration from None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
