import io
import os
import logging

from cursor_errors import ConfigurationError, IOFailure

logger = logging.getLogger(__name__)


class LineSource:
    def __init__(self, stream, name=None, encoding: str = "utf-8"):
        """
        Thin wrapper over an open text stream that hands out one line at a time.
        Only two things are needed from it: read_line() and release().
        encoding is only used for file-like objects whose readline() returns bytes.
        """
        self.stream = stream
        self.name = name if name is not None else getattr(stream, "name", repr(stream))
        self.encoding = encoding
        self.released = False

    @classmethod
    def open(cls, path, encoding: str = "utf-8"):
        """Open a named file for reading."""
        if path is None:
            raise ConfigurationError("Source file name is required")
        try:
            stream = open(path, "r", encoding=encoding)
        except OSError as e:
            raise ConfigurationError(f"Source file is invalid: {e}") from e
        except LookupError as e:
            raise ConfigurationError(f"Unknown encoding {encoding!r}") from e
        logger.debug("Opened %s with encoding %s", path, encoding)
        return cls(stream, name=os.fspath(path), encoding=encoding)

    @classmethod
    def from_stream(cls, stream, encoding: str = "utf-8"):
        """Wrap an already open stream. Binary streams get decoded with `encoding`."""
        if stream is None:
            raise ConfigurationError("Source stream is required")
        if not hasattr(stream, "readline"):
            raise ConfigurationError(f"Can't read lines from {type(stream).__name__}")
        if getattr(stream, "closed", False):
            raise ConfigurationError(f"Source stream {getattr(stream, 'name', stream)!r} is already closed")
        if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
            try:
                stream = io.TextIOWrapper(stream, encoding=encoding)
            except LookupError as e:
                raise ConfigurationError(f"Unknown encoding {encoding!r}") from e
        return cls(stream, encoding=encoding)

    def read_line(self):
        """
        Returns the next line without its terminator, or None at end of stream.
        """
        try:
            line = self.stream.readline()
            if isinstance(line, bytes):
                line = line.decode(self.encoding)
        except (OSError, ValueError, LookupError) as e:
            # ValueError covers decode errors and reads on a closed stream
            raise IOFailure(f"Iteration failed due to an error: {e}") from e

        if not isinstance(line, str):
            raise IOFailure(f"Expected a line of text from {self.name}, got {type(line).__name__}")
        if not line:
            return None

        # strip exactly one terminator: \r\n, \n or \r
        if line.endswith("\r\n"):
            return line[:-2]
        if line.endswith("\n") or line.endswith("\r"):
            return line[:-1]
        return line

    def release(self):
        if self.released:
            return
        self.released = True
        try:
            self.stream.close()
        except OSError as e:
            raise IOFailure(f"Failed to close {self.name}: {e}") from e

    def __repr__(self):
        return f"LineSource({self.name!r})"
