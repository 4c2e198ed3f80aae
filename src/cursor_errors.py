class WordCursorError(Exception):
    """Base class for every error raised by the word cursor and its source."""


class ConfigurationError(WordCursorError):
    """
    Raised when a cursor can't be built: no source given, the named file
    can't be opened, or the object handed in is not something we can read lines from.
    Also used for a broken CLI config file.
    """


class ClosedCursorError(WordCursorError):
    """Raised by has_next()/next() once the cursor has been closed."""


class ExhaustedError(WordCursorError):
    """Raised by next() when there are no more words."""


class IOFailure(WordCursorError):
    """Reading from or releasing the underlying stream failed."""
