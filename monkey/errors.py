class MonkeyError(Exception):
    """Base class for failures raised by the Monkey front end."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LexerError(MonkeyError):
    """Raised when the source text cannot be split into tokens."""


class ParseError(MonkeyError):
    """Raised when the token stream does not match the grammar."""
