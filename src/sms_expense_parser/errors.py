class SmsExpenseParserError(Exception):
    """Base class for errors raised by the service layer."""


class InvalidBatchError(SmsExpenseParserError, ValueError):
    """The message batch as a whole cannot be parsed."""


class BackendError(SmsExpenseParserError):
    """The storage backend rejected a request or could not be reached."""


class BackendNotConfigured(BackendError):
    pass


class UnauthorizedError(SmsExpenseParserError):
    pass


class MessageSourceUnavailable(SmsExpenseParserError):
    """Raised when messages are requested from a backend that cannot provide them."""
