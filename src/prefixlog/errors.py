"""Exceptions raised by prefixlog."""


class LoggerPanic(BaseException):
    """
    Raised by Logger.panic() after the panic record has been written.

    Derives from BaseException, like SystemExit, so `except Exception`
    handlers do not stop it. Release resources with finally blocks or
    context managers instead of catching it.
    """

    def __init__(self, message: str, prefix: str = "", stack: str = ""):
        super().__init__(message)
        self.message = message
        self.prefix = prefix
        self.stack = stack
