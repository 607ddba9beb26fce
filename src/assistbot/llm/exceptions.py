"""Errors raised by LLM providers."""

GENERIC_API_FAILURE = "API request failed"


class CompletionError(Exception):
    """The completion service answered, but not with a usable completion.

    Raised for non-success HTTP statuses and for success responses that lack
    the expected ``choices[0].message.content`` field. The message is the
    service-provided error text when one was present.
    """

    def __init__(self, message: str = GENERIC_API_FAILURE, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
