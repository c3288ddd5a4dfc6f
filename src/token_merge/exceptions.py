"""
token-merge Exception Hierarchy

Fatal run conditions raised by the workflow, plus CoinGecko API errors raised
by the ingestion layer and absorbed by the validator.
"""


class TokenMergeError(Exception):
    """Base exception for all token-merge errors."""

    pass


class MissingCredentialError(TokenMergeError):
    """The CoinGecko API key input was not supplied."""

    pass


class BaselineNotFoundError(TokenMergeError):
    """The baseline asset list file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"File {path} does not exist")
        self.path = path


class BaselineFormatError(TokenMergeError):
    """The baseline file is not a JSON array of asset entries."""

    pass


class EmptyResultError(TokenMergeError):
    """Nothing left to write after merging and filtering."""

    pass


class CoingeckoAPIError(TokenMergeError):
    """Base exception for CoinGecko API errors."""

    def __init__(
        self, message: str, status_code: int | None = None, endpoint: str | None = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint


class HttpStatusError(CoingeckoAPIError):
    """Non-success HTTP status."""

    pass


class ResponseFormatError(CoingeckoAPIError):
    """Response body is not a JSON array of objects."""

    pass


class RetryExhaustedError(TokenMergeError):
    """Every attempt of a retried operation failed."""

    def __init__(self, attempts: int, last_error: BaseException | None):
        if last_error is None:
            reason = "Unknown error"
        else:
            reason = str(last_error) or type(last_error).__name__
        super().__init__(f"Failed after {attempts} attempts: {reason}")
        self.attempts = attempts
        self.last_error = last_error
