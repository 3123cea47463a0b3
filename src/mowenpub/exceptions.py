"""mowenpub custom exceptions."""


class MowenPubError(Exception):
    """Base exception for all mowenpub errors."""


class MowenClientError(MowenPubError):
    """Errors from the Mowen OpenAPI client."""


class PublishError(MowenClientError):
    """Note creation was rejected or could not be delivered."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_text: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text
