"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class AuthGatewayError(ProviderError):
    """The auth provider rejected a request or could not be reached."""

    pass


class StorageError(ProviderError):
    """Object storage request failed."""

    pass


class GalleryProxyError(ProviderError):
    """Gallery proxy request failed."""

    pass
