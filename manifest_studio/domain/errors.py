"""Error types raised by the generator workflow."""


class GeneratorError(Exception):
    """Base error for the manifest generator."""


class ManifestServiceError(GeneratorError):
    """Manifest service unreachable or answered with a non-2xx status.

    `message` is the best human-readable text extracted from the response.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class InvalidServiceResponseError(ManifestServiceError):
    """Service answered 2xx but the body does not match the expected schema."""


class ManifestNotLoadedError(GeneratorError):
    """Operation needs a manifest id but no manifest has been fetched yet."""


class OperationCancelledError(GeneratorError):
    """Caller cancelled a long-running action."""
