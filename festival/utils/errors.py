class GenerationError(Exception):
    """Base class for everything that can go wrong producing a couplet or fortune."""


class MissingCredentialError(GenerationError):
    """No upstream API key is configured; the model is never called."""

    def __init__(self):
        super().__init__("Server API Key not configured")


class MalformedUpstreamResponseError(GenerationError):
    """The model reply parsed as JSON but does not have the expected shape."""

    def __init__(self, kind: str, message: str):
        self.kind = kind
        super().__init__(f"Malformed {kind} from upstream: {message}")


class ClientGenerationError(GenerationError):
    """Raised by the generation client; carries only the user facing message."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
