"""Error taxonomy shared by the client, the solvers and the katas."""


class HackatticError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(HackatticError):
    pass


class ValidationError(ConfigError):
    """A configured value is present but malformed."""


class TransportError(HackatticError):
    """Network, DNS or connection failure before a response was received."""


class RequestTimeoutError(TransportError):
    pass


class HTTPError(HackatticError):
    """
    The server answered with a status >= 400.

    The full response stays available on ``response`` for inspection.
    """

    def __init__(self, status_code: int, body: bytes, response=None):
        preview = body.decode("utf-8", errors="replace")
        super().__init__(f"HTTP error: status={status_code}, body={preview}")
        self.status_code = status_code
        self.body = body
        self.response = response


class DecodeError(HackatticError):
    """A response body is not valid JSON or does not fit the requested shape."""


class ParseError(HackatticError):
    """A problem payload does not match the challenge's schema."""


class ComputeError(HackatticError):
    pass


class FetchError(HackatticError):
    pass


class SubmitError(HackatticError):
    pass


class DownloadError(HackatticError):
    pass


class KataInputError(HackatticError, ValueError):
    pass
