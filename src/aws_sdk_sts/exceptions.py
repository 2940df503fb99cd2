class BaseAWSSDKException(Exception):
    """Top-level exception to capture SDK-related errors."""

    ...


class MissingExpectedParameterException(BaseAWSSDKException, ValueError):
    """Some APIs require specific signing properties to be present."""

    ...


class CredentialsNotFound(BaseAWSSDKException):
    """Raised when AWS credentials or the STS endpoint cannot be resolved."""

    ...


class DecodeError(BaseAWSSDKException, ValueError):
    """A successful response body did not match the expected XML shape."""

    def __init__(self, message: str, *, body: bytes = b"") -> None:
        super().__init__(message)
        self.body = body

    def __reduce__(self):
        return (_rebuild, (type(self), {"message": self.args[0], "body": self.body}))


class ProviderError(BaseAWSSDKException):
    """STS rejected the request.

    Built from the error document returned with a non-200 status. ``code`` is
    empty when the service did not return a structured error.
    """

    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        code: str = "",
        request_id: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.request_id = request_id

    def __str__(self) -> str:
        if not self.code:
            return self.message
        return f"{self.message} ({self.code})"

    def __repr__(self) -> str:
        return (
            f"ProviderError(status_code={self.status_code!r}, code={self.code!r}, "
            f"message={self.message!r}, request_id={self.request_id!r})"
        )

    def __reduce__(self):
        return (
            _rebuild,
            (
                type(self),
                {
                    "status_code": self.status_code,
                    "message": self.message,
                    "code": self.code,
                    "request_id": self.request_id,
                },
            ),
        )


def _rebuild(cls, kwargs):
    return cls(**kwargs)

