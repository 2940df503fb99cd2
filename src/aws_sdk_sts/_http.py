"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import BinaryIO
from urllib.parse import urlsplit

from .exceptions import MissingExpectedParameterException

DEFAULT_PORTS: dict[str, int] = {"http": 80, "https": 443}


@dataclass(frozen=True, kw_only=True)
class URI:
    """Universal Resource Identifier, target location for a :class:`HTTPResponse`."""

    scheme: str = "https"
    host: str
    port: int | None = None
    path: str | None = None
    query: str | None = None

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{host}:{port}``.

        The port is left out when it is the default for the scheme.
        """
        if self.port is None or DEFAULT_PORTS.get(self.scheme) == self.port:
            return self.host
        return f"{self.host}:{self.port}"

    def with_query(self, query: str) -> "URI":
        return replace(self, query=query)

    def build(self) -> str:
        """Render the URI as a string suitable for sending over the wire."""
        url = f"{self.scheme}://{self.netloc}{self.path or '/'}"
        if self.query:
            url = f"{url}?{self.query}"
        return url

    @classmethod
    def from_url(cls, url: str) -> "URI":
        parts = urlsplit(url)
        if not parts.scheme or not parts.hostname:
            raise MissingExpectedParameterException(
                f"Endpoint must be an absolute URL with a host, got {url!r}."
            )
        return cls(
            scheme=parts.scheme,
            host=parts.hostname,
            port=parts.port,
            path=parts.path or None,
            query=parts.query or None,
        )


@dataclass(kw_only=True)
class HTTPResponse:
    """A received HTTP response whose body is released when the response is closed.

    Use it as a context manager so the body is closed on every exit path.
    """

    status: int
    reason: str = ""
    fields: Mapping[str, str] = field(default_factory=dict)
    body: BinaryIO
    release: Callable[[], None] | None = None

    def read(self) -> bytes:
        return self.body.read()

    def close(self) -> None:
        try:
            self.body.close()
        finally:
            if self.release is not None:
                self.release()

    def __enter__(self) -> "HTTPResponse":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
