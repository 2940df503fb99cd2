"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from typing import Protocol

import requests

from ._http import HTTPResponse


class Transport(Protocol):
    """Sends a single GET and hands back the unread response."""

    def send(self, url: str) -> HTTPResponse: ...


class RequestsTransport:
    """
    :class:`Transport` backed by a :class:`requests.Session`.

    Exactly one GET is issued per :meth:`send`; the session's own adapters
    decide redirects and connection reuse. Timeouts are the caller's to set.
    A session is not guaranteed to be thread-safe, so do not share one
    transport between threads unless the supplied session is.
    Network failures propagate as :class:`requests.RequestException`.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout: float | tuple[float, float] | None = None,
    ):
        self._session = session or requests.Session()
        self._timeout = timeout

    def send(self, url: str) -> HTTPResponse:
        response = self._session.get(url, stream=True, timeout=self._timeout)
        response.raw.decode_content = True
        return HTTPResponse(
            status=response.status_code,
            reason=response.reason or "",
            fields=dict(response.headers),
            body=response.raw,
            release=response.close,
        )

    def close(self) -> None:
        self._session.close()
