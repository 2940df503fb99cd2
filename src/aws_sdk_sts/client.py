"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from pathlib import Path
from typing import Any, TypeVar

from . import _xml
from ._http import URI, HTTPResponse
from ._identity import AWSCredentialIdentity
from ._query import QueryEncoder
from .config import (
    Region,
    endpoint_from_settings,
    identity_from_settings,
    resolved_aws_settings,
)
from .models import FederationTokenResult
from .signers import SigV2Signer
from .transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)

T = TypeVar("T")


class STSClient:
    """
    Client for the AWS Security Token Service query API.

    Instances hold no per-call state. Sharing one between threads is only as
    safe as its transport: the default :class:`RequestsTransport` uses a single
    :class:`requests.Session`, which requests does not promise is thread-safe.
    Give each thread its own client, or pass a transport that is safe to share.
    """

    def __init__(
        self,
        identity: AWSCredentialIdentity,
        endpoint: Region | str,
        *,
        transport: Transport | None = None,
        clock: Callable[[], datetime] | None = None,
        diagnostics: bool = False,
    ):
        sts_endpoint = endpoint.sts_endpoint if isinstance(endpoint, Region) else endpoint
        self._uri = URI.from_url(sts_endpoint)
        self._transport: Transport = transport or RequestsTransport()
        self._encoder = QueryEncoder(signer=SigV2Signer(), identity=identity, clock=clock)
        self._diagnostics = diagnostics

    @classmethod
    def from_environment(
        cls, *, config_path: Path | None = None, **kwargs: Any
    ) -> "STSClient":
        """Build a client from the environment, a .env file, or config.toml."""
        settings = resolved_aws_settings(config_path)
        return cls(
            identity_from_settings(settings),
            endpoint_from_settings(settings),
            **kwargs,
        )

    @property
    def endpoint(self) -> str:
        return self._uri.build()

    def get_federation_token(
        self,
        duration_seconds: int,
        *,
        name: str | None = None,
        policy: str | None = None,
    ) -> FederationTokenResult:
        """Request temporary credentials for a federated user.

        The duration is passed through as given; STS enforces its own bounds
        and answers out-of-range values with a :class:`ProviderError`.
        """
        params = {
            "Action": "GetFederationToken",
            "DurationSeconds": str(duration_seconds),
        }
        if name is not None:
            params["Name"] = name
        if policy is not None:
            params["Policy"] = policy
        return self._query(params, _xml.decode_federation_token_response)

    def _query(self, params: Mapping[str, str], decode: Callable[[bytes], T]) -> T:
        query = self._encoder.encode(params=params, uri=self._uri)
        url = self._uri.with_query(query).build()
        if self._diagnostics:
            logger.debug("GET %s", url)

        with self._transport.send(url) as response:
            body = response.read()
            if self._diagnostics:
                self._dump(response, body)
            if response.status != 200:
                raise _xml.build_provider_error(
                    status=response.status, reason=response.reason, body=body
                )
            return decode(body)

    def _dump(self, response: HTTPResponse, body: bytes) -> None:
        headers = "\n".join(f"{key}: {value}" for key, value in response.fields.items())
        logger.debug(
            "response:\n%s %s\n%s\n\n%s",
            response.status,
            response.reason,
            headers,
            body.decode("utf-8", errors="replace"),
        )
