"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping
from datetime import datetime
from typing import TYPE_CHECKING
from urllib.parse import quote

from ._http import URI
from ._identity import UTC, AWSCredentialIdentity

if TYPE_CHECKING:
    from .signers import SigV2Signer

API_VERSION: str = "2011-06-15"
QUERY_TIMESTAMP_FORMAT: str = "%Y-%m-%dT%H:%M:%SZ"


def percent_encode(value: str) -> str:
    """Percent-encode everything outside the RFC 3986 unreserved set.

    Spaces become ``%20``, never ``+``.
    """
    return quote(value, safe="-_.~")


def canonical_query(params: Mapping[str, str]) -> str:
    """Serialize parameters as sorted, percent-encoded ``key=value`` pairs.

    The result is used both as the signed payload and as the query string put
    on the wire, so the two always agree on ordering and encoding.
    """
    return "&".join(
        f"{percent_encode(key)}={percent_encode(value)}"
        for key, value in sorted(params.items())
    )


class ParameterSet(MutableMapping[str, str]):
    """Query parameters for a single request.

    Insertion order is irrelevant; :meth:`canonical_query` always sorts. Once
    frozen (after signing) the set rejects further changes.
    """

    def __init__(self, params: Mapping[str, str] | None = None) -> None:
        self._params: dict[str, str] = {}
        self._frozen = False
        if params:
            self.update(params)

    def __getitem__(self, key: str) -> str:
        return self._params[key]

    def __setitem__(self, key: str, value: str) -> None:
        if self._frozen:
            raise TypeError("Signed parameter sets cannot be modified.")
        if not isinstance(value, str):
            raise TypeError(
                f"Parameter {key!r} must be a string, got {type(value).__name__}."
            )
        self._params[key] = value

    def __delitem__(self, key: str) -> None:
        if self._frozen:
            raise TypeError("Signed parameter sets cannot be modified.")
        del self._params[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"ParameterSet({dict(sorted(self._params.items()))!r})"

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "ParameterSet":
        self._frozen = True
        return self

    def copy(self) -> "ParameterSet":
        """Return an unfrozen copy."""
        return ParameterSet(self._params)

    def add_list(self, label: str, values: Iterable[str]) -> None:
        """Add ``values`` as ``label.1``, ``label.2``, ... members."""
        for index, value in enumerate(values, start=1):
            self[f"{label}.{index}"] = value

    def canonical_query(self) -> str:
        return canonical_query(self._params)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class QueryEncoder:
    """Adds the protocol parameters, signs, and renders the query string."""

    def __init__(
        self,
        *,
        signer: "SigV2Signer",
        identity: AWSCredentialIdentity,
        clock: Callable[[], datetime] | None = None,
        version: str = API_VERSION,
    ):
        self._signer = signer
        self._identity = identity
        self._clock = clock or _utc_now
        self._version = version

    def timestamp(self) -> str:
        now = self._clock()
        if now.tzinfo is not None:
            now = now.astimezone(UTC)
        return now.strftime(QUERY_TIMESTAMP_FORMAT)

    def prepare(self, params: Mapping[str, str]) -> ParameterSet:
        new_params = ParameterSet(params)
        new_params["Version"] = self._version
        new_params["Timestamp"] = self.timestamp()
        return new_params

    def encode(self, *, params: Mapping[str, str], uri: URI, method: str = "GET") -> str:
        signed_params = self._signer.sign(
            params=self.prepare(params),
            identity=self._identity,
            signing_properties={
                "method": method,
                "host": uri.netloc,
                "path": uri.path or "/",
            },
        )
        return signed_params.canonical_query()
