"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from dataclasses import dataclass, field
from datetime import datetime

from ._identity import AWSCredentialIdentity


@dataclass(frozen=True, kw_only=True)
class TemporaryCredentials:
    session_token: str = ""
    secret_access_key: str = ""
    # Kept exactly as STS formats it, e.g. "2011-07-15T23:28:33.359Z".
    expiration: str = ""
    access_key_id: str = ""

    def as_identity(self) -> AWSCredentialIdentity:
        """Convert to an identity usable for signing further requests."""
        expiration = datetime.fromisoformat(self.expiration) if self.expiration else None
        return AWSCredentialIdentity(
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key,
            session_token=self.session_token or None,
            expiration=expiration,
        )

    def __repr__(self) -> str:
        return (
            f"TemporaryCredentials(access_key_id={self.access_key_id!r}, "
            f"expiration={self.expiration!r})"
        )


@dataclass(frozen=True, kw_only=True)
class FederatedUser:
    arn: str = ""
    federated_user_id: str = ""


@dataclass(frozen=True, kw_only=True)
class FederationTokenResult:
    """Decoded ``GetFederationTokenResponse``."""

    request_id: str = ""
    credentials: TemporaryCredentials = field(default_factory=TemporaryCredentials)
    federated_user: FederatedUser = field(default_factory=FederatedUser)


@dataclass(frozen=True, kw_only=True)
class ErrorDetail:
    code: str = ""
    message: str = ""
    request_id: str = ""


@dataclass(frozen=True, kw_only=True)
class ErrorEnvelope:
    """Error document as received, before it is turned into a ProviderError."""

    request_id: str = ""
    errors: tuple[ErrorDetail, ...] = ()
