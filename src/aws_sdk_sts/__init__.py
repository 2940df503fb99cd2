"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0

AWS SDK STS provides a small, synchronous client for the AWS Security Token
Service query API, signing requests with AWS Signature Version 2.
"""

from __future__ import annotations

from ._http import URI, HTTPResponse
from ._identity import AWSCredentialIdentity
from ._query import API_VERSION, ParameterSet, QueryEncoder, canonical_query
from ._version import __version__
from .client import STSClient
from .config import Region, get_region
from .exceptions import (
    BaseAWSSDKException,
    CredentialsNotFound,
    DecodeError,
    MissingExpectedParameterException,
    ProviderError,
)
from .models import FederatedUser, FederationTokenResult, TemporaryCredentials
from .signers import SigV2Signer, SigV2SigningProperties
from .transport import RequestsTransport, Transport

__license__ = "Apache-2.0"
__version__ = __version__

__all__ = (
    "API_VERSION",
    "AWSCredentialIdentity",
    "BaseAWSSDKException",
    "CredentialsNotFound",
    "DecodeError",
    "FederatedUser",
    "FederationTokenResult",
    "HTTPResponse",
    "MissingExpectedParameterException",
    "ParameterSet",
    "ProviderError",
    "QueryEncoder",
    "Region",
    "RequestsTransport",
    "STSClient",
    "SigV2Signer",
    "SigV2SigningProperties",
    "TemporaryCredentials",
    "Transport",
    "URI",
    "canonical_query",
    "get_region",
)
