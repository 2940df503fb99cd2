"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import logging
from xml.etree import ElementTree

from .exceptions import DecodeError, ProviderError
from .models import (
    ErrorDetail,
    ErrorEnvelope,
    FederatedUser,
    FederationTokenResult,
    TemporaryCredentials,
)

logger = logging.getLogger(__name__)

# An unknown declared encoding surfaces as LookupError rather than ParseError.
_XML_ERRORS = (ElementTree.ParseError, LookupError)


def _local_name(tag: str) -> str:
    # "{https://sts.amazonaws.com/doc/2011-06-15/}Credentials" -> "Credentials"
    return tag.rsplit("}", 1)[-1]


def _find(elem: ElementTree.Element | None, *path: str) -> ElementTree.Element | None:
    """Follow ``path`` from ``elem`` by local element name, ignoring namespaces."""
    for name in path:
        if elem is None:
            return None
        elem = next((child for child in elem if _local_name(child.tag) == name), None)
    return elem


def _find_all(elem: ElementTree.Element | None, name: str) -> list[ElementTree.Element]:
    if elem is None:
        return []
    return [child for child in elem if _local_name(child.tag) == name]


def _text(elem: ElementTree.Element | None, *path: str) -> str:
    found = _find(elem, *path)
    if found is None:
        return ""
    return "".join(found.itertext())


def _parse(body: bytes) -> ElementTree.Element:
    return ElementTree.fromstring(body)


def decode_federation_token_response(body: bytes) -> FederationTokenResult:
    """Decode a ``GetFederationTokenResponse`` document.

    Missing elements decode as empty strings; malformed XML raises
    :class:`DecodeError`.
    """
    try:
        root = _parse(body)
    except _XML_ERRORS as e:
        raise DecodeError(f"Invalid GetFederationToken response: {e}", body=body) from e

    result = _find(root, "GetFederationTokenResult")
    credentials = _find(result, "Credentials")
    federated_user = _find(result, "FederatedUser")
    return FederationTokenResult(
        request_id=_text(root, "ResponseMetadata", "RequestId"),
        credentials=TemporaryCredentials(
            session_token=_text(credentials, "SessionToken"),
            secret_access_key=_text(credentials, "SecretAccessKey"),
            expiration=_text(credentials, "Expiration"),
            access_key_id=_text(credentials, "AccessKeyId"),
        ),
        federated_user=FederatedUser(
            arn=_text(federated_user, "Arn"),
            federated_user_id=_text(federated_user, "FederatedUserId"),
        ),
    )


def _request_id(elem: ElementTree.Element | None) -> str:
    if _find(elem, "RequestID") is not None:
        return _text(elem, "RequestID")
    return _text(elem, "RequestId")


def decode_error_envelope(body: bytes) -> ErrorEnvelope:
    """Decode an error document, returning an empty envelope if it cannot be read.

    Entries are taken from ``Errors/Error``, or from ``Error`` children of the
    root when there is no ``Errors`` wrapper.
    """
    try:
        root = _parse(body)
    except _XML_ERRORS as e:
        logger.debug("Ignoring unreadable error document: %s", e)
        return ErrorEnvelope()

    entries = _find_all(_find(root, "Errors"), "Error") or _find_all(root, "Error")
    return ErrorEnvelope(
        request_id=_request_id(root),
        errors=tuple(
            ErrorDetail(
                code=_text(entry, "Code"),
                message=_text(entry, "Message"),
                request_id=_request_id(entry),
            )
            for entry in entries
        ),
    )


def build_provider_error(*, status: int, reason: str, body: bytes) -> ProviderError:
    """Normalize a non-200 response into a single :class:`ProviderError`.

    The first structured error supplies code and message. The envelope's
    request id always replaces the entry's own. Without a message, the status
    line's reason phrase is used.
    """
    envelope = decode_error_envelope(body)
    detail = envelope.errors[0] if envelope.errors else ErrorDetail()
    message = detail.message or reason or str(status)
    return ProviderError(
        status_code=status,
        code=detail.code,
        message=message,
        request_id=envelope.request_id,
    )
