import base64
from collections.abc import Mapping
from hashlib import sha256
import hmac
from typing import Required, TypedDict

from ._identity import AWSCredentialIdentity
from ._query import ParameterSet, canonical_query
from .exceptions import MissingExpectedParameterException

SIGV2_VERSION: str = "2"
SIGV2_METHOD: str = "HmacSHA256"
SIGNATURE_PARAM: str = "Signature"


class SigV2SigningProperties(TypedDict, total=False):
    method: Required[str]
    host: Required[str]
    path: str


class SigV2Signer:
    """
    Request signer for applying the AWS Signature Version 2 algorithm to
    query-string requests.
    """

    def sign(
        self,
        *,
        signing_properties: SigV2SigningProperties,
        params: Mapping[str, str],
        identity: AWSCredentialIdentity,
    ) -> ParameterSet:
        """Return a new, frozen parameter set carrying the signature.

        ``params`` itself is left untouched.
        """
        self._validate_identity(identity=identity)
        new_signing_properties = self._normalize_signing_properties(
            signing_properties=signing_properties
        )
        new_params = self._generate_new_params(params=params, identity=identity)

        string_to_sign = self.string_to_sign(
            params=new_params,
            signing_properties=new_signing_properties,
        )
        signature = self._signature(
            string_to_sign=string_to_sign,
            secret_key=identity.secret_access_key,
        )
        new_params[SIGNATURE_PARAM] = signature
        return new_params.freeze()

    def string_to_sign(
        self,
        *,
        params: Mapping[str, str],
        signing_properties: SigV2SigningProperties,
    ) -> str:
        """Build the canonical request string.

        METHOD\\n
        host (lower case)\\n
        path\\n
        sorted, percent-encoded query
        """
        return (
            f"{signing_properties['method'].upper()}\n"
            f"{signing_properties['host'].lower()}\n"
            f"{self._format_canonical_path(path=signing_properties.get('path'))}\n"
            f"{canonical_query(params)}"
        )

    def _signature(self, *, string_to_sign: str, secret_key: str) -> str:
        """Sign the string to sign.

        Signature = Base64(HMAC-SHA256("<SecretAccessKey>", "<StringToSign>"))
        """
        digest = self._hash(key=secret_key.encode(), value=string_to_sign)
        return base64.b64encode(digest).decode()

    def _hash(self, key: bytes, value: str) -> bytes:
        return hmac.new(key=key, msg=value.encode(), digestmod=sha256).digest()

    def _validate_identity(self, *, identity: AWSCredentialIdentity) -> None:
        """Perform runtime and expiration checks before attempting signing."""
        if not isinstance(identity, AWSCredentialIdentity):
            raise ValueError(
                "Received unexpected value for identity parameter. Expected "
                f"AWSCredentialIdentity but received {type(identity)}."
            )
        elif identity.is_expired:
            raise ValueError(
                f"Provided identity expired at {identity.expiration}. Please "
                "refresh the credentials or update the expiration parameter."
            )

    def _normalize_signing_properties(
        self, *, signing_properties: SigV2SigningProperties
    ) -> SigV2SigningProperties:
        # Create copy of signing properties to avoid mutating the original
        new_signing_properties = SigV2SigningProperties(**signing_properties)
        for name in ("method", "host"):
            if not new_signing_properties.get(name):
                raise MissingExpectedParameterException(
                    f"SigV2 signing requires a {name!r} signing property."
                )
        new_signing_properties["path"] = self._format_canonical_path(
            path=new_signing_properties.get("path")
        )
        return new_signing_properties

    def _generate_new_params(
        self, *, params: Mapping[str, str], identity: AWSCredentialIdentity
    ) -> ParameterSet:
        new_params = ParameterSet(params)
        new_params.pop(SIGNATURE_PARAM, None)
        new_params["AWSAccessKeyId"] = identity.access_key_id
        new_params["SignatureVersion"] = SIGV2_VERSION
        new_params["SignatureMethod"] = SIGV2_METHOD
        if identity.session_token:
            new_params["SecurityToken"] = identity.session_token
        return new_params

    def _format_canonical_path(self, *, path: str | None) -> str:
        if not path:
            return "/"
        return path
