"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import base64
import hmac
from datetime import datetime, timedelta
from hashlib import sha256

import pytest

from aws_sdk_sts import AWSCredentialIdentity, ParameterSet
from aws_sdk_sts._identity import UTC
from aws_sdk_sts.exceptions import MissingExpectedParameterException
from aws_sdk_sts.signers import SigV2Signer, SigV2SigningProperties


def expected_signature(secret: str, string_to_sign: str) -> str:
    digest = hmac.new(secret.encode(), string_to_sign.encode(), sha256).digest()
    return base64.b64encode(digest).decode()


class TestSigV2Signer:
    SIGV2_SIGNER = SigV2Signer()
    SIGNING_PROPERTIES = SigV2SigningProperties(
        method="GET", host="STS.amazonaws.com", path="/"
    )

    def test_sign(self, aws_identity: AWSCredentialIdentity):
        params = {"Action": "GetFederationToken", "DurationSeconds": "900"}

        signed = self.SIGV2_SIGNER.sign(
            signing_properties=self.SIGNING_PROPERTIES,
            params=params,
            identity=aws_identity,
        )

        assert isinstance(signed, ParameterSet)
        assert signed is not params
        assert "Signature" not in params
        assert signed["AWSAccessKeyId"] == "AKID123456"
        assert signed["SignatureVersion"] == "2"
        assert signed["SignatureMethod"] == "HmacSHA256"
        assert "SecurityToken" not in signed

        unsigned = {k: v for k, v in signed.items() if k != "Signature"}
        string_to_sign = (
            "GET\nsts.amazonaws.com\n/\n"
            "AWSAccessKeyId=AKID123456&Action=GetFederationToken&DurationSeconds=900"
            "&SignatureMethod=HmacSHA256&SignatureVersion=2"
        )
        assert (
            self.SIGV2_SIGNER.string_to_sign(
                params=unsigned, signing_properties=self.SIGNING_PROPERTIES
            )
            == string_to_sign
        )
        assert signed["Signature"] == expected_signature(
            "EXAMPLE1234SECRET", string_to_sign
        )

    def test_session_token_is_signed(self, session_identity: AWSCredentialIdentity):
        signed = self.SIGV2_SIGNER.sign(
            signing_properties=self.SIGNING_PROPERTIES,
            params={"Action": "GetFederationToken"},
            identity=session_identity,
        )
        assert signed["SecurityToken"] == "X123456SESSION"
        assert "SecurityToken=X123456SESSION" in signed.canonical_query()

    def test_insertion_order_does_not_change_signature(
        self, aws_identity: AWSCredentialIdentity
    ):
        forward = {"Action": "GetFederationToken", "DurationSeconds": "900", "Name": "Bob"}
        backward = dict(reversed(list(forward.items())))

        first = self.SIGV2_SIGNER.sign(
            signing_properties=self.SIGNING_PROPERTIES,
            params=forward,
            identity=aws_identity,
        )
        second = self.SIGV2_SIGNER.sign(
            signing_properties=self.SIGNING_PROPERTIES,
            params=backward,
            identity=aws_identity,
        )
        assert first["Signature"] == second["Signature"]
        assert first.canonical_query() == second.canonical_query()

    def test_signed_params_are_frozen(self, aws_identity: AWSCredentialIdentity):
        signed = self.SIGV2_SIGNER.sign(
            signing_properties=self.SIGNING_PROPERTIES,
            params={"Action": "GetFederationToken"},
            identity=aws_identity,
        )
        assert signed.frozen
        with pytest.raises(TypeError):
            signed["Action"] = "AssumeRole"

    def test_missing_path_defaults_to_root(self, aws_identity: AWSCredentialIdentity):
        string_to_sign = self.SIGV2_SIGNER.string_to_sign(
            params={"Action": "GetFederationToken"},
            signing_properties=SigV2SigningProperties(method="get", host="sts.amazonaws.com"),
        )
        assert string_to_sign == "GET\nsts.amazonaws.com\n/\nAction=GetFederationToken"

    def test_missing_host(self, aws_identity: AWSCredentialIdentity):
        with pytest.raises(MissingExpectedParameterException):
            self.SIGV2_SIGNER.sign(
                signing_properties=SigV2SigningProperties(method="GET", host=""),
                params={},
                identity=aws_identity,
            )

    def test_expired_identity(self):
        identity = AWSCredentialIdentity(
            access_key_id="AKID123456",
            secret_access_key="EXAMPLE1234SECRET",
            expiration=datetime.now(UTC) - timedelta(minutes=5),
        )
        with pytest.raises(ValueError, match="expired"):
            self.SIGV2_SIGNER.sign(
                signing_properties=self.SIGNING_PROPERTIES,
                params={},
                identity=identity,
            )

    def test_rejects_foreign_identity(self):
        with pytest.raises(ValueError):
            self.SIGV2_SIGNER.sign(
                signing_properties=self.SIGNING_PROPERTIES,
                params={},
                identity=object(),  # type: ignore[arg-type]
            )
