"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from ._identity import AWSCredentialIdentity
from .exceptions import CredentialsNotFound

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "aws-sdk-sts" / "config.toml"
GLOBAL_STS_ENDPOINT = "https://sts.amazonaws.com"

# Setting name -> environment variables consulted, in order of preference.
SETTING_ENV_VARS: dict[str, tuple[str, ...]] = {
    "AWS_ACCESS_KEY_ID": ("AWS_ACCESS_KEY_ID",),
    "AWS_SECRET_ACCESS_KEY": ("AWS_SECRET_ACCESS_KEY",),
    "AWS_SESSION_TOKEN": ("AWS_SESSION_TOKEN",),
    "AWS_DEFAULT_REGION": ("AWS_DEFAULT_REGION", "AWS_REGION"),
    "AWS_STS_ENDPOINT": ("AWS_STS_ENDPOINT",),
}


@dataclass(frozen=True)
class Region:
    name: str
    sts_endpoint: str


def _regional_endpoint(name: str) -> str:
    suffix = "amazonaws.com.cn" if name.startswith("cn-") else "amazonaws.com"
    return f"https://sts.{name}.{suffix}"


REGIONS: dict[str, Region] = {
    name: Region(name, _regional_endpoint(name))
    for name in (
        "us-east-2",
        "us-west-1",
        "us-west-2",
        "eu-west-1",
        "eu-central-1",
        "ap-southeast-1",
        "ap-southeast-2",
        "ap-northeast-1",
        "sa-east-1",
        "us-gov-west-1",
        "cn-north-1",
    )
}
REGIONS["us-east-1"] = Region("us-east-1", GLOBAL_STS_ENDPOINT)


def get_region(name: str) -> Region:
    """Look up a known region, deriving the regional STS endpoint otherwise."""
    return REGIONS.get(name) or Region(name, _regional_endpoint(name))


def _non_blank(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def load_env_files() -> None:
    """Load a ``.env`` file into the environment if one is found."""
    load_dotenv()


def load_toml_config(path: Path | None = None) -> dict[str, str]:
    """Return the ``[aws]`` table of the config file with upper-cased keys."""
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        return {}
    with cfg_path.open("rb") as f:
        data: dict[str, Any] = tomllib.load(f)
    section: dict[str, Any] = data.get("aws", {})
    return {key.upper(): str(value) for key, value in section.items()}


def resolved_aws_settings(config_path: Path | None = None) -> dict[str, str | None]:
    """Resolve settings from the environment, a ``.env`` file, and config.toml.

    Non-blank environment values take precedence over the file. Every key of
    :data:`SETTING_ENV_VARS` is present in the result; unresolved ones are None.
    """
    load_env_files()
    file_settings = load_toml_config(config_path)

    settings: dict[str, str | None] = {}
    for setting, env_vars in SETTING_ENV_VARS.items():
        candidates = [os.environ.get(name) for name in env_vars]
        candidates.append(file_settings.get(setting))
        settings[setting] = next(
            (value for value in map(_non_blank, candidates) if value is not None),
            None,
        )
    return settings


def identity_from_settings(settings: Mapping[str, str | None]) -> AWSCredentialIdentity:
    access_key = settings.get("AWS_ACCESS_KEY_ID")
    secret_key = settings.get("AWS_SECRET_ACCESS_KEY")
    if not access_key or not secret_key:
        raise CredentialsNotFound(
            "AWS credentials not found. Set AWS_ACCESS_KEY_ID and "
            "AWS_SECRET_ACCESS_KEY in the environment, a .env file, or config.toml."
        )
    return AWSCredentialIdentity(
        access_key_id=access_key,
        secret_access_key=secret_key,
        session_token=settings.get("AWS_SESSION_TOKEN") or None,
    )


def endpoint_from_settings(settings: Mapping[str, str | None]) -> str:
    endpoint = settings.get("AWS_STS_ENDPOINT")
    if endpoint:
        return endpoint
    region = settings.get("AWS_DEFAULT_REGION")
    if not region:
        raise CredentialsNotFound(
            "AWS region not resolved. Set AWS_DEFAULT_REGION or AWS_STS_ENDPOINT."
        )
    return get_region(region).sts_endpoint
