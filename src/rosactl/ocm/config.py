# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""OCM configuration written by 'ocm login'"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import yaml

from rosactl.utils.paths import get_config_path
from rosactl.utils.yaml_handler import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_URL = 'https://api.openshift.com'
DEFAULT_TOKEN_URL = 'https://sso.redhat.com/auth/realms/redhat-external/protocol/openid-connect/token'
DEFAULT_CLIENT_ID = 'cloud-services'
DEFAULT_SCOPES = ['openid']


class ConfigError(Exception):
    """Raised when the OCM configuration is missing or unreadable"""


@dataclass
class Config:
    access_token: str = ''
    refresh_token: str = ''
    client_id: str = DEFAULT_CLIENT_ID
    client_secret: str = ''
    scopes: List[str] = field(default_factory=lambda: list(DEFAULT_SCOPES))
    token_url: str = DEFAULT_TOKEN_URL
    url: str = DEFAULT_URL
    insecure: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        # Empty values in the file mean "use the default"
        return cls(
            access_token=data.get('access_token') or '',
            refresh_token=data.get('refresh_token') or '',
            client_id=data.get('client_id') or DEFAULT_CLIENT_ID,
            client_secret=data.get('client_secret') or '',
            scopes=list(data.get('scopes') or DEFAULT_SCOPES),
            token_url=data.get('token_url') or DEFAULT_TOKEN_URL,
            url=data.get('url') or DEFAULT_URL,
            insecure=bool(data.get('insecure', False)),
        )

    def is_armed(self) -> bool:
        """Check that there is something to authenticate with"""
        has_tokens = bool(self.access_token or self.refresh_token)
        has_client_credentials = bool(self.client_id and self.client_secret)
        return has_tokens or has_client_credentials


def load_config(path: Optional[str] = None) -> Config:
    """Load the OCM configuration file

    Args:
        path: Explicit file location (default: see get_config_path)

    Returns:
        Config

    Raises:
        ConfigError: If the file doesn't exist or can't be parsed
    """
    config_path = path or get_config_path()
    logger.debug(f"Loading OCM configuration from {config_path}")

    try:
        data = load_yaml(config_path)
    except FileNotFoundError:
        raise ConfigError("Not logged in, run the 'ocm login' command")
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Can't load config file '{config_path}': {e}") from e

    return Config.from_dict(data)
