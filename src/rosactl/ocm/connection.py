# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Authenticated connection to the OCM API"""

import logging
import time
from typing import Optional

import httpx
import jwt

from rosactl import __version__
from rosactl.ocm.clusters_mgmt import ClustersMgmtClient
from rosactl.ocm.config import Config, ConfigError, load_config

# Tokens that expire within this many seconds are refreshed up front
TOKEN_EXPIRY_MARGIN = 60


class OCMConnectionError(Exception):
    """Raised when a connection to the OCM API can't be established"""


def token_expired(token: str, margin: int = TOKEN_EXPIRY_MARGIN) -> bool:
    """Check if a JWT access token is expired or about to expire

    The signature is not verified, the token is only inspected for 'exp'.
    Opaque tokens and tokens without a numeric 'exp' are treated as expired.

    Args:
        token: Access token
        margin: Seconds before actual expiry that already count as expired

    Returns:
        bool: True if a new token should be requested
    """
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return True

    exp = claims.get('exp')
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return True
    return exp - margin <= time.time()


class Connection:
    """Session with the OCM API

    Use as a context manager, or call close() when done.
    """

    def __init__(self, http_client: httpx.Client, logger: logging.Logger):
        self._http = http_client
        self._logger = logger
        self._closed = False

    def clusters_mgmt(self) -> ClustersMgmtClient:
        """Get the client for the clusters management service"""
        return ClustersMgmtClient(self._http, self._logger)

    def close(self):
        if self._closed:
            return
        self._http.close()
        self._closed = True
        self._logger.debug("Closed OCM connection")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class ConnectionBuilder:
    """Builds a Connection from the OCM configuration"""

    def __init__(self):
        self._logger = logging.getLogger(__name__)
        self._config: Optional[Config] = None
        self._transport: Optional[httpx.BaseTransport] = None

    def logger(self, logger: logging.Logger) -> 'ConnectionBuilder':
        self._logger = logger
        return self

    def config(self, config: Config) -> 'ConnectionBuilder':
        self._config = config
        return self

    def transport(self, transport: httpx.BaseTransport) -> 'ConnectionBuilder':
        """Use a custom HTTP transport for both the API and the token URL"""
        self._transport = transport
        return self

    def build(self) -> Connection:
        """Create the connection, requesting a new access token if needed

        Raises:
            OCMConnectionError: If the user isn't logged in or authentication fails
        """
        config = self._config
        if config is None:
            try:
                config = load_config()
            except ConfigError as e:
                raise OCMConnectionError(str(e)) from e

        if not config.is_armed():
            raise OCMConnectionError("Not logged in, run the 'ocm login' command")

        access_token = config.access_token
        if not access_token or token_expired(access_token):
            access_token = self._request_token(config)

        headers = {
            'Authorization': f"Bearer {access_token}",
            'User-Agent': f"rosactl/{__version__}",
            'Accept': 'application/json',
        }
        http_client = httpx.Client(
            base_url=config.url,
            headers=headers,
            verify=not config.insecure,
            transport=self._transport,
            event_hooks={'request': [self._log_request], 'response': [self._log_response]},
        )
        self._logger.debug(f"Created OCM connection to {config.url}")
        return Connection(http_client, self._logger)

    def _request_token(self, config: Config) -> str:
        if config.refresh_token:
            form = {
                'grant_type': 'refresh_token',
                'client_id': config.client_id,
                'refresh_token': config.refresh_token,
            }
            if config.client_secret:
                form['client_secret'] = config.client_secret
        elif config.client_id and config.client_secret:
            form = {
                'grant_type': 'client_credentials',
                'client_id': config.client_id,
                'client_secret': config.client_secret,
                'scope': ' '.join(config.scopes),
            }
        else:
            raise OCMConnectionError(
                "Access token is expired and there is no refresh token or client "
                "credentials, run the 'ocm login' command"
            )

        self._logger.debug(f"Requesting access token from {config.token_url} "
                           f"using grant '{form['grant_type']}'")
        try:
            with httpx.Client(verify=not config.insecure, transport=self._transport) as client:
                response = client.post(config.token_url, data=form)
        except httpx.HTTPError as e:
            raise OCMConnectionError(f"Can't send request to token URL '{config.token_url}': {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}

        if response.status_code != 200:
            detail = body.get('error_description') or body.get('error') or response.text
            raise OCMConnectionError(
                f"Can't get access token, token URL returned status {response.status_code}: {detail}"
            )

        token = body.get('access_token')
        if not token or not isinstance(token, str):
            raise OCMConnectionError("Token URL response doesn't contain an access token")
        return token

    def _log_request(self, request: httpx.Request):
        self._logger.debug(f"Request method is {request.method}, URL is {request.url}")

    def _log_response(self, response: httpx.Response):
        self._logger.debug(f"Response status is {response.status_code}")


def new_connection() -> ConnectionBuilder:
    """Start building a connection to the OCM API"""
    return ConnectionBuilder()
