# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Clusters management service: cloud provider regions"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

API_PREFIX = '/api/clusters_mgmt/v1'


class OCMError(Exception):
    """Error returned by the OCM API, or raised while talking to it"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


@dataclass(frozen=True)
class CloudRegion:
    id: str
    display_name: str
    enabled: bool
    supports_multi_az: bool
    cloud_provider: str = ''

    @classmethod
    def from_dict(cls, data: dict) -> 'CloudRegion':
        provider = data.get('cloud_provider') or {}
        return cls(
            id=data.get('id', ''),
            display_name=data.get('display_name', ''),
            enabled=bool(data.get('enabled', False)),
            supports_multi_az=bool(data.get('supports_multi_az', False)),
            cloud_provider=provider.get('id', ''),
        )


@dataclass(frozen=True)
class AWSCredentials:
    access_key_id: str = ''
    secret_access_key: str = field(default='', repr=False)


@dataclass(frozen=True)
class CCS:
    """Customer Cloud Subscription: the cluster runs in the customer's account"""
    enabled: bool = False
    aws: AWSCredentials = field(default_factory=AWSCredentials)


def _error_from_response(response: httpx.Response, action: str) -> OCMError:
    # OCM errors look like {"kind": "Error", "id": "...", "reason": "..."}
    try:
        body = response.json()
    except ValueError:
        body = None
    reason = (body.get('reason') if isinstance(body, dict) else None) or response.text
    return OCMError(f"{action}: status {response.status_code}, {reason}", status=response.status_code)


class ClustersMgmtClient:
    """Client for /api/clusters_mgmt/v1"""

    def __init__(self, http_client: httpx.Client, logger: logging.Logger):
        self._http = http_client
        self._logger = logger

    def get_regions(self, provider: str, ccs: CCS) -> List[CloudRegion]:
        """Get the regions of a cloud provider

        With CCS enabled, only the regions available to the customer's
        AWS account are returned. Regions keep the order of the API.

        Args:
            provider: Cloud provider ID (e.g., 'aws')
            ccs: Customer Cloud Subscription settings

        Returns:
            List of CloudRegion

        Raises:
            OCMError: If the request fails
        """
        base = f"{API_PREFIX}/cloud_providers/{provider}"
        try:
            if ccs.enabled:
                body = {
                    'aws': {
                        'access_key_id': ccs.aws.access_key_id,
                        'secret_access_key': ccs.aws.secret_access_key,
                    },
                }
                response = self._http.post(f"{base}/available_regions", json=body)
            else:
                response = self._http.get(f"{base}/regions")
        except httpx.HTTPError as e:
            raise OCMError(f"Can't retrieve regions for provider '{provider}': {e}") from e

        if not response.is_success:
            raise _error_from_response(response, f"Can't retrieve regions for provider '{provider}'")

        try:
            body = response.json()
        except ValueError as e:
            raise OCMError(f"Can't parse regions for provider '{provider}': {e}",
                           status=response.status_code) from e

        if not isinstance(body, dict):
            raise OCMError(f"Can't parse regions for provider '{provider}': "
                           f"expected an object, got {type(body).__name__}", status=response.status_code)

        items = body.get('items') or []
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise OCMError(f"Can't parse regions for provider '{provider}': "
                           f"expected an object with a list of regions", status=response.status_code)
        self._logger.debug(f"Retrieved {len(items)} regions for provider '{provider}'")
        return [CloudRegion.from_dict(item) for item in items]
