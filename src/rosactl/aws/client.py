# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""AWS client: caller validation and access keys for the CCS admin user"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

DEFAULT_REGION = 'us-east-1'

# IAM user that OCM uses to manage resources in the customer's account
ADMIN_USER_NAME = 'osdCcsAdmin'


class AWSClientError(Exception):
    """Raised when an AWS operation fails"""


@dataclass(frozen=True)
class AccessKey:
    access_key_id: str
    secret_access_key: str = field(repr=False)


class AWSClient:
    """Wraps the boto3 session used by rosactl"""

    def __init__(self, session: boto3.session.Session, logger: logging.Logger):
        self._session = session
        self._logger = logger
        self._iam = session.client('iam')
        self._access_key: Optional[AccessKey] = None

    @property
    def region(self) -> str:
        return self._session.region_name

    def get_caller_identity(self) -> dict:
        """Get the identity of the current AWS credentials

        Raises:
            AWSClientError: If the credentials are missing or invalid
        """
        try:
            identity = self._session.client('sts').get_caller_identity()
        except (BotoCoreError, ClientError) as e:
            raise AWSClientError(f"Can't get caller identity: {e}") from e
        self._logger.debug(f"Using AWS identity {identity['Arn']}")
        return identity

    def get_aws_access_keys(self) -> AccessKey:
        """Get access keys for the admin user

        Secrets of existing keys can't be retrieved again, so the user's
        current keys are deleted and a new one is created. The key is
        kept for the lifetime of this client.

        Returns:
            AccessKey

        Raises:
            AWSClientError: If the keys can't be replaced
        """
        if self._access_key is not None:
            return self._access_key

        try:
            self._delete_access_keys(ADMIN_USER_NAME)
            response = self._iam.create_access_key(UserName=ADMIN_USER_NAME)
        except (BotoCoreError, ClientError) as e:
            raise AWSClientError(f"Can't create access key for user '{ADMIN_USER_NAME}': {e}") from e

        key = response['AccessKey']
        self._access_key = AccessKey(
            access_key_id=key['AccessKeyId'],
            secret_access_key=key['SecretAccessKey'],
        )
        self._logger.debug(f"Created access key {key['AccessKeyId']} for user '{ADMIN_USER_NAME}'")
        return self._access_key

    def _delete_access_keys(self, user_name: str):
        paginator = self._iam.get_paginator('list_access_keys')
        for page in paginator.paginate(UserName=user_name):
            for metadata in page.get('AccessKeyMetadata', []):
                self._logger.debug(f"Deleting access key {metadata['AccessKeyId']} of user '{user_name}'")
                self._iam.delete_access_key(UserName=user_name, AccessKeyId=metadata['AccessKeyId'])


class AWSClientBuilder:
    """Builds an AWSClient from the default credential chain"""

    def __init__(self):
        self._logger = logging.getLogger(__name__)
        self._region = DEFAULT_REGION

    def logger(self, logger: logging.Logger) -> 'AWSClientBuilder':
        self._logger = logger
        return self

    def region(self, region: str) -> 'AWSClientBuilder':
        self._region = region
        return self

    def build(self) -> AWSClient:
        """Create the client and check that the credentials work

        Raises:
            AWSClientError: If no usable credentials are found
        """
        try:
            session = boto3.session.Session(region_name=self._region)
        except BotoCoreError as e:
            raise AWSClientError(f"Can't create AWS session: {e}") from e

        if session.get_credentials() is None:
            raise AWSClientError("No AWS credentials found, configure them with 'aws configure'")

        client = AWSClient(session, self._logger)
        client.get_caller_identity()
        return client


def new_client() -> AWSClientBuilder:
    """Start building an AWS client"""
    return AWSClientBuilder()
