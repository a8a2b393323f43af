#!/usr/bin/env python3
# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Tests for the AWS client and admin user access keys"""

import logging
import sys
import os

import boto3
import pytest
from moto import mock_aws

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from rosactl.aws.client import (
    ADMIN_USER_NAME,
    DEFAULT_REGION,
    AccessKey,
    AWSClientError,
    new_client,
)


@pytest.fixture
def aws_credentials(monkeypatch):
    """Dummy credentials so nothing reaches a real account"""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', DEFAULT_REGION)


@pytest.fixture
def mocked_aws(aws_credentials):
    with mock_aws():
        yield boto3.client('iam', region_name=DEFAULT_REGION)


def _build():
    return new_client().logger(logging.getLogger('test')).region(DEFAULT_REGION).build()


def test_defaults():
    assert DEFAULT_REGION == 'us-east-1'
    assert ADMIN_USER_NAME == 'osdCcsAdmin'


def test_build_validates_identity(mocked_aws):
    client = _build()

    assert client.region == DEFAULT_REGION
    assert 'Account' in client.get_caller_identity()


def test_access_keys_replace_existing_ones(mocked_aws):
    iam = mocked_aws
    iam.create_user(UserName=ADMIN_USER_NAME)
    old_ids = {iam.create_access_key(UserName=ADMIN_USER_NAME)['AccessKey']['AccessKeyId'] for _ in range(2)}

    key = _build().get_aws_access_keys()

    assert isinstance(key, AccessKey)
    assert key.access_key_id not in old_ids
    assert key.secret_access_key
    remaining = iam.list_access_keys(UserName=ADMIN_USER_NAME)['AccessKeyMetadata']
    assert [k['AccessKeyId'] for k in remaining] == [key.access_key_id]


def test_access_keys_are_created_once_per_client(mocked_aws):
    mocked_aws.create_user(UserName=ADMIN_USER_NAME)
    client = _build()

    first = client.get_aws_access_keys()
    second = client.get_aws_access_keys()

    assert first is second
    assert len(mocked_aws.list_access_keys(UserName=ADMIN_USER_NAME)['AccessKeyMetadata']) == 1


def test_missing_admin_user(mocked_aws):
    client = _build()
    with pytest.raises(AWSClientError, match=ADMIN_USER_NAME):
        client.get_aws_access_keys()


def test_build_without_credentials(monkeypatch, tmp_path):
    for name in ('AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY', 'AWS_SESSION_TOKEN',
                 'AWS_SECURITY_TOKEN', 'AWS_PROFILE', 'AWS_DEFAULT_PROFILE'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('AWS_SHARED_CREDENTIALS_FILE', str(tmp_path / 'credentials'))
    monkeypatch.setenv('AWS_CONFIG_FILE', str(tmp_path / 'config'))
    monkeypatch.setenv('AWS_EC2_METADATA_DISABLED', 'true')

    with pytest.raises(AWSClientError, match='No AWS credentials'):
        _build()


def test_secret_hidden_from_repr():
    assert 'hidden' not in repr(AccessKey('AKIAEXAMPLE', 'hidden'))
