import argparse
from unittest.mock import patch

import pytest

from urlshortener.deploy.helper import boto3_session, parse_tags


@pytest.mark.parametrize(
    'value, expected',
    [
        ('', []),
        ('Owner=ops', [{'Key': 'Owner', 'Value': 'ops'}]),
        (' Owner = ops , CostCenter=42,', [{'Key': 'Owner', 'Value': 'ops'}, {'Key': 'CostCenter', 'Value': '42'}]),
        ('Note=a=b', [{'Key': 'Note', 'Value': 'a=b'}]),
        ('Empty=', [{'Key': 'Empty', 'Value': ''}]),
    ],
)
def test_parse_tags(value, expected):
    assert parse_tags(value) == expected


@pytest.mark.parametrize(
    'value, message',
    [
        ('Owner', 'Malformed tag'),
        ('Owner=ops,broken', 'Malformed tag.*broken'),
        ('=value', 'Malformed tag'),
        ('Owner=ops,Owner=dev', 'Duplicate tag keys: Owner'),
        ('aws:cloudformation:stack-name=x', 'reserved'),
    ],
)
def test_parse_tags_rejects_invalid(value, message):
    with pytest.raises(argparse.ArgumentTypeError, match=message):
        parse_tags(value)


@pytest.mark.parametrize(
    'profile, region, expected_kwargs',
    [
        (None, None, {}),
        ('dev', None, {'profile_name': 'dev'}),
        ('dev', 'eu-central-1', {'profile_name': 'dev', 'region_name': 'eu-central-1'}),
    ],
)
def test_boto3_session(profile, region, expected_kwargs):
    with patch('urlshortener.deploy.helper.boto3.Session') as session_mock:
        assert boto3_session(profile, region) is session_mock.return_value
    session_mock.assert_called_once_with(**expected_kwargs)
