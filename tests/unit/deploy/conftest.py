from datetime import datetime, UTC
from unittest.mock import MagicMock

import pytest


class NotFoundException(Exception):
    pass


@pytest.fixture
def rg_client():
    client = MagicMock()
    client.exceptions.NotFoundException = NotFoundException
    return client


@pytest.fixture
def cfn_client():
    client = MagicMock()
    client.describe_stack_events.return_value = {
        'StackEvents': [
            {
                'EventId': 'e2',
                'Timestamp': datetime(2099, 1, 1, 12, 0, 5, tzinfo=UTC),
                'LogicalResourceId': 'WebApp',
                'ResourceStatus': 'CREATE_COMPLETE',
            },
            {
                'EventId': 'e1',
                'Timestamp': datetime(2099, 1, 1, 12, 0, 0, tzinfo=UTC),
                'LogicalResourceId': 'HostingPlan',
                'ResourceStatus': 'CREATE_IN_PROGRESS',
                'ResourceStatusReason': 'Resource creation Initiated',
            },
        ]
    }
    client.describe_change_set.return_value = {
        'Changes': [{'ResourceChange': {'Action': 'Add', 'LogicalResourceId': 'WebApp', 'ResourceType': 'AWS::ElasticBeanstalk::Environment'}}]
    }
    return client
