"""
Pytest configuration with shared fixtures and path setup.
Eliminates duplicate test setup across test files.
"""
import pytest
import sys
import os
from pathlib import Path
from unittest.mock import Mock, patch

# Ensure src is in path for all tests
test_root = Path(__file__).parent
project_root = test_root.parent
src_path = project_root / 'src'

for path in (src_path, project_root):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from shared.config import InvocationConfig
from tests.support.mock_configs import MockDynamoDBClients, MockEvents


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Automatically setup test environment for all tests."""
    test_env = {
        'AWS_REGION': 'us-east-1',
        'AWS_DEFAULT_REGION': 'us-east-1',
        'AWS_ACCESS_KEY_ID': 'testing',
        'AWS_SECRET_ACCESS_KEY': 'testing',
        'AWS_SESSION_TOKEN': 'testing',
        'LOG': 'true',
        'POLL_INTERVAL_SECONDS': '0'
    }

    # Store original values
    original_env = {}
    for key, value in test_env.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    # Restore original values
    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


@pytest.fixture
def origin_config():
    """Configuration for an invocation in the origin region."""
    return InvocationConfig(region='us-east-1', poll_interval=0)


@pytest.fixture
def replica_config():
    """Configuration for an invocation in a secondary region."""
    return InvocationConfig(region='eu-west-1', poll_interval=0)


@pytest.fixture
def lambda_context():
    """Mock Lambda context."""
    return MockEvents.create_context()


@pytest.fixture
def mock_response_put():
    """Capture the CloudFormation response upload."""
    with patch('shared.cfn_response.requests.put') as mock_put:
        mock_put.return_value = Mock(status_code=200)
        yield mock_put


@pytest.fixture
def dynamodb_mocks():
    """Factory and helpers for mock DynamoDB clients."""
    return MockDynamoDBClients
