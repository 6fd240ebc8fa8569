"""Shared test utilities for the global table custom resource."""
from .mock_configs import MockDynamoDBClients, MockEvents, stream_arn, table_arn

__all__ = ['MockDynamoDBClients', 'MockEvents', 'stream_arn', 'table_arn']
