"""
CloudFormation custom resource that provisions DynamoDB global tables.

The handler runs in every region of a stack set. In the table's origin
region it creates the table; in every other region it adds a replica to the
origin table and tags the replica locally.
"""

from .replica_manager import GlobalTableManager, ensure_primary_table
from .table_waiter import TablePollExhaustedError, wait_until_table_active

__all__ = [
    "GlobalTableManager",
    "ensure_primary_table",
    "TablePollExhaustedError",
    "wait_until_table_active",
]
