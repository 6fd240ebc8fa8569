"""
Polling for DynamoDB tables to reach the ACTIVE status.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

ACTIVE = 'ACTIVE'


class TablePollExhaustedError(Exception):
    """Raised when a table is still not ACTIVE after the attempt budget."""

    def __init__(self, table_name: str, region: Optional[str], last_status: Optional[str], attempts: int):
        self.table_name = table_name
        self.region = region
        self.last_status = last_status
        self.attempts = attempts
        super().__init__(
            f"Table {table_name} in region {region} is still {last_status} after {attempts} describe attempts"
        )


def client_region(client: Any) -> Optional[str]:
    """Region a boto3 client is bound to, if it exposes one."""
    meta = getattr(client, 'meta', None)
    return getattr(meta, 'region_name', None)


def wait_until_table_active(
    client: Any,
    table_name: str,
    poll_interval: float = 5,
    max_attempts: Optional[int] = None,
    sleep: Optional[Callable[[float], None]] = None
) -> Dict[str, Any]:
    """
    Block until a table is ACTIVE and return its description.

    Errors from describe_table are not retried: a missing table raises
    ResourceNotFoundException, which callers use to tell "not created" apart
    from "not ready yet".

    Args:
        client: DynamoDB client bound to the table's region
        table_name: Table to wait for
        poll_interval: Seconds to sleep between describe calls
        max_attempts: Describe calls allowed before giving up; None for no limit
        sleep: Sleep function, time.sleep when omitted

    Returns:
        The 'Table' member of the describe_table response

    Raises:
        TablePollExhaustedError: If max_attempts describes all returned a non-ACTIVE status
        botocore.exceptions.ClientError: If describe_table fails
    """
    region = client_region(client)
    logger.info(
        f"Waiting for table {table_name} in region {region} to become {ACTIVE}",
        extra={'table_name': table_name, 'region': region}
    )

    attempts = 0
    while True:
        attempts += 1
        table = client.describe_table(TableName=table_name)['Table']
        status = table.get('TableStatus')

        if status == ACTIVE:
            logger.info(
                f"Table {table_name} in region {region} is {ACTIVE}",
                extra={'table_name': table_name, 'region': region, 'attempt': attempts}
            )
            return table

        if max_attempts is not None and attempts >= max_attempts:
            raise TablePollExhaustedError(table_name, region, status, attempts)

        logger.info(
            f"   Status: {status}.  Waiting {poll_interval} seconds...",
            extra={'table_name': table_name, 'region': region, 'status': status, 'attempt': attempts}
        )
        (sleep or time.sleep)(poll_interval)
