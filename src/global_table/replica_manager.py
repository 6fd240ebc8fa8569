"""
Global Table Replica Manager

Create and delete logic for a DynamoDB global table (2019.11.21 replication).

The origin table always lives in OriginalPrimaryRegion. Replicas are added by
calling update_table on the origin table, and DynamoDB refuses to delete the
origin table while any replica remains, so every create begins by making sure
the origin table exists and is ACTIVE. Each step looks before it acts, which
lets CloudFormation retry an event safely.
"""

import json
from typing import Any, Dict, List, Optional

from botocore.exceptions import ClientError

from shared.config import InvocationConfig, ResourceProperties, raw_properties
from shared.logger import ResourceLogger
from shared.utils import get_error_code, parse_tags

from .schema import DEFAULT_TABLE_SCHEMA, build_table_schema
from .table_waiter import client_region, wait_until_table_active

TABLE_NOT_FOUND = 'ResourceNotFoundException'


def ensure_primary_table(
    origin_client: Any,
    table_name: str,
    schema_template: Dict[str, Any],
    tags: List[Dict[str, str]],
    poll_interval: float = 5,
    max_attempts: Optional[int] = None,
    logger: Optional[ResourceLogger] = None
) -> Dict[str, Any]:
    """
    Make sure the origin table exists and is ACTIVE, creating it if missing.

    Args:
        origin_client: DynamoDB client bound to the origin region
        table_name: Table name from the event
        schema_template: create_table arguments used as a template
        tags: Parsed tag dictionaries
        poll_interval: Seconds between describe calls
        max_attempts: Describe budget per wait
        logger: Logger carrying the request context

    Returns:
        The ACTIVE table description
    """
    logger = logger or ResourceLogger(__name__, table_name=table_name)
    schema = build_table_schema(schema_template, table_name, tags)
    region = client_region(origin_client)

    try:
        return wait_until_table_active(origin_client, table_name, poll_interval, max_attempts)
    except ClientError as e:
        if get_error_code(e) != TABLE_NOT_FOUND:
            raise
        logger.info(
            f"The table doesn't exist in the original primary region {region}. Creating...",
            region=region
        )

    response = origin_client.create_table(**schema)
    logger.log_api_call('CreateTable', region, response)

    return wait_until_table_active(origin_client, table_name, poll_interval, max_attempts)


class GlobalTableManager:
    """Brings a global table to the state requested by a custom resource event."""

    def __init__(
        self,
        config: InvocationConfig,
        local_client: Any,
        origin_client: Any,
        schema: Optional[Dict[str, Any]] = None,
        logger: Optional[ResourceLogger] = None
    ):
        self.config = config
        self.local_client = local_client
        self.origin_client = origin_client
        self.schema = schema or DEFAULT_TABLE_SCHEMA
        self.logger = logger or ResourceLogger(__name__, level=config.log_level, region=config.region)

    def _wait(self, client: Any, table_name: str) -> Dict[str, Any]:
        return wait_until_table_active(
            client, table_name, self.config.poll_interval, self.config.max_poll_attempts
        )

    @staticmethod
    def _outputs(table: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'TableArn': table.get('TableArn'),
            'TableStreamArn': table.get('LatestStreamArn'),
        }

    def process_create(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """
        Handle a Create event.

        Args:
            event: Custom resource event

        Returns:
            Outputs with TableArn and TableStreamArn of the table in this region
        """
        properties = ResourceProperties.from_event(event)
        table_name = properties.TableName
        origin_region = properties.OriginalPrimaryRegion
        tags = parse_tags(properties.Tags)
        logger = self.logger.bind(table_name=table_name)

        logger.info(f"Original Primary Region: {origin_region}")

        origin_table = ensure_primary_table(
            self.origin_client,
            table_name,
            self.schema,
            tags,
            self.config.poll_interval,
            self.config.max_poll_attempts,
            logger
        )

        if self.config.region == origin_region:
            return self._outputs(origin_table)

        replicas = origin_table.get('Replicas') or []
        if not any(replica.get('RegionName') == self.config.region for replica in replicas):
            self._create_replica_and_wait(table_name, logger)
        else:
            logger.info(f"Replica already registered on the origin table for {self.config.region}")

        local_table = self._wait(self.local_client, table_name)

        # Tags are not copied from the origin table to a new replica
        self._tag_resource(local_table['TableArn'], tags, logger)

        return self._outputs(local_table)

    def _create_replica_and_wait(self, table_name: str, logger: ResourceLogger) -> Dict[str, Any]:
        """Add this region as a replica of the origin table and wait for it to settle."""
        params = {
            'TableName': table_name,
            'ReplicaUpdates': [
                {'Create': {'RegionName': self.config.region}}
            ]
        }
        logger.info(f"Creating replica with these params: {json.dumps(params)}")

        response = self.origin_client.update_table(**params)
        logger.log_api_call('UpdateTable', client_region(self.origin_client), response)

        return self._wait(self.origin_client, table_name)

    def _tag_resource(self, arn: str, tags: List[Dict[str, str]], logger: ResourceLogger):
        """Apply tags to the table in this region."""
        region = client_region(self.local_client)
        if not tags:
            logger.info(f"No tags to apply to {arn}")
            return

        logger.info(f"Tagging resource {arn} in region {region} to {json.dumps(tags)}")
        response = self.local_client.tag_resource(ResourceArn=arn, Tags=tags)
        logger.log_api_call('TagResource', region, response)

    def process_delete(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """
        Handle a Delete event by removing the table in this region.

        Failures are logged and reported as success so a stack deletion is never
        blocked by this resource. A missing table is the expected case after a
        retry. Anything else (the origin table still has replicas, access denied,
        throttling) is logged as a warning and left for an operator.

        Returns:
            Empty outputs
        """
        table_name = raw_properties(event).get('TableName')
        logger = self.logger.bind(table_name=table_name)
        region = client_region(self.local_client) or self.config.region

        try:
            table_name = ResourceProperties.from_event(event).TableName
            self._wait(self.local_client, table_name)
            response = self.local_client.delete_table(TableName=table_name)
            logger.log_api_call('DeleteTable', region, response)
        except Exception as e:
            error_code = get_error_code(e)
            if error_code == TABLE_NOT_FOUND:
                logger.info(f"Table {table_name} is already deleted in {region}", error_code=error_code)
            else:
                logger.warning(
                    f"Could not delete table {table_name} in {region}; continuing with delete",
                    exc_info=True,
                    error_code=error_code or type(e).__name__
                )

        return {}
