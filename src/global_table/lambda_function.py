"""
Global Table Custom Resource Lambda Function

Entry point for the CloudFormation custom resource. Resolves the DynamoDB
clients for the invoking region and the table's origin region, dispatches on
RequestType and sends exactly one response back to CloudFormation.

Environment variables:
    AWS_REGION             set by Lambda; the invoking region
    LOG                    default: true (verbose logging unless 'false')
    POLL_INTERVAL_SECONDS  default: 5
    MAX_POLL_ATTEMPTS      default: unset (wait until the Lambda times out)
    RESPONSE_TIMEOUT       default: 30
"""

import json
import logging
from typing import Any, Dict, Optional

from shared import cfn_response
from shared.aws_client_factory import AWSClientFactory
from shared.config import InvocationConfig, raw_properties
from shared.logger import ResourceLogger, get_logger

from .replica_manager import GlobalTableManager


def report_exception(exc: BaseException, event: Dict[str, Any], context: Any, logger: ResourceLogger):
    """Record an unhandled failure with the event and invocation it belongs to."""
    logger.error(
        f"Unhandled {type(exc).__name__}: {exc}; event={json.dumps(event, default=str)} "
        f"aws_request_id={getattr(context, 'aws_request_id', None)}",
        exc_info=(type(exc), exc, exc.__traceback__)
    )


def build_manager(
    event: Dict[str, Any],
    config: InvocationConfig,
    client_factory: AWSClientFactory,
    logger: ResourceLogger
) -> GlobalTableManager:
    """Create the manager with the local and origin region clients."""
    origin_region = raw_properties(event).get('OriginalPrimaryRegion') or config.region

    local_client = client_factory.get_dynamodb_client(config.region)
    # Same region returns the cached client rather than a second one
    origin_client = client_factory.get_dynamodb_client(origin_region)

    return GlobalTableManager(config, local_client, origin_client, logger=logger)


def process_event(
    event: Dict[str, Any],
    context: Any,
    config: Optional[InvocationConfig] = None,
    client_factory: Optional[AWSClientFactory] = None,
    manager: Optional[GlobalTableManager] = None
) -> Dict[str, Any]:
    """
    Process a custom resource event and respond to CloudFormation.

    Args:
        event: Custom resource event
        context: Lambda context
        config: Invocation settings; read from the environment when omitted
        client_factory: Factory for region clients
        manager: Pre-built manager, mainly for tests

    Returns:
        The response document sent to CloudFormation
    """
    request_type = event.get('RequestType')
    properties = raw_properties(event)
    outputs: Dict[str, Any] = {}

    logger = ResourceLogger(
        __name__,
        table_name=properties.get('TableName'),
        request_type=request_type,
        request_id=event.get('RequestId')
    )
    physical_resource_id = event.get('PhysicalResourceId') or properties.get('TableName')

    try:
        config = config or InvocationConfig.from_environment()
        # Module loggers propagate to the Lambda root logger
        logging.getLogger().setLevel(config.log_level)
        get_logger(__name__, config.log_level)
        logger = logger.bind(region=config.region)

        if manager is None:
            manager = build_manager(event, config, client_factory or AWSClientFactory(config.region), logger)

        logger.info(f"Processing {request_type}")

        if request_type == 'Create':
            outputs = manager.process_create(event)
            logger.info(f"outputs {json.dumps(outputs)}")
        elif request_type == 'Delete':
            outputs = manager.process_delete(event)
            logger.info(f"outputs {json.dumps(outputs)}")
        else:
            logger.warning(f"No action taken for request type {request_type}")

    except Exception as e:
        report_exception(e, event, context, logger)
        return cfn_response.send(
            event, context, cfn_response.FAILED, outputs,
            physical_resource_id=physical_resource_id,
            reason=f"{type(e).__name__}: {e}"[:1000],
            timeout=config.response_timeout if config else 30
        )

    return cfn_response.send(
        event, context, cfn_response.SUCCESS, outputs,
        physical_resource_id=physical_resource_id,
        timeout=config.response_timeout
    )


def lambda_handler(event, context):
    """
    Lambda handler for the global table custom resource.

    Args:
        event: CloudFormation custom resource event
        context: Lambda context

    Returns:
        The response document sent to CloudFormation
    """
    return process_event(event, context)
