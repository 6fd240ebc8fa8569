"""
CloudFormation custom resource response delivery.

CloudFormation waits on a pre-signed S3 URL for a single JSON document that
tells it whether the resource operation succeeded. This module builds that
document and uploads it.
"""

import json
import logging
from typing import Any, Dict, Optional

import requests

from .utils import retry

logger = logging.getLogger(__name__)

SUCCESS = "SUCCESS"
FAILED = "FAILED"


class ResponseDeliveryError(Exception):
    """Raised when the response document could not be uploaded."""
    pass


def build_response(
    event: Dict[str, Any],
    context: Any,
    status: str,
    outputs: Optional[Dict[str, Any]] = None,
    physical_resource_id: Optional[str] = None,
    reason: Optional[str] = None
) -> Dict[str, Any]:
    """
    Build the response document for a custom resource event.

    Args:
        event: Custom resource event
        context: Lambda context
        status: SUCCESS or FAILED
        outputs: Values exposed through Fn::GetAtt
        physical_resource_id: Resource id reported to CloudFormation
        reason: Human readable reason, required by CloudFormation on failure

    Returns:
        Response document
    """
    if status not in (SUCCESS, FAILED):
        raise ValueError(f"Invalid response status: {status}")

    log_stream_name = getattr(context, 'log_stream_name', None) or 'unknown'

    return {
        'Status': status,
        'Reason': reason or f"See the details in CloudWatch Log Stream: {log_stream_name}",
        'PhysicalResourceId': physical_resource_id or event.get('PhysicalResourceId') or log_stream_name,
        'StackId': event.get('StackId'),
        'RequestId': event.get('RequestId'),
        'LogicalResourceId': event.get('LogicalResourceId'),
        'NoEcho': False,
        'Data': outputs or {}
    }


def _put_response(url: str, body: str, timeout: int) -> requests.Response:
    response = requests.put(
        url,
        data=body,
        headers={'content-type': '', 'content-length': str(len(body))},
        timeout=timeout
    )
    response.raise_for_status()
    return response


def send(
    event: Dict[str, Any],
    context: Any,
    status: str,
    outputs: Optional[Dict[str, Any]] = None,
    physical_resource_id: Optional[str] = None,
    reason: Optional[str] = None,
    timeout: int = 30,
    max_tries: int = 3
) -> Dict[str, Any]:
    """
    Upload the response document to the event's ResponseURL.

    Only failures to connect are retried, since the request never reached S3
    and CloudFormation still receives exactly one response. A read timeout is
    not retried because the document may already be stored.

    Returns:
        The response document that was sent

    Raises:
        ResponseDeliveryError: If the upload failed
    """
    document = build_response(event, context, status, outputs, physical_resource_id, reason)
    body = json.dumps(document)
    url = event.get('ResponseURL')

    if not url:
        raise ResponseDeliveryError("Event has no ResponseURL")

    logger.info(f"Sending {status} response for {event.get('LogicalResourceId')}: {body}")

    try:
        response = retry(
            max_tries, 1, _put_response, url, body, timeout,
            retry_on=(requests.ConnectionError, requests.ConnectTimeout)
        )
    except requests.RequestException as e:
        logger.error(f"Failed to send response to CloudFormation: {e}")
        raise ResponseDeliveryError(str(e)) from e

    logger.info(f"CloudFormation response status code: {response.status_code}")
    return document
