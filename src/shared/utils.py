"""
Utility functions for the global table custom resource.
"""

import logging
import time
from typing import Any, Callable, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


def parse_tags(tags: Optional[Iterable[Optional[str]]]) -> List[Dict[str, str]]:
    """
    Convert 'key=value' strings into DynamoDB tag dictionaries.

    Blank and falsy entries are dropped. Each entry is split on the first '='
    and both sides are trimmed, so values may themselves contain '='.

    Args:
        tags: Sequence of 'key=value' strings, possibly with None or '' entries

    Returns:
        List of {'Key': ..., 'Value': ...} dictionaries in input order

    Raises:
        ValueError: If a non-blank entry has no '=' or an empty key
    """
    parsed = []

    for tag in tags or []:
        if not tag or not tag.strip():
            continue

        key, separator, value = tag.partition('=')
        key = key.strip()
        if not separator or not key:
            raise ValueError(f"Invalid tag '{tag}': expected 'key=value'")

        parsed.append({'Key': key, 'Value': value.strip()})

    return parsed


def get_error_code(error: BaseException) -> Optional[str]:
    """
    Extract the AWS error code from a botocore ClientError.

    Args:
        error: Any exception

    Returns:
        The 'Error.Code' of the response, or None for non-AWS errors
    """
    response = getattr(error, 'response', None)
    if not isinstance(response, dict):
        return None
    return response.get('Error', {}).get('Code')


def retry(
    max_tries: int,
    wait_seconds: float,
    func: Callable[..., Any],
    *args,
    retry_on: tuple = (Exception,),
    sleep: Optional[Callable[[float], None]] = None,
    **kwargs
) -> Any:
    """
    Call a function, retrying a bounded number of times on failure.

    Args:
        max_tries: Total number of calls to attempt (at least 1)
        wait_seconds: Delay between attempts
        func: Callable to invoke with *args and **kwargs
        retry_on: Exception types that trigger another attempt
        sleep: Sleep function, time.sleep when omitted

    Returns:
        The first successful return value of func

    Raises:
        The last exception raised by func once max_tries is reached
    """
    if max_tries < 1:
        raise ValueError("max_tries must be at least 1")

    for attempt in range(1, max_tries + 1):
        try:
            return func(*args, **kwargs)
        except retry_on as e:
            if attempt == max_tries:
                raise
            logger.warning(
                f"Attempt {attempt}/{max_tries} failed: {e}. Waiting {wait_seconds}s and trying again",
                extra={'attempt': attempt}
            )
            (sleep or time.sleep)(wait_seconds)
