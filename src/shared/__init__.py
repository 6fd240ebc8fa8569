"""
Shared utilities for the global table custom resource.

This module provides centralized access to:
- AWS client creation per region
- Invocation configuration
- CloudFormation response delivery
- Logging and utility functions
"""

# AWS client factory
from .aws_client_factory import AWSClientFactory

# Configuration
from .config import InvocationConfig, ResourceProperties

# CloudFormation responses
from .cfn_response import ResponseDeliveryError

# Logging and utilities
from .logger import ResourceLogger, get_logger
from .utils import get_error_code, parse_tags, retry

__all__ = [
    # AWS client factory
    "AWSClientFactory",

    # Configuration
    "InvocationConfig",
    "ResourceProperties",

    # CloudFormation responses
    "ResponseDeliveryError",

    # Utilities
    "ResourceLogger",
    "get_logger",
    "get_error_code",
    "parse_tags",
    "retry"
]
