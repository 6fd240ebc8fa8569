"""
AWS Client Factory - Per-region AWS client creation and configuration

This module provides:
- Consistent retry and timeout configuration for every client
- One client per (service, region) pair, reused for the whole invocation
- Error handling around client construction
"""

import boto3
import logging
from typing import Optional, Dict, Any
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError, NoCredentialsError

logger = logging.getLogger(__name__)


class AWSClientFactory:
    """
    Factory for region-bound AWS clients.

    A global table handler talks to the same service in two regions (the
    invoking region and the table's origin region). The factory hands out one
    client per region and returns the very same object when both regions are
    equal, so polling and mutation share a connection pool.
    """

    # Default configuration for all AWS clients
    DEFAULT_CONFIG = {
        'retries': {
            'max_attempts': 3,
            'mode': 'adaptive'
        },
        'max_pool_connections': 10,
        'connect_timeout': 10,
        'read_timeout': 30
    }

    # Service-specific configurations
    SERVICE_CONFIGS = {
        'dynamodb': {
            'retries': {
                'max_attempts': 5,
                'mode': 'adaptive'
            }
        }
    }

    def __init__(self, region_name: Optional[str] = None):
        """
        Initialize the AWS Client Factory.

        Args:
            region_name: Default region for clients. If None, boto3 resolves it.
        """
        self.region_name = region_name
        self._clients: Dict[str, Any] = {}

    def _get_client_config(self, service_name: str, region_name: Optional[str] = None) -> BotoConfig:
        """
        Get configuration for a specific AWS service.

        Args:
            service_name: Name of the AWS service
            region_name: Region the client is bound to

        Returns:
            BotoConfig object with service-specific settings
        """
        config_dict = dict(self.DEFAULT_CONFIG)

        client_region = region_name or self.region_name
        if client_region:
            config_dict['region_name'] = client_region

        if service_name in self.SERVICE_CONFIGS:
            config_dict.update(self.SERVICE_CONFIGS[service_name])

        return BotoConfig(**config_dict)

    def get_client(self, service_name: str, region_name: Optional[str] = None) -> Any:
        """
        Get an AWS client for the specified service and region.

        Args:
            service_name: Name of the AWS service (e.g. 'dynamodb')
            region_name: Override region for this specific client

        Returns:
            Configured AWS client

        Raises:
            ClientError: If client creation fails
            NoCredentialsError: If AWS credentials are not available
        """
        client_region = region_name or self.region_name
        cache_key = f"{service_name}_{client_region or 'default'}"

        if cache_key in self._clients:
            return self._clients[cache_key]

        try:
            config = self._get_client_config(service_name, client_region)
            client = boto3.client(service_name, config=config)
            self._clients[cache_key] = client

            logger.debug(f"Created AWS {service_name} client for region {client_region or 'default'}")
            return client

        except NoCredentialsError:
            logger.error(f"AWS credentials not found for {service_name} client")
            raise
        except ClientError as e:
            logger.error(f"Failed to create {service_name} client: {e}")
            raise
        except Exception as e:
            logger.error(f"Unexpected error creating {service_name} client: {e}")
            raise ClientError(
                error_response={'Error': {'Code': 'ClientCreationError', 'Message': str(e)}},
                operation_name='CreateClient'
            )

    def get_dynamodb_client(self, region_name: Optional[str] = None) -> Any:
        """Get the DynamoDB client bound to a region."""
        return self.get_client('dynamodb', region_name)
