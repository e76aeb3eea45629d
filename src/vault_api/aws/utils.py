"""AWS client construction for the vault's two stores."""
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config

from vault_api.settings import LOCAL_MODES, Settings, get_settings

logger = logging.getLogger(__name__)


class AWSClientManager:
    """Builds and caches boto3 clients/resources configured from settings.

    One manager belongs to one application instance, so tests can build
    an app per test without leaking clients between them.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.region = self.settings.aws_region
        self.endpoint_url = self.settings.aws_endpoint_url
        self.mode = self.settings.deployment_mode
        self._clients: Dict[str, Any] = {}
        self._resources: Dict[str, Any] = {}

        logger.info("Initializing AWSClientManager")
        logger.info(f"  Mode: {self.mode}")
        logger.info(f"  Region: {self.region}")
        logger.info(f"  Endpoint: {self.endpoint_url}")

    def _boto_config(self) -> Config:
        # Failed store calls surface immediately; no SDK-level retry loop
        return Config(
            connect_timeout=self.settings.store_connect_timeout,
            read_timeout=self.settings.store_read_timeout,
            retries={"total_max_attempts": self.settings.store_max_attempts, "mode": "standard"},
        )

    def _client_kwargs(self) -> Dict[str, Any]:
        client_kwargs: Dict[str, Any] = {
            "region_name": self.region,
            "config": self._boto_config(),
        }

        if self.settings.aws_access_key_id:
            client_kwargs["aws_access_key_id"] = self.settings.aws_access_key_id
        if self.settings.aws_secret_access_key:
            client_kwargs["aws_secret_access_key"] = self.settings.aws_secret_access_key

        # Endpoint override only for local/mock modes
        if self.endpoint_url and self.mode in LOCAL_MODES:
            client_kwargs["endpoint_url"] = self.endpoint_url

        return client_kwargs

    def get_client(self, service_name: str) -> Any:
        """Get or create an AWS service client."""
        if service_name in self._clients:
            return self._clients[service_name]

        try:
            client = boto3.client(service_name, **self._client_kwargs())
        except Exception as e:
            logger.error(f"Error creating {service_name} client: {str(e)}")
            raise
        self._clients[service_name] = client
        logger.debug(f"Created {service_name} client")
        return client

    def get_resource(self, service_name: str) -> Any:
        """Get or create an AWS service resource."""
        if service_name in self._resources:
            return self._resources[service_name]

        try:
            resource = boto3.resource(service_name, **self._client_kwargs())
        except Exception as e:
            logger.error(f"Error creating {service_name} resource: {str(e)}")
            raise
        self._resources[service_name] = resource
        logger.debug(f"Created {service_name} resource")
        return resource

    def s3_client(self):
        """Get the S3 client."""
        return self.get_client("s3")

    def dynamodb_resource(self):
        """Get the DynamoDB resource."""
        return self.get_resource("dynamodb")
