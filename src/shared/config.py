"""
Configuration management for the global table custom resource.
"""

import os
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class InvocationConfig(BaseModel):
    """Settings for a single handler invocation."""

    # AWS Configuration
    region: str = Field(..., description="Region the handler is running in")

    # Logging Configuration
    verbose: bool = Field(default=True, description="Log at INFO level when enabled, WARNING otherwise")

    # Polling Configuration
    poll_interval: float = Field(default=5, ge=0, description="Seconds between describe_table calls")
    max_poll_attempts: Optional[int] = Field(
        default=None, ge=1, description="Maximum describe_table calls per wait; None waits until the Lambda times out"
    )

    # Response Configuration
    response_timeout: int = Field(default=30, description="Timeout for the CloudFormation response PUT in seconds")

    @property
    def log_level(self) -> str:
        """Log level derived from the verbosity toggle."""
        return "INFO" if self.verbose else "WARNING"

    @classmethod
    def from_environment(cls) -> "InvocationConfig":
        """
        Create configuration from environment variables.

        Raises:
            EnvironmentError: If neither AWS_REGION nor AWS_DEFAULT_REGION is set
        """
        region = os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION")
        if not region:
            raise EnvironmentError("AWS_REGION is not set; cannot determine the invoking region")

        max_attempts = os.environ.get("MAX_POLL_ATTEMPTS", "").strip()

        return cls(
            region=region,
            # Unset means verbose
            verbose=os.environ.get("LOG", "true").lower() == "true",
            poll_interval=float(os.environ.get("POLL_INTERVAL_SECONDS", "5")),
            max_poll_attempts=int(max_attempts) if max_attempts and int(max_attempts) > 0 else None,
            response_timeout=int(os.environ.get("RESPONSE_TIMEOUT", "30"))
        )


def raw_properties(event: Dict[str, Any]) -> Dict[str, Any]:
    """Return the event's ResourceProperties, or an empty dict when it is not a mapping."""
    properties = event.get("ResourceProperties")
    return properties if isinstance(properties, dict) else {}


class ResourceProperties(BaseModel):
    """Properties CloudFormation passes to the global table resource."""

    TableName: str = Field(..., min_length=3, max_length=255, description="DynamoDB table name")
    OriginalPrimaryRegion: str = Field(..., description="Region holding the origin table")
    Tags: List[Optional[str]] = Field(default_factory=list, description="Tags as 'key=value' strings")

    @classmethod
    def from_event(cls, event: dict) -> "ResourceProperties":
        """Parse the ResourceProperties member of a custom resource event."""
        properties = dict(raw_properties(event))
        # ServiceToken is added by CloudFormation and is not a table property
        properties.pop("ServiceToken", None)
        if properties.get("Tags") is None:
            properties.pop("Tags", None)
        return cls(**properties)
