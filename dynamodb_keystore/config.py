import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .models import AttributeNames, ReadConsistency
from .utils.versioning import DEFAULT_VERSION_SCHEME, VERSION_SCHEMES

# Load environment variables from .env file if it exists
load_dotenv()


class DynamoDBConfig(BaseModel):
    """Configuration for the DynamoDB connection and keystore behaviour."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        description="AWS region name"
    )

    # DynamoDB specific settings
    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="DynamoDB endpoint URL (for local development)"
    )

    # Table configuration
    table_prefix: str = Field(
        default_factory=lambda: os.getenv("DYNAMODB_TABLE_PREFIX", ""),
        description="Prefix to add to all table names"
    )

    table_name: str = Field(
        default_factory=lambda: os.getenv("KEYSTORE_TABLE_NAME", "keystore"),
        description="Base name of the shared keystore table"
    )

    attribute_name_keyspace: str = Field(default="keyspace", description="Partition key attribute name")
    attribute_name_key: str = Field(default="key", description="Sort key attribute name")
    attribute_name_value: str = Field(default="value", description="Value attribute name")
    attribute_name_version: str = Field(default="version", description="Version attribute name")

    # Keystore behaviour
    read_consistency: ReadConsistency = Field(
        default_factory=lambda: os.getenv("KEYSTORE_READ_CONSISTENCY", ReadConsistency.STRONG.value),
        description="Consistency mode for every keyspace read (strong or eventual)"
    )

    version_scheme: str = Field(
        default_factory=lambda: os.getenv("KEYSTORE_VERSION_SCHEME", DEFAULT_VERSION_SCHEME),
        description="How version tokens are derived from values (hashcode or digest)"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=50,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="Number of retry attempts made by the boto3 client"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Request timeout in seconds"
    )

    # Environment settings
    environment: str = Field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "dev"),
        description="Current environment (dev, test, staging, prod)"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("DYNAMODB_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for keystore operations"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_environments = ['dev', 'test', 'staging', 'prod']
        if v not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v

    @field_validator('table_name')
    @classmethod
    def validate_table_name(cls, v):
        """Validate keystore table name."""
        if not v:
            raise ValueError("Keystore table name is required")
        return v

    @field_validator('version_scheme')
    @classmethod
    def validate_version_scheme(cls, v):
        """Validate version scheme name."""
        if v not in VERSION_SCHEMES:
            raise ValueError(f"Version scheme must be one of: {sorted(VERSION_SCHEMES)}")
        return v

    @model_validator(mode='after')
    def validate_attribute_names(self):
        """Attribute names must be usable as one AttributeNames set."""
        self.get_attribute_names()
        return self

    def get_table_name(self, base_name: Optional[str] = None) -> str:
        """Get the full table name with prefix and environment.

        Args:
            base_name: Base table name, defaults to the configured keystore table

        Returns:
            Full table name with prefix and environment
        """
        parts = []

        if self.table_prefix:
            parts.append(self.table_prefix)

        if self.environment != "prod":
            parts.append(self.environment)

        parts.append(base_name or self.table_name)

        return "_".join(parts)

    def get_attribute_names(self) -> AttributeNames:
        """Get the configured attribute names as a validated AttributeNames."""
        return AttributeNames(
            keyspace=self.attribute_name_keyspace,
            key=self.attribute_name_key,
            value=self.attribute_name_value,
            version=self.attribute_name_version,
        )

    @classmethod
    def from_env(cls) -> 'DynamoDBConfig':
        """Create configuration from environment variables.

        Returns:
            DynamoDBConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls) -> 'DynamoDBConfig':
        """Create configuration for local DynamoDB development.

        Returns:
            DynamoDBConfig instance configured for local development
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url="http://localhost:8000",
            environment="dev",
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True,
        validate_default=True
    )
