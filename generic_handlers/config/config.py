import os
from enum import Enum
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# .env values fill in anything not already set in the process environment
load_dotenv()

ENVIRONMENTS = ("dev", "test", "staging", "prod")


class ErrorDetail(str, Enum):
    """How much of a failure is written into the wire-visible ErrorMessage."""
    FULL = "full"          # formatted traceback, the legacy behavior
    MESSAGE = "message"    # exception type and message, no traceback
    GENERIC = "generic"    # fixed text from generic_error_message


class HandlerConfig(BaseModel):
    """Configuration for generic handlers and the DynamoDB data-operation backend."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID (boto3 credential chain when unset)"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key (boto3 credential chain when unset)"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        validate_default=True,
        description="AWS region of the DynamoDB tables"
    )

    # Table naming and endpoint
    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="Endpoint override for DynamoDB Local or LocalStack"
    )

    table_prefix: str = Field(
        default_factory=lambda: os.getenv("DYNAMODB_TABLE_PREFIX", ""),
        description="Prefix joined to every table name"
    )

    # botocore client settings
    max_pool_connections: int = Field(
        default=50,
        description="botocore connection pool size per gateway"
    )

    retries: int = Field(
        default=3,
        description="botocore retry attempts; handlers themselves never retry"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="botocore connect and read timeout in seconds"
    )

    # Deployment
    environment: str = Field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "dev"),
        validate_default=True,
        description="Deployment environment, one of ENVIRONMENTS; joined to table names outside prod"
    )

    # Error reporting
    error_detail: ErrorDetail = Field(
        default_factory=lambda: os.getenv("HANDLER_ERROR_DETAIL", ErrorDetail.FULL.value),
        validate_default=True,
        description="Detail level written to ErrorMessage on failure (full, message, generic)"
    )

    generic_error_message: str = Field(
        default="An error occurred while processing the request",
        description="ErrorMessage text used when error_detail is 'generic'"
    )

    # Logging
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("HANDLER_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for handlers and data operations"
    )

    @field_validator('region_name')
    @classmethod
    def region_required(cls, v):
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('environment')
    @classmethod
    def known_environment(cls, v):
        if v not in ENVIRONMENTS:
            raise ValueError(f"Environment must be one of: {list(ENVIRONMENTS)}")
        return v

    @field_validator('error_detail', mode='before')
    @classmethod
    def normalize_error_detail(cls, v):
        """Accept error detail names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def get_table_name(self, base_name: str) -> str:
        """Full table name: ``{prefix}_{environment}_{base_name}``.

        Empty prefixes are skipped and prod tables carry no environment part.
        """
        parts = [self.table_prefix] if self.table_prefix else []
        if self.environment != "prod":
            parts.append(self.environment)
        return "_".join(parts + [base_name])

    @classmethod
    def from_env(cls) -> 'HandlerConfig':
        """Configuration read from the process environment (and ``.env``)."""
        return cls()

    @classmethod
    def for_local_development(cls) -> 'HandlerConfig':
        """Configuration pointing at DynamoDB Local on port 8000, debug logging on."""
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
    )
