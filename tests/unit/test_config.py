import os
from unittest.mock import patch

import pytest

from generic_handlers.config import ErrorDetail, HandlerConfig


class TestHandlerConfig:
    """Test cases for HandlerConfig."""

    def test_default_config(self):
        """Test default configuration values."""
        with patch.dict(os.environ, {"AWS_REGION": "us-west-2"}, clear=True):
            config = HandlerConfig()

            assert config.region_name == "us-west-2"
            assert config.max_pool_connections == 50
            assert config.retries == 3
            assert config.timeout_seconds == 30.0
            assert config.environment == "dev"
            assert config.error_detail == ErrorDetail.FULL
            assert config.enable_debug_logging is False

    def test_config_from_env_vars(self):
        """Test configuration from environment variables."""
        env_vars = {
            "AWS_ACCESS_KEY_ID": "test_key",
            "AWS_SECRET_ACCESS_KEY": "test_secret",
            "AWS_REGION": "eu-west-1",
            "DYNAMODB_ENDPOINT_URL": "http://localhost:8000",
            "DYNAMODB_TABLE_PREFIX": "test",
            "ENVIRONMENT": "staging",
            "HANDLER_ERROR_DETAIL": "Message",
            "HANDLER_DEBUG_LOGGING": "true",
        }

        with patch.dict(os.environ, env_vars):
            config = HandlerConfig.from_env()

            assert config.aws_access_key_id == "test_key"
            assert config.aws_secret_access_key == "test_secret"
            assert config.region_name == "eu-west-1"
            assert config.endpoint_url == "http://localhost:8000"
            assert config.table_prefix == "test"
            assert config.environment == "staging"
            assert config.error_detail == ErrorDetail.MESSAGE
            assert config.enable_debug_logging is True

    def test_table_name_generation(self):
        """Test table name generation with prefix and environment."""
        config = HandlerConfig(
            table_prefix="myapp",
            environment="dev"
        )

        assert config.get_table_name("customers") == "myapp_dev_customers"

    def test_table_name_generation_prod(self):
        """Test table name generation in production (no environment suffix)."""
        config = HandlerConfig(
            table_prefix="myapp",
            environment="prod"
        )

        assert config.get_table_name("customers") == "myapp_customers"

    def test_table_name_without_prefix(self):
        """Test table name generation without prefix."""
        config = HandlerConfig(table_prefix="", environment="test")

        assert config.get_table_name("customers") == "test_customers"

    def test_invalid_environment(self):
        """Test validation of environment values."""
        with pytest.raises(ValueError, match="Environment must be one of"):
            HandlerConfig(environment="qa")

    def test_invalid_error_detail(self):
        """Test validation of error detail values."""
        with pytest.raises(ValueError):
            HandlerConfig(environment="dev", error_detail="everything")

    def test_empty_region(self):
        """Test region validation."""
        with pytest.raises(ValueError, match="AWS region name is required"):
            HandlerConfig(region_name="", environment="dev")

    def test_invalid_environment_from_env_var(self):
        """Test environment values read from the environment are validated."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            with pytest.raises(ValueError, match="Environment must be one of"):
                HandlerConfig()

    def test_empty_region_from_env_var(self):
        """Test an empty AWS_REGION is rejected."""
        with patch.dict(os.environ, {"AWS_REGION": "", "ENVIRONMENT": "dev"}):
            with pytest.raises(ValueError, match="AWS region name is required"):
                HandlerConfig()

    def test_validate_assignment(self):
        """Test assignments are validated."""
        config = HandlerConfig(environment="dev")

        config.error_detail = "generic"
        assert config.error_detail == ErrorDetail.GENERIC

        with pytest.raises(ValueError):
            config.environment = "nowhere"

    def test_local_development_config(self):
        """Test local development configuration."""
        config = HandlerConfig.for_local_development()

        assert config.aws_access_key_id == "local"
        assert config.endpoint_url == "http://localhost:8000"
        assert config.environment == "dev"
        assert config.enable_debug_logging is True
