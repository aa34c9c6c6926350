import logging
from typing import Optional

from .config import DynamoDBConfig

PACKAGE_LOGGER = "dynamodb_keystore"


def configure_logging(config: Optional[DynamoDBConfig] = None) -> logging.Logger:
    """Set the keystore package log level from configuration.

    Handlers are left to the application. With ``enable_debug_logging`` the
    package logger is raised to DEBUG so predicate failures and reads show up;
    otherwise it stays at INFO. botocore is kept at WARNING either way.

    Returns:
        The package logger
    """
    config = config or DynamoDBConfig.from_env()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if config.enable_debug_logging else logging.INFO)

    # Keep known noisy libraries quiet by default
    logging.getLogger('botocore').setLevel(logging.WARNING)
    logging.getLogger('boto3').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    logger.debug(f"Keystore log level set to: {logging.getLevelName(logger.level)}")
    return logger
