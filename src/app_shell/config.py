import logging
import os
import sys

from src.rules.models import Rules

logger = logging.getLogger(__name__)


def validate_ops_rules(rules: Rules) -> None:
    """
    Validate operational requirements before startup.
    Exits with status 1 if required environment variables are missing.
    """
    missing = [env_var for env_var in rules.ops.required_env if env_var not in os.environ]

    if missing:
        print(
            f"CRITICAL: Missing required environment variables: {', '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)

    if rules.ops.data_dir_env not in os.environ:
        logger.info(
            f"{rules.ops.data_dir_env} not set, using {rules.ops.default_data_dir}"
        )

    logger.info("Configuration Validated.")
