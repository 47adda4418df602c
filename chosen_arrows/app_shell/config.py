import logging
import os

from chosen_arrows.rules.models import Rules

logger = logging.getLogger(__name__)


def validate_ops_rules(rules: Rules) -> None:
    """
    Validate operational requirements before startup.

    Raises RuntimeError when a required environment variable is missing or the
    language configuration is inconsistent.
    """
    missing = [env_var for env_var in rules.ops.required_env if env_var not in os.environ]
    if missing:
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")

    if rules.i18n.default_language not in rules.i18n.supported_languages:
        raise RuntimeError(
            f"Default language {rules.i18n.default_language!r} is not in supported_languages"
        )

    logger.info("Configuration validated")
