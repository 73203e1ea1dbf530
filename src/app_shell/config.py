import logging
from pathlib import Path

from src.components.auth import DashboardCredentials, resolve_credentials
from src.rules.loader import load_rules
from src.rules.models import Rules

logger = logging.getLogger(__name__)


def load_startup_rules(rules_path: Path) -> Rules:
    """
    Load rules and log the effective configuration.
    Raises FileNotFoundError / ValueError; callers treat both as fatal.
    """
    rules = load_rules(rules_path)
    logger.info("Rules loaded from %s", rules_path)
    logger.info(
        "Retention: %d days, sweep every %.0fs; auth throttle: %d failures / %ds",
        rules.retention.retention_days,
        rules.retention.sweep_interval_seconds,
        rules.auth.max_attempts,
        rules.auth.window_seconds,
    )
    return rules


def dashboard_credentials(username: str | None, password: str | None) -> DashboardCredentials:
    """
    Resolve dashboard credentials from configuration.

    A generated password is logged once so the operator can sign in.
    """
    creds, generated = resolve_credentials(username, password)
    if generated:
        logger.warning(
            "NANOLYTICA_USERNAME/NANOLYTICA_PASSWORD not both set; "
            "generated dashboard login %s / %s",
            creds.username,
            creds.password,
        )
    return creds
