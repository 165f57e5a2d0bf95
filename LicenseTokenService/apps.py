"""
App configuration for License Token Service.
"""
import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)

# Management commands that never serve requests
_SKIP_COMMANDS = {
    "migrate",
    "makemigrations",
    "collectstatic",
    "shell",
    "test",
    "check",
    "createsuperuser",
    "create_auth_key",
}


class LicenseTokenServiceConfig(AppConfig):
    """App configuration for LicenseTokenService."""

    name = "LicenseTokenService"
    verbose_name = "License Token Service"

    def ready(self):
        """Set up tracing once the app registry is ready."""
        if len(sys.argv) > 1 and sys.argv[1] in _SKIP_COMMANDS:
            return

        # Django's autoreloader imports the project twice
        if os.environ.get("RUN_MAIN") == "false":
            return

        if not os.environ.get("OTEL_ENABLED", "true").lower() == "true":
            logger.info("OpenTelemetry disabled")
            return

        if getattr(self, "_initialized", False):
            return

        from core.instrumentation import setup_opentelemetry

        logger.info("Setting up observability...")
        setup_opentelemetry()
        self._initialized = True
        logger.info("Observability setup complete")
