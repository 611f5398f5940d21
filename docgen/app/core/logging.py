"""
Logging bootstrap.

Modules log through ``logging.getLogger(__name__)`` using snake_case
event names and structured ``extra`` fields. This module only installs
the root handler; formatting beyond that belongs to the deployment.
"""

import logging

from docgen.app.core.config import Settings

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Install a root stream handler once, at the configured level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=_LOG_FORMAT)
    root.setLevel(settings.effective_log_level)
