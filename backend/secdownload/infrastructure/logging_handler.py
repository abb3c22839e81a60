"""
Logging Outcome Handler

Writes every validation outcome to the server log. Rejection reasons
are only ever logged here, never sent to clients.
"""

import logging

from secdownload.domain.secure_download.value_objects import OutcomeKind, ValidationOutcome

# (status code, label) used in log lines
OUTCOME_LOG_LABELS = {
    OutcomeKind.SERVE: (200, "Download"),
    OutcomeKind.BAD_REQUEST: (400, "Bad Request"),
    OutcomeKind.SECURITY: (403, "Security"),
    OutcomeKind.EXPIRED: (410, "Gone"),
    OutcomeKind.NOT_FOUND: (404, "Bad File"),
}


class LoggingOutcomeHandler:
    """
    Observer that logs validation outcomes.

    Served files are logged at INFO, rejections at WARNING.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize with logger instance.

        Args:
            logger: Python logging.Logger instance
        """
        self.logger = logger

    def handle(self, outcome: ValidationOutcome) -> None:
        """
        Log a validation outcome.

        Args:
            outcome: Outcome to log
        """
        status, label = OUTCOME_LOG_LABELS[outcome.kind]
        if outcome.is_served:
            self.logger.info(f"{status} {label} - {outcome.resolved_path}")
        else:
            self.logger.warning(f"{status} {label} - {outcome.reason}")
