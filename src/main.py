"""
GCP Billing Killswitch - Budget Alert Cloud Function

This Cloud Function is triggered by Pub/Sub events from GCP Budget Alerts.
It detaches the billing account of a project once its cost exceeds its budget.

Deploy with --entry-point=stop_billing.
"""

import logging
import os

from handler import stop_billing

# LOG_LEVEL falls back to INFO when unset or unknown
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

__all__ = ["stop_billing"]
