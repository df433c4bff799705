"""
Cloud Function handler for budget alert events.
"""

import logging
from typing import Callable

import functions_framework

from billing_killswitch import BillingKillswitch, create_killswitch, project_resource_name
from config import is_dry_run, load_budget_project_mapping
from events import BudgetAlertEvent, format_amount
from project_resolver import BudgetProjectResolver

logger = logging.getLogger(__name__)


class BillingKillswitchHandler:
    """Decides whether a budget alert requires disabling billing and acts on it."""

    def __init__(
        self,
        resolver: BudgetProjectResolver,
        killswitch_factory: Callable[..., BillingKillswitch] = create_killswitch,
        dry_run: bool = False,
    ):
        """
        Initialize the handler.

        Args:
            resolver: Resolver from budget ID to project ID
            killswitch_factory: Called with dry_run to build a credentialed killswitch,
                                only once an alert actually requires network calls
            dry_run: If True, billing is never modified
        """
        self.resolver = resolver
        self.killswitch_factory = killswitch_factory
        self.dry_run = dry_run

    def handle(self, event: BudgetAlertEvent) -> str:
        """
        Process a budget alert.

        Args:
            event: Decoded budget alert

        Returns:
            str: Description of the outcome
        """
        if not event.over_budget:
            logger.info(
                "No action necessary: cost %s within budget %s",
                event.cost_amount,
                event.budget_amount,
            )
            return f"No action necessary. (Current cost: {format_amount(event.cost_amount)})"

        project_id = self.resolver.resolve(event.budget_id)
        if not project_id:
            logger.info("No project specified for budget %s", event.budget_id)
            return "No project specified"

        logger.info(
            "Cost %s exceeded budget %s for budget %s (project %s)",
            event.cost_amount,
            event.budget_amount,
            event.budget_id,
            project_id,
        )

        killswitch = self.killswitch_factory(dry_run=self.dry_run)
        project_name = project_resource_name(project_id)

        if not killswitch.is_billing_enabled(project_name):
            logger.info("Billing already disabled for %s", project_name)
            return "Billing already disabled"

        logger.warning("Disabling billing for %s", project_name)
        return killswitch.disable_billing(project_name)


@functions_framework.cloud_event
def stop_billing(cloud_event):
    """
    Cloud Function entry point for budget alert Pub/Sub events.

    Args:
        cloud_event: CloudEvent object containing Pub/Sub message

    Returns:
        str: Description of the outcome
    """
    try:
        event = BudgetAlertEvent.from_cloud_event(cloud_event)
        logger.info(
            "Received budget alert for budget %s (%s, billing account %s): cost=%s %s, budget=%s",
            event.budget_id,
            event.budget_display_name,
            event.billing_account_id,
            event.cost_amount,
            event.currency_code or "",
            event.budget_amount,
        )

        handler = BillingKillswitchHandler(
            BudgetProjectResolver(load_budget_project_mapping()),
            dry_run=is_dry_run(),
        )
        result = handler.handle(event)

        logger.info("Budget alert processing completed: %s", result)
        return result

    except Exception as e:
        logger.error("Error processing budget alert: %s", e, exc_info=True)
        raise
