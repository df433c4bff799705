#!/usr/bin/env python3
"""
Script to publish test budget alert events to Pub/Sub.

This script publishes sample budget alert messages to exercise the billing
killswitch function, locally through the Pub/Sub emulator or against a real topic.

Usage:
    # Basic usage (uses defaults)
    PUBSUB_EMULATOR_HOST=localhost:8681 python publish-budget-alert-event.py

    # Custom budget amounts
    PUBSUB_EMULATOR_HOST=localhost:8681 python publish-budget-alert-event.py --budget=100 --cost=150

    # Predefined scenarios
    python publish-budget-alert-event.py --scenario=over_budget   # disables billing
    python publish-budget-alert-event.py --scenario=under_budget  # no action
    python publish-budget-alert-event.py --scenario=unmapped      # no project specified
"""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict

from google.cloud import pubsub_v1

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


SCENARIOS = {
    "over_budget": {
        "budget": 100,
        "cost": 150,
        "budget_id": "f47ac10b-58cc-4372-a567-0e02b2c3d479",
        "description": "Cost exceeds budget (150%)",
    },
    "under_budget": {
        "budget": 100,
        "cost": 50,
        "budget_id": "f47ac10b-58cc-4372-a567-0e02b2c3d479",
        "description": "Cost within budget (50%)",
    },
    "unmapped": {
        "budget": 100,
        "cost": 150,
        "budget_id": "00000000-0000-0000-0000-000000000000",
        "description": "Budget not mapped to any project",
    },
}


def create_budget_alert_data(
    budget_amount: float,
    cost_amount: float,
    budget_name: str = "Test Budget Alert",
) -> Dict[str, Any]:
    """
    Create a budget alert message payload.

    Args:
        budget_amount: Total budget amount
        cost_amount: Current cost amount
        budget_name: Budget display name

    Returns:
        Budget alert data dictionary
    """
    return {
        "budgetDisplayName": budget_name,
        "costAmount": cost_amount,
        "budgetAmount": budget_amount,
        "currencyCode": "USD",
    }


def publish_message(
    project_id: str,
    topic_name: str,
    message_data: Dict[str, Any],
    budget_id: str,
) -> None:
    """
    Publish a budget alert to a Pub/Sub topic with its budgetId attribute.

    Args:
        project_id: GCP project ID hosting the topic
        topic_name: Pub/Sub topic name
        message_data: Message payload to publish
        budget_id: Budget ID (message attribute)
    """
    publisher = pubsub_v1.PublisherClient()
    topic_path = publisher.topic_path(project_id, topic_name)

    message_bytes = json.dumps(message_data).encode("utf-8")
    future = publisher.publish(topic_path, message_bytes, budgetId=budget_id)
    message_id = future.result()

    logger.info("Published message ID %s to %s", message_id, topic_path)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Publish test budget alert events to Pub/Sub",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--scenario",
        choices=list(SCENARIOS.keys()),
        help="Use predefined test scenario",
    )
    parser.add_argument(
        "--budget", type=float, default=100.0, help="Budget amount (default: 100)"
    )
    parser.add_argument(
        "--cost", type=float, default=150.0, help="Current cost amount (default: 150)"
    )
    parser.add_argument("--budget-id", help="Budget ID (message attribute)")
    parser.add_argument(
        "--pubsub-project",
        default=os.getenv("PUBSUB_PROJECT_ID", "local-gcp-test-project"),
        help="Pub/Sub project ID (default: local-gcp-test-project)",
    )
    parser.add_argument(
        "--topic",
        default=os.getenv("BUDGET_TOPIC", "project-budget-alerts"),
        help="Pub/Sub topic name (default: project-budget-alerts)",
    )
    return parser


def main(argv=None):
    """Main function to publish test budget alert events."""
    args = build_parser().parse_args(argv)

    emulator_host = os.getenv("PUBSUB_EMULATOR_HOST")
    if emulator_host:
        logger.info("Using Pub/Sub emulator: %s", emulator_host)
    else:
        logger.warning("PUBSUB_EMULATOR_HOST not set - will use production Pub/Sub")
        response = input("Continue? [y/N]: ")
        if response.lower() != "y":
            logger.info("Aborted")
            sys.exit(0)

    if args.scenario:
        scenario = SCENARIOS[args.scenario]
        budget_amount = scenario["budget"]
        cost_amount = scenario["cost"]
        budget_id = scenario["budget_id"]
        logger.info("Using scenario: %s - %s", args.scenario, scenario["description"])
    else:
        budget_amount = args.budget
        cost_amount = args.cost
        budget_id = args.budget_id or SCENARIOS["over_budget"]["budget_id"]

    budget_data = create_budget_alert_data(budget_amount=budget_amount, cost_amount=cost_amount)

    logger.info("")
    logger.info("Publishing test budget alert event:")
    logger.info("  Budget Amount:  %.2f", budget_amount)
    logger.info("  Cost Amount:    %.2f", cost_amount)
    logger.info("  Budget ID:      %s", budget_id)
    logger.info("")
    logger.info(json.dumps(budget_data, indent=2))

    try:
        publish_message(
            project_id=args.pubsub_project,
            topic_name=args.topic,
            message_data=budget_data,
            budget_id=budget_id,
        )
    except Exception as e:
        logger.error("Failed to publish message: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
