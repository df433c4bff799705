#!/usr/bin/env python3
"""
Build the BUDGET_ID_TO_PROJECT_ID_MAPPING value for the killswitch function.

Lists the budgets of a billing account, matches them to the managed projects by
budget display name ("<project display name> Budget Alert") and prints the
mapping JSON.

Usage:
    python scripts/build-budget-mapping.py --billing-account 012345-6789AB-CDEF01 \
        --projects projects.yaml

    # Write straight into an env file
    python scripts/build-budget-mapping.py --billing-account 012345-6789AB-CDEF01 \
        --projects projects.json --env
"""

import argparse
import logging
import os
import sys

from google.cloud.billing.budgets_v1 import BudgetServiceClient

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from budget_mapping import (  # noqa: E402
    load_project_details,
    match_budgets_to_projects,
    serialize_budget_project_mapping,
)
from config import MAPPING_ENV_VAR  # noqa: E402


def main():
    """Main function to build the budget mapping."""
    parser = argparse.ArgumentParser(
        description="Build the budget ID to project ID mapping",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--billing-account", required=True, help="Billing account ID")
    parser.add_argument(
        "--projects", required=True, help="JSON or YAML file listing the managed projects"
    )
    parser.add_argument(
        "--env", action="store_true", help=f"Print as {MAPPING_ENV_VAR}=<json>"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    projects = load_project_details(args.projects)

    client = BudgetServiceClient()
    budgets = client.list_budgets(parent=f"billingAccounts/{args.billing_account}")

    mapping = match_budgets_to_projects(budgets, projects)
    serialized = serialize_budget_project_mapping(mapping)

    if args.env:
        print(f"{MAPPING_ENV_VAR}={serialized}")
    else:
        print(serialized)


if __name__ == "__main__":
    main()
