"""
Billing Killswitch - Inspects and disables billing on GCP projects.
"""

import logging
from typing import Optional

import google.auth
from google.cloud.billing_v1 import CloudBillingClient, ProjectBillingInfo

logger = logging.getLogger(__name__)

BILLING_SCOPES = [
    "https://www.googleapis.com/auth/cloud-billing",
    "https://www.googleapis.com/auth/cloud-platform",
]


def project_resource_name(project_id: str) -> str:
    """Return the Cloud Billing resource name of a project."""
    return f"projects/{project_id}"


def create_billing_client() -> CloudBillingClient:
    """
    Create a Cloud Billing client from Application Default Credentials.

    Returns:
        CloudBillingClient scoped for billing administration

    Raises:
        google.auth.exceptions.DefaultCredentialsError: If no credentials are available
    """
    credentials, _ = google.auth.default(scopes=BILLING_SCOPES)
    logger.debug("Obtained application default credentials")
    return CloudBillingClient(credentials=credentials)


class BillingKillswitch:
    """Reads and clears the billing account association of projects."""

    def __init__(self, billing_client: CloudBillingClient, dry_run: bool = False):
        """
        Initialize the killswitch.

        Args:
            billing_client: Cloud Billing client used for every call
            dry_run: If True, billing state is read but never modified
        """
        self.billing_client = billing_client
        self.dry_run = dry_run

        if self.dry_run:
            logger.info("DRY-RUN MODE: Billing will be inspected but not disabled")

    def is_billing_enabled(self, project_name: str) -> bool:
        """
        Determine whether billing is enabled for a project.

        Any failure to read the billing info is treated as billing enabled, so
        an unreadable project still gets a disable attempt.

        Args:
            project_name: Project resource name (projects/PROJECT_ID)

        Returns:
            bool: Whether the project has billing enabled
        """
        try:
            billing_info = self.billing_client.get_project_billing_info(name=project_name)
        except Exception as e:
            logger.warning(
                "Unable to determine if billing is enabled on %s, assuming billing is enabled: %s",
                project_name,
                e,
            )
            return True

        logger.info(
            "Billing info for %s: enabled=%s, account=%s",
            project_name,
            billing_info.billing_enabled,
            billing_info.billing_account_name or "<none>",
        )
        return billing_info.billing_enabled

    def disable_billing(self, project_name: str) -> str:
        """
        Disable billing for a project by removing its billing account.

        Args:
            project_name: Project resource name (projects/PROJECT_ID)

        Returns:
            str: Text containing the response from disabling billing
        """
        if self.dry_run:
            logger.info("DRY-RUN: Would disable billing for %s", project_name)
            return f"DRY-RUN: Would disable billing for {project_name}"

        # An empty billing account name detaches the project
        billing_info = self.billing_client.update_project_billing_info(
            name=project_name,
            project_billing_info=ProjectBillingInfo(billing_account_name=""),
        )
        response = ProjectBillingInfo.to_json(billing_info, indent=None)
        logger.info("Disabled billing for %s: %s", project_name, response)
        return f"Billing disabled: {response}"


def create_killswitch(dry_run: bool = False, billing_client: Optional[CloudBillingClient] = None):
    """
    Build a killswitch, creating a credentialed billing client when none is given.

    Args:
        dry_run: If True, skip the mutating call
        billing_client: Optional pre-built client

    Returns:
        BillingKillswitch
    """
    return BillingKillswitch(billing_client or create_billing_client(), dry_run=dry_run)
