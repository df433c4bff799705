"""
Project Resolver - Maps budget IDs to the projects they guard.
"""

import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class BudgetProjectResolver:
    """Resolves budget IDs to project IDs from a static mapping."""

    def __init__(self, mapping: Optional[Dict[str, str]] = None):
        """
        Initialize the resolver.

        Args:
            mapping: Budget ID to project ID mapping built at deployment time
                     Example: {"f47ac10b-58cc-4372-a567-0e02b2c3d479": "acme-john-doe-1"}
        """
        self.mapping: Dict[str, str] = {}

        for budget_id, project_id in (mapping or {}).items():
            if not isinstance(budget_id, str) or not isinstance(project_id, str) or not project_id:
                logger.warning(
                    "Ignoring invalid mapping entry %r -> %r", budget_id, project_id
                )
                continue
            self.mapping[budget_id] = project_id

        logger.debug("Loaded %d budget to project mappings", len(self.mapping))

    def resolve(self, budget_id: Optional[str]) -> Optional[str]:
        """
        Resolve a budget ID to a project ID.

        Args:
            budget_id: Budget ID from the alert attributes

        Returns:
            Project ID, or None if the budget is not mapped
        """
        if not budget_id:
            return None

        project_id = self.mapping.get(budget_id)
        if project_id is None:
            logger.info("Budget %s is not mapped to any project", budget_id)
        return project_id
