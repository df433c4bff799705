"""
Budget Mapping - Builds the budget ID to project ID mapping at deployment time.

Each managed project gets one budget named "<project display name> Budget Alert".
The mapping from the budget's ID to the project's ID is serialized into the
function's BUDGET_ID_TO_PROJECT_ID_MAPPING environment variable.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectDetails:
    """A project managed under a budget alert."""

    project_display_name: str
    project_id: str
    budget_amount: str
    owners: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectDetails":
        try:
            return cls(
                project_display_name=data["projectDisplayName"],
                project_id=data["projectId"],
                budget_amount=str(data["budgetAmount"]),
                owners=list(data.get("owners", [])),
            )
        except KeyError as e:
            raise ValueError(f"Project details missing field {e}: {data}") from e


def load_project_details(path: str) -> List[ProjectDetails]:
    """
    Load project details from a JSON or YAML file.

    Args:
        path: File containing a list of project records

    Returns:
        List of ProjectDetails
    """
    with open(path, "r", encoding="utf-8") as f:
        if path.endswith((".yml", ".yaml")):
            records = yaml.safe_load(f)
        else:
            records = json.load(f)

    if not isinstance(records, list):
        raise ValueError(f"Project details file must contain a list: {path}")

    projects = [ProjectDetails.from_dict(record) for record in records]
    logger.info("Loaded %d project details from %s", len(projects), path)
    return projects


def budget_display_name(project: ProjectDetails) -> str:
    """Display name of the budget guarding a project."""
    return f"{project.project_display_name} Budget Alert"


def budget_id_from_resource_name(name: str) -> str:
    """Extract the budget ID from billingAccounts/ACCOUNT/budgets/BUDGET_ID."""
    return name.rstrip("/").split("/")[-1]


def build_budget_project_mapping(pairs: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """
    Build the budget ID to project ID mapping.

    Args:
        pairs: (budget ID or budget resource name, project ID) tuples

    Returns:
        Dictionary of budget ID to project ID

    Raises:
        ValueError: If a budget ID appears more than once
    """
    mapping: Dict[str, str] = {}
    for budget, project_id in pairs:
        budget_id = budget_id_from_resource_name(budget)
        if budget_id in mapping:
            raise ValueError(
                f"Budget {budget_id} mapped to both {mapping[budget_id]} and {project_id}"
            )
        mapping[budget_id] = project_id
    return mapping


def match_budgets_to_projects(
    budgets: Iterable[Any], projects: Iterable[ProjectDetails]
) -> Dict[str, str]:
    """
    Pair budget resources with projects by budget display name.

    Args:
        budgets: Objects with name and display_name (e.g. budgets_v1.Budget)
        projects: Managed projects

    Returns:
        Dictionary of budget ID to project ID
    """
    projects_by_budget_name = {budget_display_name(p): p for p in projects}

    pairs = []
    for budget in budgets:
        project = projects_by_budget_name.pop(budget.display_name, None)
        if project is None:
            logger.debug(
                "Skipping budget %s (%s): no managed project", budget.name, budget.display_name
            )
            continue
        pairs.append((budget.name, project.project_id))

    for name, project in projects_by_budget_name.items():
        logger.warning("No budget named '%s' found for project %s", name, project.project_id)

    return build_budget_project_mapping(pairs)


def serialize_budget_project_mapping(mapping: Dict[str, str]) -> str:
    """Serialize the mapping for the function's environment."""
    return json.dumps(mapping, sort_keys=True, separators=(",", ":"))
