"""
Unit tests for the publish-budget-alert-event script
"""

import importlib.util
import unittest
from pathlib import Path
from unittest.mock import patch

SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "publish-budget-alert-event.py"


def load_script():
    spec = importlib.util.spec_from_file_location("publish_budget_alert_event", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@patch.dict("os.environ", {"PUBSUB_EMULATOR_HOST": "localhost:8681"})
class TestPublishBudgetAlertEvent(unittest.TestCase):
    """Test cases for the script's argument handling."""

    def setUp(self):
        """Set up test fixtures."""
        self.script = load_script()

    def published_data(self, argv):
        with patch.object(self.script, "publish_message") as mock_publish:
            self.script.main(argv)
        mock_publish.assert_called_once()
        return mock_publish.call_args.kwargs

    def test_zero_cost_is_published_as_zero(self):
        """Test an explicit zero cost is not replaced by the default."""
        kwargs = self.published_data(["--cost=0", "--budget=100"])

        self.assertEqual(kwargs["message_data"]["costAmount"], 0)
        self.assertEqual(kwargs["message_data"]["budgetAmount"], 100)

    def test_zero_budget_is_published_as_zero(self):
        """Test an explicit zero budget is not replaced by the default."""
        kwargs = self.published_data(["--cost=10", "--budget=0"])

        self.assertEqual(kwargs["message_data"]["budgetAmount"], 0)

    def test_defaults(self):
        """Test default amounts and budget ID."""
        kwargs = self.published_data([])

        self.assertEqual(kwargs["message_data"]["costAmount"], 150)
        self.assertEqual(kwargs["message_data"]["budgetAmount"], 100)
        self.assertEqual(kwargs["budget_id"], self.script.SCENARIOS["over_budget"]["budget_id"])

    def test_scenario(self):
        """Test predefined scenario values."""
        kwargs = self.published_data(["--scenario=under_budget"])

        self.assertEqual(kwargs["message_data"]["costAmount"], 50)
        self.assertEqual(kwargs["message_data"]["budgetAmount"], 100)


if __name__ == "__main__":
    unittest.main()
