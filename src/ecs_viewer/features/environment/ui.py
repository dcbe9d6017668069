"""UI components for switching environments."""

from __future__ import annotations

from ...core.base import BaseUIComponent
from ...core.navigation import parse_selection


class EnvironmentUI(BaseUIComponent):
    def select_environment(self, environments: list[str], current: str) -> str | None:
        """Ask for an environment. Returns None when the user backs out."""
        choices = [
            {"name": f"{'● ' if name == current else '  '}{name}", "value": f"environment:{name}"}
            for name in environments
        ]
        selected = self.select_with_nav("Select an environment:", choices, "Back to main menu")

        selection_type, name, _ = parse_selection(selected)
        if selection_type != "environment":
            return None
        return name
