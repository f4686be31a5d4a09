"""Abstract base class for all pipeline agents."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple


class BaseAgent(ABC):
    """
    Abstract base class that all agents must inherit from.

    Agents receive the accumulated pipeline context, process it, and
    return a dict that is merged back into the context.

    Subclasses list the context keys they consume in `required_keys`;
    `check_contract` raises before `run` touches a missing key.
    """

    required_keys: Tuple[str, ...] = ()

    def __init__(self, name: str) -> None:
        """
        Initialize the agent.

        Args:
            name: Unique identifier for this agent.
        """
        self.name = name

    def check_contract(self, input_data: Dict[str, Any]) -> None:
        """
        Verify the context carries every required key.

        Raises:
            ValueError: If a required key is missing.
        """
        for key in self.required_keys:
            if key not in input_data:
                raise ValueError(
                    f"Pipeline contract violation: '{key}' key missing. "
                    f"{self.name} requires {list(self.required_keys)}."
                )

    @abstractmethod
    def run(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Execute the agent's main logic.

        Args:
            input_data: Accumulated pipeline context.

        Returns:
            Dictionary of keys to merge into the context.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
