"""Sequential pipeline execution engine."""

from typing import Any, Dict, List, Optional

from core.logger import get_logger
from pipelines.core.base_agent import BaseAgent

logger = get_logger(__name__)


class PipelineRunner:
    """
    Sequential pipeline executor.

    Executes agents in order, passing the accumulated context between them.
    Architecture: Input → Agent1 → Agent2 → Agent3 → Output
    """

    def __init__(
        self,
        agents: List[BaseAgent],
        name: Optional[str] = None,
    ) -> None:
        """
        Initialize the pipeline runner.

        Args:
            agents: Ordered list of agents to execute sequentially.
            name: Optional pipeline name for logging.

        Raises:
            ValueError: If agents list is empty.
        """
        if not agents:
            raise ValueError("Pipeline must contain at least one agent")
        self.agents = agents
        self.name = name or "Pipeline"

    def run(self, initial_context: Dict[str, Any]) -> Dict[str, Any]:
        """
        Execute pipeline sequentially.

        The input dict is never mutated; each agent's output is merged into
        a copy that the next agent receives.

        Args:
            initial_context: Initial input data dict.

        Returns:
            Final context dict after all agents have executed.

        Raises:
            RuntimeError: If any agent fails or returns non-dict output.
                The original error is chained as __cause__.
        """
        context = dict(initial_context)
        total_agents = len(self.agents)

        logger.debug(f"Pipeline {self.name} started with {total_agents} agent(s)")

        for idx, agent in enumerate(self.agents, start=1):
            agent_name = agent.name
            logger.debug(f"Agent {idx}/{total_agents} started: {agent_name}")

            try:
                agent.check_contract(context)
                result = agent.run(context)

                if not isinstance(result, dict):
                    raise TypeError(
                        f"Agent '{agent_name}' returned {type(result).__name__}, expected dict"
                    )

                context.update(result)

            except Exception as e:
                logger.error(f"Agent '{agent_name}' failed with error: {e}")
                raise RuntimeError(
                    f"Pipeline stopped at agent '{agent_name}': {e}"
                ) from e

        logger.debug(f"Pipeline {self.name} completed")
        return context
