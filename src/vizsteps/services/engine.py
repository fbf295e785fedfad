"""Draw engine - plans and executes redraws for one visualization.

Each ``draw()`` gets a generation number. Starting a new draw makes every
older one stale: it stops before its next step, and completions of its
in-flight loads are discarded. Changed flags are cleared only after a
successful, current draw.
"""

import asyncio
import logging
from typing import Callable

from vizsteps.core.planner import build_plan
from vizsteps.schemas.state import VizState
from vizsteps.schemas.steps import ExecutionReport, Step
from vizsteps.services.collaborators import DEFAULT_COLLABORATORS, Collaborators
from vizsteps.services.executor import StepExecutor

logger = logging.getLogger(__name__)


class DrawEngine:
    """Stateful draw controller with dependency injection."""

    def __init__(
        self,
        state: VizState,
        collaborators: Collaborators | None = None,
        progress: Callable[[str], None] | None = None,
    ) -> None:
        self.state = state
        self.collaborators = collaborators or DEFAULT_COLLABORATORS
        self.executor = StepExecutor(state, progress=progress)
        self.generation = 0
        self.last_plan: list[Step] = []

    def plan(self) -> list[Step]:
        return build_plan(self.state, self.collaborators)

    async def draw(self) -> ExecutionReport:
        self.generation += 1
        generation = self.generation
        changed = self.state.changed_paths()
        logger.info(f"Draw {generation} started (changed: {changed or 'nothing'})")

        plan = self.plan()
        self.last_plan = plan
        report = await self.executor.run(
            plan,
            generation=generation,
            is_current=lambda: generation == self.generation,
        )

        if report.succeeded:
            self.state.reset_changed()
            logger.info(
                f"Draw {generation} complete: {len(report.executed)} run, "
                f"{len(report.skipped)} skipped"
            )
        elif report.stale:
            logger.info(f"Draw {generation} superseded by draw {self.generation}")
        else:
            logger.error(f"Draw {generation} aborted at {report.failed}: {report.error}")
        return report

    def draw_sync(self) -> ExecutionReport:
        """Run ``draw()`` to completion on a fresh event loop."""
        return asyncio.run(self.draw())
