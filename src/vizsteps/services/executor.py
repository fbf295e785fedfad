"""Step executor.

Runs a plan strictly in order on the event loop. ``check`` guards are
evaluated right before their step; ``wait`` steps get a ``done`` callback
and suspend the plan until it fires (from any thread). A failed load aborts
the rest of the plan.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable

from vizsteps.errors import StepFailedError
from vizsteps.schemas.steps import ExecutionReport, Step

logger = logging.getLogger(__name__)

StepRunner = Callable[[Step], Awaitable[None]]


def timed(run: StepRunner) -> StepRunner:
    """Middleware logging how long each step takes."""

    async def wrapper(step: Step) -> None:
        start = time.perf_counter()
        try:
            await run(step)
        finally:
            elapsed = (time.perf_counter() - start) * 1000
            logger.info(f"{step.name}: {elapsed:.1f}ms ({step.message})")

    return wrapper


class StepExecutor:
    """Runs redraw plans against one state object."""

    def __init__(
        self,
        state,
        *,
        progress: Callable[[str], None] | None = None,
        middleware: list[Callable[[StepRunner], StepRunner]] | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            state: The VizState every step operates on.
            progress: Receives each step's message before it runs.
            middleware: Wrappers applied around every step, innermost first.
        """
        self.state = state
        self.progress = progress
        self.middleware = list(middleware or [])

    def _runner(self) -> StepRunner:
        run = self._run_step
        layers = list(self.middleware)
        if self.state.dev.value:
            layers.append(timed)
        for layer in layers:
            run = layer(run)
        return run

    async def _run_step(self, step: Step) -> None:
        if not step.wait:
            step.action.run(self.state)
            return

        loop = asyncio.get_running_loop()
        finished: asyncio.Future = loop.create_future()

        def settle(error: BaseException | None) -> None:
            if not finished.done():
                finished.set_result(error)

        def done(error: BaseException | None = None) -> None:
            loop.call_soon_threadsafe(settle, error)

        step.action.run(self.state, done)
        error = await finished
        if error is not None:
            raise error

    async def run(
        self,
        plan: list[Step],
        *,
        generation: int = 0,
        is_current: Callable[[], bool] = lambda: True,
    ) -> ExecutionReport:
        """Execute ``plan`` and report what ran.

        ``is_current`` is consulted before every step and after every wait;
        once it returns False the run stops and is reported as stale.
        """
        report = ExecutionReport(generation=generation)
        run = self._runner()

        for step in plan:
            if not is_current():
                logger.info(f"Plan {generation} superseded before {step.name}")
                report.stale = True
                return report

            try:
                if step.check is not None and not step.check(self.state):
                    logger.debug(f"Skipping {step.name}")
                    report.skipped.append(step.name)
                    continue

                if self.progress is not None:
                    self.progress(step.message)

                await run(step)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Step {step.name} failed: {e}", exc_info=not step.wait)
                failure = e if step.wait else StepFailedError(
                    f"{step.name} failed: {e}", details={"step": step.name}
                )
                report.failed = step.name
                report.error = str(failure)
                return report

            if step.wait and not is_current():
                logger.info(f"Discarding completion of {step.name} from plan {generation}")
                report.stale = True
                return report

            report.executed.append(step.name)

        return report

    def run_sync(self, plan: list[Step], **kwargs: Any) -> ExecutionReport:
        return asyncio.run(self.run(plan, **kwargs))
