"""Plan schemas: steps, their actions, and execution reports."""

from typing import Annotated, Any, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SingleAction(BaseModel):
    """One operation run in the step's slot."""

    kind: Literal["single"] = "single"
    op: Callable[..., Any]

    model_config = ConfigDict(frozen=True)

    @property
    def operations(self) -> tuple[Callable[..., Any], ...]:
        return (self.op,)

    def run(self, state: Any, *args: Any) -> None:
        self.op(state, *args)


class SequenceAction(BaseModel):
    """Operations run back-to-back, in order, in the same slot."""

    kind: Literal["sequence"] = "sequence"
    ops: tuple[Callable[..., Any], ...]

    model_config = ConfigDict(frozen=True)

    @property
    def operations(self) -> tuple[Callable[..., Any], ...]:
        return self.ops

    def run(self, state: Any, *args: Any) -> None:
        for op in self.ops:
            op(state, *args)


Action = Annotated[Union[SingleAction, SequenceAction], Field(discriminator="kind")]


def single(op: Callable[..., Any]) -> SingleAction:
    return SingleAction(op=op)


def sequence(*ops: Callable[..., Any]) -> SequenceAction:
    return SequenceAction(ops=ops)


class Step(BaseModel):
    """One entry of a redraw plan.

    ``check`` is evaluated by the executor right before the action runs,
    never when the plan is built. ``wait`` steps receive a completion
    callback and suspend the plan until it fires.
    """

    name: str
    action: Action
    message: str
    wait: bool = False
    check: Callable[[Any], bool] | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _wait_needs_single_action(self) -> "Step":
        if self.wait and not isinstance(self.action, SingleAction):
            raise ValueError("A waiting step must carry a single action")
        return self


class ExecutionReport(BaseModel):
    """Outcome of running one plan."""

    generation: int = 0
    executed: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    failed: str | None = None
    error: str | None = None
    stale: bool = False

    @property
    def succeeded(self) -> bool:
        return self.failed is None and not self.stale
