from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from .errors import ImageBuildError, StageError, TeardownError
from .lib.command import ExecutionLog
from .lib.resources import ResourceStack
from .request import BuildRequest, PipelineState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildCtx:
    request: BuildRequest
    log: ExecutionLog
    state: PipelineState = field(default_factory=PipelineState)
    # Host devices: loop device, partition mapping, mountpoint, mount.
    resources: ResourceStack = field(default_factory=lambda: ResourceStack("resources"))
    # Files that outlive the devices: the temporary backing image.
    artifacts: ResourceStack = field(default_factory=lambda: ResourceStack("artifacts"))


class Step(Protocol):
    """A single pipeline stage."""

    step_id: str

    def run(self, ctx: BuildCtx) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]
    teardown_failures: List[TeardownError]


def _run_step(step: Step, ctx: BuildCtx) -> None:
    logger.info("Running step %s", step.step_id)
    try:
        step.run(ctx)
    except StageError as e:
        if e.step_id is None:
            e.step_id = step.step_id
        raise
    except ImageBuildError:
        raise
    except Exception as e:
        raise StageError(f"Step {step.step_id} failed: {e}", step_id=step.step_id) from e


def run_pipeline(
    *,
    ctx: BuildCtx,
    steps: Sequence[Step],
    finalize_steps: Optional[Sequence[Step]] = None,
) -> PipelineResult:
    """Run steps in order, releasing every registered resource on the way out.

    Host devices are released before finalize_steps run, so the image is
    finalized unmounted and detached. Both stacks are always unwound, whatever
    the outcome.
    """

    ran: List[str] = []
    failures: List[TeardownError] = []

    try:
        for step in steps:
            _run_step(step, ctx)
            ran.append(step.step_id)

        failures.extend(ctx.resources.unwind_all())

        for step in finalize_steps or []:
            _run_step(step, ctx)
            ran.append(step.step_id)
    except ImageBuildError as e:
        logger.error("Build failed in step %s: %s", getattr(e, "step_id", None), e)
        raise
    finally:
        failures.extend(ctx.resources.unwind_all())
        failures.extend(ctx.artifacts.unwind_all())

    return PipelineResult(ran_steps=ran, teardown_failures=failures)
