from __future__ import annotations

from typing import Any, Dict, List, Sequence, Type

from kfold_cv import logs
from kfold_cv.adapters.resource_adapter import ResourceAdapter
from kfold_cv.core.types import Resource
from kfold_cv.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)
from kfold_cv.pipeline.context import CrossValidationContext, RunState
from kfold_cv.utils.errors import (
    PipelineFailure,
    PlatformRequestError,
    ResourceFailed,
    WaitTimeout,
)


class PipelineStep:
    """
    Pipeline Step base class

    Responsibilities:
      1. orchestration of one state of the run
      2. step-level timing boundary (parent scope)

    Rules:
      - the step itself never enters the timeline
      - remote fan-out / join happens inside leaf timers
      - Instrumentation is optional (No-op semantics)
    """

    state: RunState

    def __init__(self, adapter: ResourceAdapter, inst: Instrumentation | None = None):
        self.adapter = adapter
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

    @property
    def step_name(self) -> str:
        return self.__class__.__name__

    def timed(self):
        """Step-level scope (record=False, not in the timeline)."""
        return self.inst.timer(self.step_name, record=False)

    def run(self, ctx: CrossValidationContext) -> CrossValidationContext:
        raise NotImplementedError

    # --------------------------------------------------
    # fan-out / join
    # --------------------------------------------------
    def fan_out(
            self,
            ctx: CrossValidationContext,
            *,
            kind: str,
            requests: Sequence[Dict[str, Any]],
            failure: Type[PipelineFailure],
    ) -> List[Resource]:
        """
        Submit every request without waiting, then join on the full set.

        - each created id is tracked on ctx before the join
        - results keep submission order
        - any failure aborts the whole set as `failure`
        """
        try:
            with self.inst.timer(f"{self.step_name}.submit"):
                ids = []
                for body in requests:
                    resource = self.adapter.create(kind, body)
                    ctx.track(resource.id)
                    ids.append(resource.id)

            logs.info(f"[{self.step_name}] submitted {len(ids)} {kind}(s), waiting")

            with self.inst.timer(f"{self.step_name}.wait"):
                finished = self.adapter.wait_all(ids)

        except WaitTimeout:
            raise
        except (ResourceFailed, PlatformRequestError) as e:
            raise failure.wrap(e) from e

        self.inst.metrics.incr(f"{kind}_created", len(finished))
        return finished
