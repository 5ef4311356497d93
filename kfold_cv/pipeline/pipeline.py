#!filepath: kfold_cv/pipeline/pipeline.py
from __future__ import annotations

from typing import List

from kfold_cv import logs
from kfold_cv.adapters.resource_adapter import ResourceAdapter
from kfold_cv.config.cross_validation_config import CrossValidationConfig
from kfold_cv.observability.instrumentation import Instrumentation
from kfold_cv.pipeline.context import CrossValidationContext, RunState
from kfold_cv.pipeline.step import PipelineStep
from kfold_cv.utils.errors import KFoldError, PipelineFailure


class CrossValidationPipeline:
    """
    CrossValidationPipeline = scheduler

    Rules:
    - the pipeline owns ordering, state transitions and compensation
    - the pipeline never times steps; steps define their own scopes
    - strictly linear: VALIDATING → ... → AGGREGATING → DONE, FAILED absorbs
    """

    def __init__(
            self,
            steps: List[PipelineStep],
            adapter: ResourceAdapter,
            inst: Instrumentation,
            cfg: CrossValidationConfig,
    ):
        self.steps = steps
        self.adapter = adapter
        self.inst = inst
        self.cfg = cfg

    def run(self, ctx: CrossValidationContext) -> CrossValidationContext:
        logs.info(f"[Pipeline] ====== START {ctx.dataset_id} k={ctx.k} ======")

        try:
            for step in self.steps:
                ctx.advance(step.state)
                with step.timed():
                    ctx = step.run(ctx)
            ctx.advance(RunState.DONE)

        except Exception as e:
            failed_in = ctx.state.value
            ctx.fail(e)
            if isinstance(e, KFoldError):
                logs.error(f"[Pipeline] FAILED in {failed_in}: {e}")
            else:
                logs.exception(f"[Pipeline] unexpected error in {failed_in}: {e!r}")
            if isinstance(e, PipelineFailure):
                self._compensate(ctx)
            raise

        finally:
            self.inst.generate_timeline_report(str(ctx.dataset_id))

        logs.info(f"[Pipeline] ====== DONE result={ctx.result_id} ======")
        return ctx

    # --------------------------------------------------
    @logs.catch(msg="compensation failed")
    def _compensate(self, ctx: CrossValidationContext) -> None:
        created = ctx.created_resources
        if not created:
            return

        if not self.cfg.cleanup_on_failure:
            logs.warning(
                f"[Pipeline] leaving {len(created)} resource(s) on the platform: "
                f"{', '.join(created)}"
            )
            return

        logs.info(f"[Pipeline] cleanup_on_failure: deleting {len(created)} resource(s)")
        failed = self.adapter.delete_all(list(reversed(created)))
        if failed:
            logs.warning(f"[Pipeline] cleanup left {len(failed)} resource(s): {', '.join(failed)}")
