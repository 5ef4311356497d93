# kfold_cv/steps/predictor_step.py
from __future__ import annotations

from kfold_cv import logs
from kfold_cv.engines.predictor_engine import PredictorEngine
from kfold_cv.pipeline.context import CrossValidationContext, RunState
from kfold_cv.pipeline.step import PipelineStep
from kfold_cv.utils.errors import PredictorCreationFailed


class PredictorStep(PipelineStep):
    """
    PredictorStep

    Contract:
    - consumes ctx.pairs / ctx.objective_name / ctx.model_options
    - produces ctx.predictor_kind / ctx.predictor_ids (fold order)
    """

    state = RunState.BUILDING_PREDICTORS

    def __init__(self, adapter, engine: PredictorEngine | None = None, inst=None):
        super().__init__(adapter, inst)
        self.engine = engine or PredictorEngine()

    def run(self, ctx: CrossValidationContext) -> CrossValidationContext:
        kind, requests = self.engine.plan_predictors(
            pairs=ctx.pairs,
            objective_name=ctx.objective_name,
            raw_options=ctx.model_options,
        )
        logs.info(f"[{self.step_name}] building {len(requests)} {kind.value}(s)")

        finished = self.fan_out(
            ctx,
            kind=kind.value,
            requests=requests,
            failure=PredictorCreationFailed,
        )

        ctx.predictor_kind = kind
        self.inst.metrics.record("predictor_kind", kind.value)
        ctx.predictor_ids = [resource.id for resource in finished]
        return ctx
