# kfold_cv/steps/aggregate_step.py
from __future__ import annotations

from kfold_cv import logs
from kfold_cv.engines.evaluation_engine import EvaluationEngine
from kfold_cv.pipeline.context import CrossValidationContext, RunState
from kfold_cv.pipeline.step import PipelineStep
from kfold_cv.utils.errors import AggregationFailed


class AggregateStep(PipelineStep):
    """
    AggregateStep: one evaluation built from the k fold evaluations;
    the platform computes the averaged metrics.
    """

    state = RunState.AGGREGATING

    def __init__(self, adapter, engine: EvaluationEngine | None = None, inst=None):
        super().__init__(adapter, inst)
        self.engine = engine or EvaluationEngine()

    def run(self, ctx: CrossValidationContext) -> CrossValidationContext:
        request = self.engine.plan_aggregate(ctx.evaluation_ids)

        (result,) = self.fan_out(
            ctx,
            kind="evaluation",
            requests=[request],
            failure=AggregationFailed,
        )

        ctx.result_id = result.id
        logs.info(f"[{self.step_name}] cross-validation result {result.id}")
        return ctx
