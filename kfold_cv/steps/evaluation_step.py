# kfold_cv/steps/evaluation_step.py
from __future__ import annotations

from kfold_cv.engines.evaluation_engine import EvaluationEngine
from kfold_cv.pipeline.context import CrossValidationContext, RunState
from kfold_cv.pipeline.step import PipelineStep
from kfold_cv.utils.errors import EvaluationCreationFailed


class EvaluationStep(PipelineStep):
    """
    EvaluationStep

    - evaluation i pairs predictor i with held-out fold i
    - submitted in index order, joined as a set
    """

    state = RunState.BUILDING_EVALUATIONS

    def __init__(self, adapter, engine: EvaluationEngine | None = None, inst=None):
        super().__init__(adapter, inst)
        self.engine = engine or EvaluationEngine()

    def run(self, ctx: CrossValidationContext) -> CrossValidationContext:
        requests = self.engine.plan_evaluations(
            kind=ctx.predictor_kind,
            predictor_ids=ctx.predictor_ids,
            pairs=ctx.pairs,
            dataset_name=ctx.dataset.name,
            raw_options=ctx.evaluation_options,
        )

        finished = self.fan_out(
            ctx,
            kind="evaluation",
            requests=requests,
            failure=EvaluationCreationFailed,
        )

        ctx.evaluation_ids = [resource.id for resource in finished]
        return ctx
