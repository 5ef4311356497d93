# kfold_cv/steps/fold_step.py
from __future__ import annotations

from kfold_cv import logs
from kfold_cv.core.types import DatasetRef, Fold
from kfold_cv.engines.fold_engine import FoldEngine
from kfold_cv.pipeline.context import CrossValidationContext, RunState
from kfold_cv.pipeline.step import PipelineStep
from kfold_cv.utils.errors import FoldCreationFailed


class FoldStep(PipelineStep):
    """
    FoldStep (partition + pair)

    - Engine decides the k derive requests
    - Adapter executes them (fan-out, then join)
    - pairs are derived locally once all k folds exist
    """

    state = RunState.PARTITIONING_FOLDS

    def __init__(self, adapter, engine: FoldEngine | None = None, inst=None):
        super().__init__(adapter, inst)
        self.engine = engine or FoldEngine()

    def run(self, ctx: CrossValidationContext) -> CrossValidationContext:
        requests = self.engine.plan_folds(dataset_id=ctx.dataset.id, k=ctx.k)

        finished = self.fan_out(
            ctx,
            kind="dataset",
            requests=requests,
            failure=FoldCreationFailed,
        )

        ctx.folds = [
            Fold(index=i, dataset=DatasetRef.from_resource(resource))
            for i, resource in enumerate(finished)
        ]
        ctx.pairs = self.engine.pair_folds(ctx.folds)
        self.inst.metrics.record("k_folds", len(ctx.folds))

        logs.info(f"[{self.step_name}] {len(ctx.folds)} folds ready")
        return ctx
