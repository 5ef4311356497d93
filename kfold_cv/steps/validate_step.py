# kfold_cv/steps/validate_step.py
from __future__ import annotations

from kfold_cv import logs
from kfold_cv.core.types import DatasetRef
from kfold_cv.engines.validation_engine import ValidationEngine
from kfold_cv.pipeline.context import CrossValidationContext, RunState
from kfold_cv.pipeline.step import PipelineStep
from kfold_cv.utils.errors import DatasetFetchFailed, InvalidArgument, PlatformRequestError


class ValidateStep(PipelineStep):
    """
    ValidateStep

    Contract:
    - consumes ctx.dataset_id / ctx.k / ctx.objective_field / ctx.model_options
    - produces ctx.dataset / ctx.k (int) / ctx.objective_id / ctx.objective_name
    - creates nothing on the platform; only the dataset is fetched
    - an unknown dataset (HTTP 404) is a 101; other fetch errors are DatasetFetchFailed
    """

    state = RunState.VALIDATING

    def __init__(self, adapter, engine: ValidationEngine | None = None, inst=None):
        super().__init__(adapter, inst)
        self.engine = engine or ValidationEngine()

    def run(self, ctx: CrossValidationContext) -> CrossValidationContext:
        ref = self.engine.validate_resource_ref(ctx.dataset_id, "dataset")
        ctx.k = self.engine.validate_fold_count(ctx.k)
        self.engine.validate_model_count(ctx.model_options)

        dataset = self._fetch_dataset(ref.id)

        objective_id = self.engine.resolve_objective_id(dataset, ctx.objective_field)
        ctx.objective_name = self.engine.validate_objective_field(objective_id, dataset)
        ctx.objective_id = objective_id
        ctx.dataset = dataset

        logs.info(
            f"[{self.step_name}] {dataset.id} ({dataset.name}) "
            f"k={ctx.k} objective={ctx.objective_name}"
        )
        return ctx

    def _fetch_dataset(self, dataset_id: str) -> DatasetRef:
        try:
            with self.inst.timer(f"{self.step_name}.fetch_dataset"):
                resource = self.adapter.fetch(dataset_id)
        except PlatformRequestError as e:
            if e.status_code == 404:
                raise InvalidArgument(f"dataset {dataset_id} does not exist", code=101) from e
            raise DatasetFetchFailed(dataset_id, str(e)) from e
        return DatasetRef.from_resource(resource)
