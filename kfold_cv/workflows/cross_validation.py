# kfold_cv/workflows/cross_validation.py
from __future__ import annotations

from typing import Any, Mapping, Optional

from kfold_cv import logs
from kfold_cv.adapters.resource_adapter import ResourceAdapter
from kfold_cv.config.app_config import AppConfig
from kfold_cv.observability.instrumentation import Instrumentation
from kfold_cv.pipeline.context import CrossValidationContext
from kfold_cv.pipeline.pipeline import CrossValidationPipeline
from kfold_cv.steps.aggregate_step import AggregateStep
from kfold_cv.steps.evaluation_step import EvaluationStep
from kfold_cv.steps.fold_step import FoldStep
from kfold_cv.steps.predictor_step import PredictorStep
from kfold_cv.steps.validate_step import ValidateStep


def build_cross_validation_pipeline(
        cfg: AppConfig | None = None,
        adapter: ResourceAdapter | None = None,
        inst: Instrumentation | None = None,
) -> CrossValidationPipeline:
    """
    Cross-validation workflow:
    Validate → Folds (+pairs) → Predictors → Evaluations → Aggregate
    """
    if cfg is None:
        cfg = AppConfig.load()
    if adapter is None:
        adapter = ResourceAdapter(cfg.platform, cfg.secret)
    if inst is None:
        inst = Instrumentation()

    return CrossValidationPipeline(
        steps=[
            ValidateStep(adapter, inst=inst),
            FoldStep(adapter, inst=inst),
            PredictorStep(adapter, inst=inst),
            EvaluationStep(adapter, inst=inst),
            AggregateStep(adapter, inst=inst),
        ],
        adapter=adapter,
        inst=inst,
        cfg=cfg.cross_validation,
    )


def run_cross_validation(
        dataset_id: Any,
        k: Any,
        objective_field: Optional[str] = None,
        model_options: Optional[Mapping[str, Any]] = None,
        evaluation_options: Optional[Mapping[str, Any]] = None,
        *,
        adapter: ResourceAdapter | None = None,
        cfg: AppConfig | None = None,
        inst: Instrumentation | None = None,
) -> str:
    """
    Run one k-fold cross-validation and return the aggregate evaluation id.

    k is required here; only the CLI falls back to cross_validation.default_k_folds.
    Raises ValidationError (101/102/103/104/106) or PipelineFailure.
    """
    if cfg is None:
        cfg = AppConfig.load()
        logs.reconfigure(cfg.log.dir, cfg.log.rotation, cfg.log.retention, cfg.log.level)

    pipeline = build_cross_validation_pipeline(cfg=cfg, adapter=adapter, inst=inst)
    ctx = CrossValidationContext(
        dataset_id=dataset_id,
        k=k,
        objective_field=objective_field,
        model_options=dict(model_options or {}),
        evaluation_options=dict(evaluation_options or {}),
    )

    ctx = pipeline.run(ctx)
    return ctx.result_id
