#!filepath: kfold_cv/pipeline/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from kfold_cv.core.types import DatasetRef, Fold, FoldPair, PredictorKind


class RunState(str, Enum):
    VALIDATING = "validating"
    PARTITIONING_FOLDS = "partitioning_folds"
    BUILDING_PREDICTORS = "building_predictors"
    BUILDING_EVALUATIONS = "building_evaluations"
    AGGREGATING = "aggregating"
    DONE = "done"
    FAILED = "failed"


_ORDER = [
    RunState.VALIDATING,
    RunState.PARTITIONING_FOLDS,
    RunState.BUILDING_PREDICTORS,
    RunState.BUILDING_EVALUATIONS,
    RunState.AGGREGATING,
    RunState.DONE,
]


@dataclass
class CrossValidationContext:
    """
    CrossValidationContext = the single carrier between steps.

    Semantics:
    - one context == one run
    - raw inputs are kept as given; validated values land in resolved fields
    - state only moves forward; FAILED is absorbing
    """

    # -------------------------
    # raw inputs
    # -------------------------
    dataset_id: Any
    k: Any
    objective_field: Optional[str] = None
    model_options: Dict[str, Any] = field(default_factory=dict)
    evaluation_options: Dict[str, Any] = field(default_factory=dict)

    # -------------------------
    # resolved by ValidateStep
    # -------------------------
    dataset: Optional[DatasetRef] = None
    objective_id: Optional[str] = None
    objective_name: Optional[str] = None

    # -------------------------
    # stage outputs
    # -------------------------
    folds: List[Fold] = field(default_factory=list)
    pairs: List[FoldPair] = field(default_factory=list)
    predictor_kind: Optional[PredictorKind] = None
    predictor_ids: List[str] = field(default_factory=list)
    evaluation_ids: List[str] = field(default_factory=list)
    result_id: Optional[str] = None

    # every remote resource this run created, in creation order
    created_resources: List[str] = field(default_factory=list)

    # -------------------------
    # state machine
    # -------------------------
    state: RunState = RunState.VALIDATING
    history: List[RunState] = field(default_factory=lambda: [RunState.VALIDATING])
    error: Optional[Exception] = None

    def advance(self, state: RunState) -> None:
        if self.state == RunState.FAILED:
            raise RuntimeError("run already failed")
        if state == self.state:
            return
        if _ORDER.index(state) != _ORDER.index(self.state) + 1:
            raise RuntimeError(f"illegal transition {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def fail(self, error: Exception) -> None:
        self.error = error
        self.state = RunState.FAILED
        self.history.append(RunState.FAILED)

    def track(self, resource_id: str) -> None:
        self.created_resources.append(resource_id)
