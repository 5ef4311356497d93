# kfold_cv/engines/predictor_engine.py
from __future__ import annotations

from abc import ABC
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Sequence

from kfold_cv.core.types import FoldPair, PredictorKind
from kfold_cv.engines.option_filter import (
    ENSEMBLE_OPTIONS,
    MODEL_OPTIONS,
    filter_options,
)
from kfold_cv.engines.validation_engine import ValidationEngine


class PredictorBuilder(ABC):
    """
    One builder per PredictorKind (closed set).

    Contract:
    - kind      : resource kind created on the platform
    - whitelist : options the kind accepts
    - request() : body for one fold complement
    """

    kind: PredictorKind
    whitelist: FrozenSet[str]

    def request(
            self,
            pair: FoldPair,
            objective_name: str,
            options: Mapping[str, Any],
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "datasets": pair.complement_ids(),
            "objective_field": objective_name,
        }
        body.update(options)
        return body


class ModelBuilder(PredictorBuilder):
    kind = PredictorKind.MODEL
    whitelist = MODEL_OPTIONS


class EnsembleBuilder(PredictorBuilder):
    kind = PredictorKind.ENSEMBLE
    whitelist = ENSEMBLE_OPTIONS


_BUILDERS: Dict[PredictorKind, PredictorBuilder] = {
    PredictorKind.MODEL: ModelBuilder(),
    PredictorKind.ENSEMBLE: EnsembleBuilder(),
}


class PredictorEngine:
    """
    Engine layer (pure logic):
    - decides the kind ONCE per run
    - filters options through that kind's whitelist
    - produces k request bodies in fold order
    """

    @staticmethod
    def select_kind(raw_options: Optional[Mapping[str, Any]]) -> PredictorKind:
        number_of_models = ValidationEngine.validate_model_count(raw_options)
        return PredictorKind.ENSEMBLE if number_of_models > 1 else PredictorKind.MODEL

    @staticmethod
    def builder_for(kind: PredictorKind) -> PredictorBuilder:
        return _BUILDERS[kind]

    def plan_predictors(
            self,
            *,
            pairs: Sequence[FoldPair],
            objective_name: str,
            raw_options: Optional[Mapping[str, Any]],
    ) -> tuple[PredictorKind, List[Dict[str, Any]]]:
        kind = self.select_kind(raw_options)
        builder = self.builder_for(kind)
        options = filter_options(raw_options, builder.whitelist)

        return kind, [builder.request(pair, objective_name, options) for pair in pairs]
