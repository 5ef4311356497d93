# kfold_cv/engines/evaluation_engine.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from kfold_cv.core.types import FoldPair, PredictorKind
from kfold_cv.engines.option_filter import EVALUATION_OPTIONS, filter_options


class EvaluationEngine:
    """
    Engine layer (pure logic): evaluation + aggregate request bodies.
    """

    @staticmethod
    def evaluation_name(index: int, dataset_name: str) -> str:
        return f"{index + 1}-fold Evaluation {dataset_name}"

    def plan_evaluations(
            self,
            *,
            kind: PredictorKind,
            predictor_ids: Sequence[str],
            pairs: Sequence[FoldPair],
            dataset_name: str,
            raw_options: Optional[Mapping[str, Any]],
    ) -> List[Dict[str, Any]]:
        if len(predictor_ids) != len(pairs):
            raise ValueError(
                f"{len(predictor_ids)} predictors for {len(pairs)} folds"
            )

        options = filter_options(raw_options, EVALUATION_OPTIONS)

        requests = []
        for i in range(len(pairs)):
            body: Dict[str, Any] = {
                kind.value: predictor_ids[i],
                "dataset": pairs[i].held_out.dataset.id,
                "name": self.evaluation_name(i, dataset_name),
            }
            body.update(options)
            requests.append(body)
        return requests

    @staticmethod
    def plan_aggregate(evaluation_ids: Sequence[str]) -> Dict[str, Any]:
        return {"evaluations": list(evaluation_ids)}
