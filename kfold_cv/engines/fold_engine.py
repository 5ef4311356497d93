# kfold_cv/engines/fold_engine.py
from __future__ import annotations

from typing import Any, Dict, List, Sequence

from kfold_cv.core.types import Fold, FoldPair


class FoldEngine:
    """
    Engine layer (pure logic):
    - builds the k "derive dataset" request bodies
    - pairs folds into (held-out, complement)
    - no I/O
    """

    FOLD_FIELD = "k_fold"

    # --------------------------------------------------
    def plan_folds(self, *, dataset_id: str, k: int) -> List[Dict[str, Any]]:
        """
        Row i of the origin lands in fold (i mod k): offset i, step k.
        """
        return [
            {
                "origin_dataset": dataset_id,
                "row_offset": i,
                "row_step": k,
                "new_fields": [{"name": self.FOLD_FIELD, "field": str(i)}],
            }
            for i in range(k)
        ]

    # --------------------------------------------------
    @staticmethod
    def pair_folds(folds: Sequence[Fold]) -> List[FoldPair]:
        pairs = []
        for i, held_out in enumerate(folds):
            complement = tuple(f.dataset for j, f in enumerate(folds) if j != i)
            pairs.append(FoldPair(held_out=held_out, complement=complement))
        return pairs
