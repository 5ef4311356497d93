# kfold_cv/engines/option_filter.py
from __future__ import annotations

from typing import Any, Dict, FrozenSet, Mapping, Optional

MODEL_OPTIONS: FrozenSet[str] = frozenset({
    "balance_objective",
    "missing_splits",
    "pruning",
    "weight_field",
    "objective_weights",
    "node_threshold",
})

ENSEMBLE_OPTIONS: FrozenSet[str] = MODEL_OPTIONS | frozenset({
    "sample_rate",
    "replacement",
    "randomize",
    "number_of_models",
    "seed",
})

EVALUATION_OPTIONS: FrozenSet[str] = frozenset({
    "sample_rate",
    "out_of_bag",
    "range",
    "replacement",
    "ordering",
    "seed",
    "missing_strategy",
    "combiner",
})


def filter_options(
        raw_options: Optional[Mapping[str, Any]],
        whitelist: FrozenSet[str],
) -> Dict[str, Any]:
    """
    Keep only whitelisted keys. Never adds keys; unknown keys are dropped.
    """
    if not raw_options:
        return {}
    return {k: v for k, v in raw_options.items() if k in whitelist}
