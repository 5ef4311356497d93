# kfold_cv/engines/validation_engine.py
from __future__ import annotations

from typing import Any, Mapping, Optional

from kfold_cv.core.types import DatasetRef, ResourceRef
from kfold_cv.utils.errors import (
    InvalidArgument,
    ObjectiveNotSelectable,
    OutOfRange,
    WrongResourceKind,
)


class ValidationEngine:
    """
    Engine layer (pure logic):
    - no remote calls
    - raises ValidationError subclasses, never returns a partial result
    """

    MIN_FOLDS = 2

    # --------------------------------------------------
    @staticmethod
    def validate_resource_ref(ref: Any, expected_kind: str) -> ResourceRef:
        if not isinstance(ref, str):
            raise InvalidArgument(
                f"resource id must be a string, got {type(ref).__name__}: {ref!r}",
                code=101,
            )
        try:
            parsed = ResourceRef.parse(ref)
        except ValueError:
            raise InvalidArgument(f"malformed resource id: {ref!r}", code=101)

        if parsed.kind != expected_kind:
            raise WrongResourceKind(
                f"expected a {expected_kind} id, got {parsed.kind} ({ref})"
            )
        return parsed

    # --------------------------------------------------
    @classmethod
    def validate_fold_count(cls, k: Any) -> int:
        # bool is an int subclass; True folds make no sense
        if isinstance(k, bool) or not isinstance(k, int):
            raise InvalidArgument(
                f"number of folds must be an integer, got {k!r}", code=103
            )
        if k < cls.MIN_FOLDS:
            raise OutOfRange(
                f"number of folds must be >= {cls.MIN_FOLDS}, got {k}"
            )
        return k

    # --------------------------------------------------
    @staticmethod
    def validate_model_count(model_options: Optional[Mapping[str, Any]]) -> int:
        """
        number_of_models: missing or null means 1; otherwise an integer >= 1.
        """
        n = (model_options or {}).get("number_of_models")
        if n is None:
            return 1
        if isinstance(n, bool) or not isinstance(n, int):
            raise InvalidArgument(
                f"number_of_models must be an integer, got {n!r}", code=103
            )
        if n < 1:
            raise OutOfRange(f"number_of_models must be >= 1, got {n}")
        return n

    # --------------------------------------------------
    @staticmethod
    def resolve_objective_id(dataset: DatasetRef, objective_id: Optional[str] = None) -> str:
        """
        Explicit id wins; otherwise the dataset's declared default,
        otherwise the last selectable field (platform convention).
        """
        if objective_id:
            return objective_id
        if dataset.objective_field:
            return dataset.objective_field

        selectable = dataset.selectable_fields()
        if not selectable:
            raise ObjectiveNotSelectable(
                f"dataset {dataset.id} has no field usable as objective"
            )
        return selectable[-1].id

    # --------------------------------------------------
    @staticmethod
    def validate_objective_field(objective_id: str, dataset: DatasetRef) -> str:
        """
        Returns the objective's display name.
        """
        selectable = {f.id: f for f in dataset.selectable_fields()}
        if objective_id not in selectable:
            raise ObjectiveNotSelectable(
                f"field {objective_id!r} of {dataset.id} is not a preferred "
                f"categorical or numeric field"
            )
        return selectable[objective_id].name
