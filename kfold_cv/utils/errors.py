# kfold_cv/utils/errors.py
from __future__ import annotations

from typing import Any, Dict, Optional


class KFoldError(RuntimeError):
    """Root of every error raised by kfold_cv."""


# ============================================================
# Validation errors (raised before any remote resource exists)
# ============================================================
class ValidationError(KFoldError):
    """
    Raised for invalid user-provided input (dataset id, k, objective).
    Should NOT print traceback.
    """

    code: int = 0

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


class InvalidArgument(ValidationError):
    # 101: malformed resource id, 103: non-integer fold count
    code = 101


class WrongResourceKind(ValidationError):
    code = 102


class OutOfRange(ValidationError):
    code = 104


class ObjectiveNotSelectable(ValidationError):
    code = 106


# ============================================================
# Adapter-level errors
# ============================================================
class PlatformRequestError(KFoldError):
    """HTTP / transport failure talking to the platform."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "PlatformRequestError", "status_code": self.status_code, "message": str(self)}


class ResourceFailed(KFoldError):
    """A waited resource reached a failed terminal state."""

    def __init__(self, resource_id: str, cause: str):
        super().__init__(f"{resource_id} failed: {cause}")
        self.resource_id = resource_id
        self.cause = cause


# ============================================================
# Pipeline failures (remote creation / terminal failures)
# ============================================================
class PipelineFailure(KFoldError):
    stage: str = "pipeline"

    def __init__(self, resource_id: Optional[str], cause: str):
        super().__init__(f"[{self.stage}] {resource_id or '<no resource>'}: {cause}")
        self.resource_id = resource_id
        self.cause = cause

    @classmethod
    def wrap(cls, err: Exception) -> "PipelineFailure":
        """Translate an adapter error into this stage's failure."""
        if isinstance(err, ResourceFailed):
            return cls(err.resource_id, err.cause)
        return cls(None, str(err))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "PipelineFailure",
            "stage": self.stage,
            "resource_id": self.resource_id,
            "cause": self.cause,
        }


class DatasetFetchFailed(PipelineFailure):
    stage = "dataset"


class FoldCreationFailed(PipelineFailure):
    stage = "folds"


class PredictorCreationFailed(PipelineFailure):
    stage = "predictors"


class EvaluationCreationFailed(PipelineFailure):
    stage = "evaluations"


class AggregationFailed(PipelineFailure):
    stage = "aggregate"


class WaitTimeout(PipelineFailure):
    stage = "wait"
