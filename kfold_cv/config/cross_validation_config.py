# kfold_cv/config/cross_validation_config.py
from __future__ import annotations

from pydantic import BaseModel, Field


class CrossValidationConfig(BaseModel):
    default_k_folds: int = Field(default=5, ge=2)

    # delete every resource the run created when a remote stage fails
    cleanup_on_failure: bool = False
