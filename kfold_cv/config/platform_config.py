# kfold_cv/config/platform_config.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class PlatformConfig(BaseModel):
    """
    Remote platform endpoint + polling policy.

    wait_timeout=None means every join waits without bound.
    """

    base_url: str = "https://platform.example.com/api"
    poll_interval: float = Field(default=2.0, gt=0)
    wait_timeout: Optional[float] = Field(default=None, gt=0)
    request_timeout: float = Field(default=30.0, gt=0)
    max_fetch_attempts: int = Field(default=3, ge=1)
