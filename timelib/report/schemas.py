"""Pydantic snapshot models for stopwatches and timers."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class DurationModel(BaseModel):
    seconds: int
    nanoseconds: int
    count: float
    text: str


class StopwatchSummary(BaseModel):
    rounds: List[DurationModel]
    total: DurationModel
    mean: Optional[DurationModel] = None


class TimerSummary(BaseModel):
    elapsed: DurationModel
    timeout: Optional[DurationModel] = None
    remaining: DurationModel
    has_timeout: bool
    paused: bool


__all__ = ["DurationModel", "StopwatchSummary", "TimerSummary"]
