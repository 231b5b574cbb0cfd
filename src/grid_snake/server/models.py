"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a hosted session."""

    WAITING = "waiting"
    ACTIVE = "active"
    FINISHED = "finished"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    grid_width: int = Field(default=17, ge=3, le=101)
    grid_height: int = Field(default=17, ge=3, le=101)
    refresh_rate: float = Field(default=6.0, gt=0, le=60)
    initial_direction: str = "up"
    splash_duration: float = Field(default=2.0, ge=0)
    results_duration: float = Field(default=3.0, ge=0)
    seed: int | None = None
    frame_interval_ms: int = Field(default=16, ge=5, le=1000)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    flow_state: str | None
    score: int | None
    frame_interval_ms: int
