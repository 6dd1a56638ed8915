from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Service(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class ServiceListResponse(BaseModel):
    status: str
    message: Optional[str] = None
    data: List[Service] = Field(default_factory=list)


class ServiceOption(BaseModel):
    """A single entry of the service select in the edit form."""

    value: str
    label: str
    disabled: bool = False
