from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

SideLabel = Literal["red", "black"]


class CoordinateModel(BaseModel):
    row: int = Field(..., ge=0, le=7)
    col: int = Field(..., ge=0, le=7)


class SelectRequest(BaseModel):
    square: CoordinateModel


class MoveRequest(BaseModel):
    destination: CoordinateModel
    start: Optional[CoordinateModel] = Field(
        default=None, description="Selects this piece first when given."
    )


class ResetRequest(BaseModel):
    startingSide: Optional[SideLabel] = None


class StartingSideRequest(BaseModel):
    startingSide: SideLabel


class PlayerNamesRequest(BaseModel):
    red: Optional[str] = Field(default=None, max_length=40)
    black: Optional[str] = Field(default=None, max_length=40)
