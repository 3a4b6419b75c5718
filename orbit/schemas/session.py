from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, Dict

from orbit.schemas.enums import Mode


class SessionStart(BaseModel):
    mode: Mode
    energy_level: int = Field(50, alias="energyLevel", ge=0, le=100)
    task_id: Optional[int] = Field(None, alias="taskId")
    # énergie de fin pour la session qu'on ferme au passage
    ending_energy: Optional[int] = Field(None, alias="endingEnergy", ge=0, le=100)

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)


class SessionEnd(BaseModel):
    energy_level: Optional[int] = Field(None, alias="energyLevel", ge=0, le=100)

    model_config = ConfigDict(populate_by_name=True)


class SessionResponse(BaseModel):
    id: int
    user_id: str
    mode: str
    start_time: datetime
    end_time: Optional[datetime]
    energy_start: Optional[int]
    energy_end: Optional[int]
    task_id: Optional[int]

    model_config = ConfigDict(from_attributes=True)


class SessionStartResponse(BaseModel):
    session: SessionResponse
    greeting: str


class ModeStatsResponse(BaseModel):
    mode_durations: Dict[str, int] = Field(alias="modeDurations")  # minutes
    current_streak: int = Field(alias="currentStreak")

    model_config = ConfigDict(populate_by_name=True)
