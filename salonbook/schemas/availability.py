"""
Pydantic schemas for weekly working hours
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import time


class WorkingDay(BaseModel):
    """One day of the week; 0=Sunday ... 6=Saturday"""
    day_of_week: int = Field(..., ge=0, le=6)
    enabled: bool = True
    start_time: Optional[time] = None
    end_time: Optional[time] = None

    @model_validator(mode='after')
    def check_hours(self):
        if self.enabled:
            if self.start_time is None or self.end_time is None:
                raise ValueError('start_time and end_time are required for an enabled day')
            if self.start_time >= self.end_time:
                raise ValueError('start_time must be before end_time')
        return self


class WeeklyHoursRequest(BaseModel):
    days: List[WorkingDay]


class AvailabilityWindowResponse(BaseModel):
    id: str
    day_of_week: int
    start_time: str
    end_time: str


class WeeklyHoursResponse(BaseModel):
    days: List[AvailabilityWindowResponse]
