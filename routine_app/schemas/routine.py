from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from routine_app.utils.timeslots import parse_hhmm


Weekday = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


class PeriodIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_time: str = Field(alias="startTime", description="HH:MM, 24h")
    end_time: str = Field(alias="endTime", description="HH:MM, 24h")
    subject: str
    teacher: Optional[str] = None
    room_no: Optional[str] = Field(default=None, alias="roomNo")

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_time(cls, v: str) -> str:
        parse_hhmm(v)
        return v.strip()

    @field_validator("subject")
    @classmethod
    def _check_subject(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("subject is required")
        return v

    @field_validator("teacher")
    @classmethod
    def _blank_teacher(cls, v: Optional[str]) -> Optional[str]:
        # "   " is stored as no teacher
        if v is None:
            return None
        return v.strip() or None

    @model_validator(mode="after")
    def _check_range(self):
        if parse_hhmm(self.end_time) <= parse_hhmm(self.start_time):
            raise ValueError(f"endTime {self.end_time} must be after startTime {self.start_time}")
        return self


class DayScheduleIn(BaseModel):
    day: Weekday
    periods: List[PeriodIn] = Field(default_factory=list)


class RoutineIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(alias="className")
    section: str
    week_schedule: List[DayScheduleIn] = Field(alias="weekSchedule", min_length=1)

    @field_validator("class_name", "section")
    @classmethod
    def _strip_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("className and section are required")
        return v

    @model_validator(mode="after")
    def _unique_days(self):
        seen = set()
        for d in self.week_schedule:
            if d.day in seen:
                raise ValueError(f"day '{d.day}' appears more than once in weekSchedule")
            seen.add(d.day)
        return self


class PeriodOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    subject: str
    teacher: Optional[str] = None
    room_no: Optional[str] = Field(default=None, alias="roomNo")


class DayScheduleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: str
    periods: List[PeriodOut] = []


class RoutineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    class_name: str = Field(alias="className")
    section: str
    week_schedule: List[DayScheduleOut] = Field(default=[], alias="weekSchedule")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class RoutineSaveOut(BaseModel):
    success: bool = True
    data: RoutineOut


class RoutineListOut(BaseModel):
    success: bool = True
    count: int
    data: List[RoutineOut]


class ConflictOut(BaseModel):
    teacher: str
    day: str
    class_name: str = Field(alias="className")
    section: str
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")


class TeacherScheduleEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    subject: str
    teacher: Optional[str] = None
    room_no: Optional[str] = Field(default=None, alias="roomNo")
    class_name: str = Field(alias="className")
    section: str
    period_label: str = Field(alias="periodLabel")


class TeacherScheduleOut(BaseModel):
    success: bool = True
    teacher: str
    day: str
    count: int
    data: List[TeacherScheduleEntry]


class BusyTeacherListOut(BaseModel):
    success: bool = True
    count: int
    data: List[ConflictOut]
