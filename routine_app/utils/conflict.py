# routine_app/utils/conflict.py
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from routine_app.utils.timeslots import to_minutes

TIFFIN = "Tiffin"


@dataclass(frozen=True)
class Conflict:
    teacher: str
    day: str
    class_name: str       # the other routine
    section: str
    start_time: str       # the other routine's period
    end_time: str
    candidate_start: str
    candidate_end: str

    def message(self) -> str:
        return (
            f"Conflict Detected: {self.teacher} is already assigned to "
            f"Class {self.class_name}-{self.section} on {self.day} "
            f"({self.start_time} - {self.end_time})"
        )

    def to_dict(self) -> dict:
        return {
            "teacher": self.teacher,
            "day": self.day,
            "className": self.class_name,
            "section": self.section,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "candidateStartTime": self.candidate_start,
            "candidateEndTime": self.candidate_end,
        }


class ConflictError(Exception):
    """A teacher would be double-booked by saving the routine."""

    def __init__(self, conflict: Conflict):
        self.conflict = conflict
        super().__init__(conflict.message())


def periods_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    # half-open [start, end): touching boundaries are not a clash
    return a_start < b_end and a_end > b_start


def is_exempt(period) -> bool:
    """Breaks and teacher-less periods never take part in the check."""
    if getattr(period, "subject", None) == TIFFIN:
        return True
    return not getattr(period, "teacher", None)


def normalize_teacher(name: Optional[str], case_insensitive: bool = False) -> str:
    if name is None:
        return ""
    if case_insensitive:
        return name.strip().casefold()
    return name


def same_teacher(a: Optional[str], b: Optional[str], case_insensitive: bool = False) -> bool:
    return normalize_teacher(a, case_insensitive) == normalize_teacher(b, case_insensitive)


def find_day(routine, day: str):
    for d in routine.week_schedule:
        if d.day == day:
            return d
    return None


def iter_conflicts(candidate, others: Iterable, case_insensitive: bool = False) -> Iterator[Conflict]:
    """
    candidate: the routine about to be saved
    others: every stored routine of a *different* class/section

    Yields one Conflict per (candidate period, other period) clash, in scan order:
    candidate day -> candidate period -> other routine -> other period.
    """
    others = list(others)
    for new_day in candidate.week_schedule:
        for new_period in new_day.periods:
            if is_exempt(new_period):
                continue

            new_start = to_minutes(new_period.start_time)
            new_end = to_minutes(new_period.end_time)

            for other in others:
                other_day = find_day(other, new_day.day)
                if other_day is None:
                    continue

                for other_period in other_day.periods:
                    if is_exempt(other_period):
                        continue
                    if not same_teacher(other_period.teacher, new_period.teacher, case_insensitive):
                        continue

                    other_start = to_minutes(other_period.start_time)
                    other_end = to_minutes(other_period.end_time)
                    if periods_overlap(new_start, new_end, other_start, other_end):
                        yield Conflict(
                            teacher=new_period.teacher,
                            day=new_day.day,
                            class_name=other.class_name,
                            section=other.section,
                            start_time=other_period.start_time,
                            end_time=other_period.end_time,
                            candidate_start=new_period.start_time,
                            candidate_end=new_period.end_time,
                        )


def find_first_conflict(candidate, others: Iterable, case_insensitive: bool = False) -> Optional[Conflict]:
    return next(iter_conflicts(candidate, others, case_insensitive), None)


def busy_teachers(
    day: str,
    start_time: str,
    end_time: str,
    others: Iterable,
    teacher: Optional[str] = None,
    case_insensitive: bool = False,
):
    """
    Advisory preview for the routine editor: who is already booked elsewhere
    in [start_time, end_time) on this day. Same exemptions, name matching and
    overlap rule as iter_conflicts, so a slot shown free here is accepted on save.
    """
    start, end = to_minutes(start_time), to_minutes(end_time)
    out = []
    for other in others:
        other_day = find_day(other, day)
        if other_day is None:
            continue
        for p in other_day.periods:
            if is_exempt(p):
                continue
            if teacher is not None and not same_teacher(p.teacher, teacher, case_insensitive):
                continue
            if periods_overlap(start, end, to_minutes(p.start_time), to_minutes(p.end_time)):
                out.append(
                    Conflict(
                        teacher=p.teacher,
                        day=day,
                        class_name=other.class_name,
                        section=other.section,
                        start_time=p.start_time,
                        end_time=p.end_time,
                        candidate_start=start_time,
                        candidate_end=end_time,
                    )
                )
    return out
