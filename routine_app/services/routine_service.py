# routine_app/services/routine_service.py
import logging
from typing import Iterable, List, Optional

from routine_app.schemas.routine import RoutineIn
from routine_app.services.routine_store import RoutineRepository
from routine_app.utils.conflict import (
    TIFFIN,
    Conflict,
    ConflictError,
    busy_teachers,
    find_day,
    find_first_conflict,
    normalize_teacher,
)
from routine_app.utils.timeslots import ordinal, to_minutes

logger = logging.getLogger("routine_app.routine")


def check_and_save(candidate: RoutineIn, repo: RoutineRepository, case_insensitive: bool = False):
    """
    Reject the candidate if it double-books any teacher against another
    class/section, otherwise replace (or create) its stored routine.

    Nothing is written when a conflict is found.
    """
    others = repo.list_others(candidate.class_name, candidate.section)

    conflict = find_first_conflict(candidate, others, case_insensitive)
    if conflict is not None:
        logger.warning(
            "Routine %s-%s rejected: %s",
            candidate.class_name, candidate.section, conflict.message(),
        )
        raise ConflictError(conflict)

    routine = repo.upsert(candidate)
    logger.info(
        "Routine %s-%s saved (id=%s, %d days)",
        routine.class_name, routine.section, routine.id, len(routine.days),
    )
    return routine


def preview_busy_teachers(
    repo: RoutineRepository,
    class_name: str,
    section: str,
    day: str,
    start_time: str,
    end_time: str,
    teacher: Optional[str] = None,
    case_insensitive: bool = False,
) -> List[Conflict]:
    # same "others" set the save check will use
    others = repo.list_others(class_name, section)
    return busy_teachers(day, start_time, end_time, others, teacher, case_insensitive)


def teacher_daily_schedule(routines: Iterable, teacher_name: str, day: str) -> List[dict]:
    """
    Flatten one teacher's periods for a day across every class, sorted by start.
    Period numbers follow the class's own day, skipping Tiffin.
    """
    me = normalize_teacher(teacher_name, case_insensitive=True)
    if not me:
        return []

    schedule = []
    for routine in routines:
        day_entry = find_day(routine, day)
        if day_entry is None:
            continue

        period_index = 0
        for p in day_entry.periods:
            if p.subject != TIFFIN:
                period_index += 1

            if normalize_teacher(p.teacher, case_insensitive=True) != me:
                continue

            schedule.append({
                "startTime": p.start_time,
                "endTime": p.end_time,
                "subject": p.subject,
                "teacher": p.teacher,
                "roomNo": p.room_no,
                "className": routine.class_name,
                "section": routine.section,
                "periodLabel": TIFFIN if p.subject == TIFFIN else f"{ordinal(period_index)} Period",
            })

    schedule.sort(key=lambda x: to_minutes(x["startTime"]))
    return schedule
