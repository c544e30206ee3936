from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from routine_app.config import settings
from routine_app.database import get_db
from routine_app.utils.auth import require_admin
from routine_app.utils.timeslots import parse_hhmm

from routine_app.schemas.routine import (
    RoutineIn, RoutineOut, RoutineSaveOut, RoutineListOut,
    TeacherScheduleOut, BusyTeacherListOut, ConflictOut, Weekday,
)
from routine_app.services.routine_store import RoutineRepository
from routine_app.services.routine_service import (
    check_and_save, preview_busy_teachers, teacher_daily_schedule,
)

import logging
logger = logging.getLogger("routine_app.routine")


router = APIRouter(prefix="/api/routines", tags=["Routines"])


def get_repo(db: Session = Depends(get_db)) -> RoutineRepository:
    return RoutineRepository(db)


@router.get("", response_model=RoutineListOut)
def list_routines(
    repo: RoutineRepository = Depends(get_repo),
    class_name: Optional[str] = Query(None, alias="className"),
    section: Optional[str] = Query(None),
):
    rows = repo.search(class_name=class_name, section=section)
    return RoutineListOut(
        count=len(rows),
        data=[RoutineOut.model_validate(r) for r in rows],
    )


# 衝堂檢查 + 整份覆蓋
@router.post("", response_model=RoutineSaveOut)
def save_routine(
    body: RoutineIn,
    repo: RoutineRepository = Depends(get_repo),
    admin=Depends(require_admin),
):
    try:
        routine = check_and_save(body, repo, settings.TEACHER_NAME_CASE_INSENSITIVE)
    except IntegrityError:
        logger.warning("Routine %s-%s: concurrent save lost the key", body.class_name, body.section)
        return JSONResponse(
            status_code=409,
            content={
                "success": False,
                "message": f"Routine for Class {body.class_name}-{body.section} was saved concurrently, please reload",
            },
        )
    return RoutineSaveOut(data=RoutineOut.model_validate(routine))


@router.get("/busy-teachers", response_model=BusyTeacherListOut)
def busy_teachers(
    repo: RoutineRepository = Depends(get_repo),
    class_name: str = Query(..., alias="className"),
    section: str = Query(...),
    day: Weekday = Query(...),
    start_time: str = Query(..., alias="startTime"),
    end_time: str = Query(..., alias="endTime"),
    teacher: Optional[str] = Query(None, description="only report this teacher"),
):
    try:
        start, end = parse_hhmm(start_time), parse_hhmm(end_time)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    # same rule as PeriodIn on save
    if end <= start:
        raise HTTPException(
            status_code=422,
            detail=f"endTime {end_time} must be after startTime {start_time}",
        )

    rows = preview_busy_teachers(
        repo, class_name.strip(), section.strip(), day, start_time, end_time,
        teacher=teacher, case_insensitive=settings.TEACHER_NAME_CASE_INSENSITIVE,
    )
    return BusyTeacherListOut(
        count=len(rows),
        data=[ConflictOut.model_validate(c.to_dict()) for c in rows],
    )


@router.get("/teacher/{teacher_name}", response_model=RoutineListOut)
def get_teacher_routines(
    teacher_name: str = Path(...),
    repo: RoutineRepository = Depends(get_repo),
):
    rows = repo.find_by_teacher(teacher_name)
    return RoutineListOut(
        count=len(rows),
        data=[RoutineOut.model_validate(r) for r in rows],
    )


@router.get("/teacher/{teacher_name}/schedule", response_model=TeacherScheduleOut)
def get_teacher_schedule(
    teacher_name: str = Path(...),
    day: Weekday = Query(...),
    repo: RoutineRepository = Depends(get_repo),
):
    entries = teacher_daily_schedule(repo.find_by_teacher(teacher_name), teacher_name, day)
    return TeacherScheduleOut(teacher=teacher_name, day=day, count=len(entries), data=entries)


@router.delete("/{routine_id}")
def delete_routine(
    routine_id: int,
    repo: RoutineRepository = Depends(get_repo),
    admin=Depends(require_admin),
):
    routine = repo.get(routine_id)
    if not routine:
        return JSONResponse(status_code=404, content={"success": False, "message": "Routine not found"})

    key = f"{routine.class_name}-{routine.section}"
    repo.delete(routine)
    logger.info("Routine %s deleted (id=%s)", key, routine_id)
    return {"success": True, "data": {}}
