# routine_app/services/routine_store.py
"""Persistence for routines: the only place that touches the routine tables."""
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from routine_app.models.routine import Routine, RoutineDay, RoutinePeriod
from routine_app.schemas.routine import RoutineIn


class RoutineRepository:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Routine).options(
            selectinload(Routine.days).selectinload(RoutineDay.periods)
        )

    def get(self, routine_id: int) -> Optional[Routine]:
        return self._query().filter(Routine.id == routine_id).first()

    def get_by_key(self, class_name: str, section: str) -> Optional[Routine]:
        return (
            self._query()
            .filter(Routine.class_name == class_name, Routine.section == section)
            .first()
        )

    def search(self, class_name: Optional[str] = None, section: Optional[str] = None) -> List[Routine]:
        q = self._query()
        if class_name:
            q = q.filter(Routine.class_name == class_name)
        if section:
            q = q.filter(Routine.section == section)
        return q.order_by(Routine.class_name.asc(), Routine.section.asc()).all()

    def list_others(self, class_name: str, section: str) -> List[Routine]:
        """Every routine except the one stored under (class_name, section)."""
        return (
            self._query()
            .filter(or_(Routine.class_name != class_name, Routine.section != section))
            .all()
        )

    def find_by_teacher(self, teacher_name: str) -> List[Routine]:
        name = teacher_name.strip().lower()
        match = RoutineDay.periods.any(func.lower(func.trim(RoutinePeriod.teacher)) == name)
        return (
            self._query()
            .filter(Routine.days.any(match))
            .order_by(Routine.class_name.asc(), Routine.section.asc())
            .all()
        )

    def upsert(self, candidate: RoutineIn) -> Routine:
        """
        Full replace of the week for (className, section); insert when new.
        Raises IntegrityError (after rollback) if a concurrent insert took the key.
        """
        routine = self.get_by_key(candidate.class_name, candidate.section)
        if routine is None:
            routine = Routine(class_name=candidate.class_name, section=candidate.section)
            self.db.add(routine)
        else:
            routine.updated_at = func.now()

        routine.days = [
            RoutineDay(
                day=d.day,
                position=i,
                periods=[
                    RoutinePeriod(
                        position=j,
                        start_time=p.start_time,
                        end_time=p.end_time,
                        subject=p.subject,
                        teacher=p.teacher,
                        room_no=p.room_no,
                    )
                    for j, p in enumerate(d.periods)
                ],
            )
            for i, d in enumerate(candidate.week_schedule)
        ]

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(routine)
        return routine

    def delete(self, routine: Routine):
        self.db.delete(routine)
        self.db.commit()
