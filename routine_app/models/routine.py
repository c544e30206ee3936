from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from routine_app.database import Base


class Routine(Base):
    __tablename__ = "routines"
    __table_args__ = (
        # one routine per class + section
        UniqueConstraint("class_name", "section", name="uq_routines_class_section"),
    )

    id = Column(Integer, primary_key=True, index=True)
    class_name = Column(String(50), nullable=False, index=True)
    section = Column(String(50), nullable=False, default="A")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    days = relationship(
        "RoutineDay",
        back_populates="routine",
        order_by="RoutineDay.position",
        cascade="all, delete-orphan",
    )

    @property
    def week_schedule(self):
        return self.days


class RoutineDay(Base):
    __tablename__ = "routine_days"

    id = Column(Integer, primary_key=True)
    routine_id = Column(Integer, ForeignKey("routines.id", ondelete="CASCADE"), nullable=False)

    # Monday .. Saturday
    day = Column(String(10), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    routine = relationship("Routine", back_populates="days")
    periods = relationship(
        "RoutinePeriod",
        back_populates="routine_day",
        order_by="RoutinePeriod.position",
        cascade="all, delete-orphan",
    )


class RoutinePeriod(Base):
    __tablename__ = "routine_periods"

    id = Column(Integer, primary_key=True)
    day_id = Column(Integer, ForeignKey("routine_days.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    # "HH:MM"
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    subject = Column(String(100), nullable=False)
    teacher = Column(String(100))  # empty for Tiffin
    room_no = Column(String(50))

    routine_day = relationship("RoutineDay", back_populates="periods")
