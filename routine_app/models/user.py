from datetime import datetime

from sqlalchemy import Column, Integer, String, TIMESTAMP

from routine_app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    # admin / staff
    role = Column(String(20), nullable=False, default="staff")
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
