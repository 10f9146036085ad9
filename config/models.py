"""
SQLAlchemy ORM Models
"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship, declarative_base

from utils.timestamps import utc_now

Base = declarative_base()

class User(Base):
    __tablename__ = 'users'

    email = Column(String, primary_key=True)  # Case-sensitive, stored as given
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    is_premium = Column(Boolean, nullable=False, default=False)
    subscription_date = Column(DateTime)
    created_at = Column(DateTime, nullable=False, default=utc_now)

    # Relationships
    sessions = relationship("SessionRecord", back_populates="user", cascade="all, delete-orphan")

class SessionRecord(Base):
    __tablename__ = 'sessions'

    session_key = Column(String, primary_key=True)
    email = Column(String, ForeignKey('users.email'), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)

    # Relationships
    user = relationship("User", back_populates="sessions")
