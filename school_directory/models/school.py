from sqlalchemy import Column, String, Integer, DateTime, Index
from sqlalchemy.sql import func
from .base import Base


class School(Base):
    """
    A registered school. Rows are created once and never updated.
    """
    __tablename__ = "schools"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Basic information
    name = Column(String(255), nullable=False)
    address = Column(String(500), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    contact = Column(String(10), nullable=False)
    email_id = Column(String(255), nullable=False)

    # Filename under the upload folder
    image = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_schools_created_at", "created_at"),
    )

    def __repr__(self):
        return f"<School(name={self.name}, city={self.city}, state={self.state})>"
