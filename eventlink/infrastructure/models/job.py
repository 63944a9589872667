"""SQLAlchemy models for jobs and job applications."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.sql import expression

from eventlink.infrastructure.database import Base


class JobModel(Base):
    """Database representation of a posted gig."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    recruiter_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    type = Column(String(30), nullable=False)
    rate = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    event_date = Column(Date, nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    status = Column(String(20), nullable=False, default="active", index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())


class JobApplicationModel(Base):
    __tablename__ = "job_applications"
    __table_args__ = (
        UniqueConstraint("job_id", "freelancer_id", name="uq_job_applications_job_freelancer"),
    )

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(
        Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    freelancer_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status = Column(String(20), nullable=False, default="applied")
    cover_letter = Column(Text, nullable=True)
    rejection_message = Column(Text, nullable=True)
    freelancer_deleted = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    recruiter_deleted = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    applied_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())


__all__ = ["JobApplicationModel", "JobModel"]
