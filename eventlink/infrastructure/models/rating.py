"""SQLAlchemy models for ratings and rating requests."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, func

from eventlink.infrastructure.database import Base


class RatingModel(Base):
    __tablename__ = "ratings"
    __table_args__ = (CheckConstraint("rating >= 1 AND rating <= 5", name="ck_ratings_range"),)

    id = Column(Integer, primary_key=True, index=True)
    job_application_id = Column(
        Integer,
        ForeignKey("job_applications.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    recruiter_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    freelancer_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rating = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class RatingRequestModel(Base):
    __tablename__ = "rating_requests"

    id = Column(Integer, primary_key=True, index=True)
    job_application_id = Column(
        Integer,
        ForeignKey("job_applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    freelancer_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    recruiter_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status = Column(String(20), nullable=False, default="pending")
    requested_at = Column(DateTime, nullable=False, server_default=func.now())
    responded_at = Column(DateTime, nullable=True)


__all__ = ["RatingModel", "RatingRequestModel"]
