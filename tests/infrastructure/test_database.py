"""Tests for schema management helpers."""

from __future__ import annotations

from eventlink.infrastructure.database import Base, SessionLocal, engine, initialize_database
from eventlink.infrastructure.models import NotificationModel, UserModel


def test_every_model_table_is_registered_on_the_metadata():
    tables = set(Base.metadata.tables)

    assert {"users", "notifications", "conversations", "ratings"} <= tables


def test_drop_and_initialize_leaves_no_rows_behind(api):
    api.register("crew@eventlink.io")

    Base.metadata.drop_all(bind=engine)
    initialize_database()

    session = SessionLocal()
    try:
        assert session.query(UserModel).count() == 0
        assert session.query(NotificationModel).count() == 0
    finally:
        session.close()
