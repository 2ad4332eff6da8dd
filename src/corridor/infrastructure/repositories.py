from datetime import timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from ...common.database import SessionLocal, TrafficSampleDB
from ...common.exceptions import PersistenceError
from ..domain.entities import TrafficSample
from ..domain.protocols import TrafficSampleRepository


def _as_utc(value):
    # SQLite drops the offset; stored values are always UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlTrafficSampleRepository(TrafficSampleRepository):
    """
    Stores traffic samples in the ``traffic_sample`` table.
    Rows are only ever inserted.
    """
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def save(self, sample: TrafficSample) -> int:
        row = TrafficSampleDB(
            corridor=sample.corridor,
            avg_current_speed=sample.avg_current_speed,
            avg_freeflow_speed=sample.avg_freeflow_speed,
            min_current_speed=sample.min_current_speed,
            confidence=sample.confidence,
            incidents_json=sample.incidents_json,
            polled_at=sample.polled_at,
        )
        try:
            with self.session_factory() as session:
                session.add(row)
                session.commit()
                return row.id
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save sample for {sample.corridor}: {e}") from e

    def latest(self, corridor: str) -> Optional[TrafficSample]:
        query = (
            select(TrafficSampleDB)
            .where(TrafficSampleDB.corridor == corridor)
            .order_by(TrafficSampleDB.polled_at.desc(), TrafficSampleDB.id.desc())
            .limit(1)
        )
        try:
            with self.session_factory() as session:
                row = session.execute(query).scalars().first()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read latest sample for {corridor}: {e}") from e

        if row is None:
            return None
        return TrafficSample(
            id=row.id,
            corridor=row.corridor,
            avg_current_speed=row.avg_current_speed,
            avg_freeflow_speed=row.avg_freeflow_speed,
            min_current_speed=row.min_current_speed,
            confidence=row.confidence,
            incidents_json=row.incidents_json or '{"incidents": []}',
            polled_at=_as_utc(row.polled_at),
        )
