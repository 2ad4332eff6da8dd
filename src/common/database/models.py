from sqlalchemy import Column, Integer, String, Float, Text, DateTime
from .database import Base
from datetime import datetime, timezone


class TrafficSampleDB(Base):
    __tablename__ = "traffic_sample"

    id = Column(Integer, primary_key=True, autoincrement=True)
    corridor = Column(String, nullable=False, index=True)
    avg_current_speed = Column(Float, nullable=True)
    avg_freeflow_speed = Column(Float, nullable=True)
    min_current_speed = Column(Float, nullable=True)
    confidence = Column(Float, nullable=True)  # average across sampled points
    incidents_json = Column(Text, nullable=True)
    polled_at = Column(DateTime(timezone=True), nullable=False, index=True,
                       default=lambda: datetime.now(timezone.utc))
