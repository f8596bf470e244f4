from buildings_api.core.constants import SCHEMA_BUILDINGS, TABLE_BUILDINGS, WGS_84_SRID
from datetime import datetime
from geoalchemy2 import Geometry
from sqlalchemy import DateTime, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from typing import Any


class Base(DeclarativeBase):
    pass


class Building(Base):
    __tablename__ = TABLE_BUILDINGS
    __table_args__ = (
        { 'schema': SCHEMA_BUILDINGS }
    )

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True)
    cadastral_code: Mapped[str] = mapped_column()
    municipality_code: Mapped[str] = mapped_column()
    name: Mapped[str | None] = mapped_column()
    building_type: Mapped[str] = mapped_column()
    address: Mapped[str] = mapped_column()
    geom: Mapped[Geometry | None] = mapped_column(
        Geometry(geometry_type='POINT', srid=WGS_84_SRID, spatial_index=True),
        nullable=True,
    )
    basic_data: Mapped[dict[str, Any]] = mapped_column(JSONB, default=dict)
    visible: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    updated_by: Mapped[str | None] = mapped_column()
