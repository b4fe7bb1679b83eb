"""
District green open space (RTH) model.

One row per kecamatan (district) of Bandung with its park, cemetery and
total RTH area alongside the district's own area, all in hectares.
"""

import uuid

from sqlalchemy import Column, DateTime, Float, String, Uuid

from rth_backend.fastapi.core.utils import utcnow
from rth_backend.fastapi.dependencies.database import Base


class RthKecamatan(Base):
    __tablename__ = "rth_kecamatan"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    kecamatan = Column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        comment="District name"
    )

    luas_taman = Column(Float, nullable=False, default=0.0, comment="Park area (ha)")
    luas_pemakaman = Column(Float, nullable=False, default=0.0, comment="Cemetery area (ha)")
    total_rth = Column(Float, nullable=False, default=0.0, comment="Total public RTH area (ha)")
    luas_kecamatan = Column(Float, nullable=False, default=0.0, comment="District area (ha)")

    cluster = Column(String(50), nullable=True, index=True, comment="Cluster label")

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    @property
    def persentase_rth(self) -> float:
        """RTH share of the district area in percent (0 when the area is unknown)."""
        if not self.luas_kecamatan:
            return 0.0
        return self.total_rth / self.luas_kecamatan * 100

    def __repr__(self) -> str:
        return f"<RthKecamatan(kecamatan='{self.kecamatan}', total_rth={self.total_rth})>"
