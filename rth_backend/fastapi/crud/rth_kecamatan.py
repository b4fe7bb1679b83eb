"""
District RTH CRUD operations.

Provides the filtered/sorted listing behind the public data page, the
dashboard totals, and the admin create/update/delete operations.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rth_backend.fastapi.core.exceptions import NotFoundError, ValidationError
from rth_backend.fastapi.models.rth_kecamatan import RthKecamatan
from rth_backend.fastapi.schemas.rth_kecamatan import (
    RTH_TARGET_PERCENT,
    RthKecamatanCreate,
    RthKecamatanUpdate,
    RthSummary,
    SortDirection,
    SortField,
)


class RthKecamatanCRUD:
    """CRUD operations for RthKecamatan model."""

    def __init__(self, db: Session):
        self.db = db

    def list_records(
        self,
        cluster: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: Optional[SortField] = None,
        direction: SortDirection = SortDirection.ASCENDING,
    ) -> List[RthKecamatan]:
        """
        List district records with the data page's filter and sort rules.

        Args:
            cluster: Exact cluster label; ``None`` or ``"all"`` disables the filter
            search: Case-insensitive substring of the district name
            sort_by: Column to sort on; insertion order when omitted
            direction: ``ascending`` puts missing values first, ``descending`` last

        Returns:
            List of RthKecamatan instances
        """
        query = self.db.query(RthKecamatan)

        if cluster and cluster != "all":
            query = query.filter(RthKecamatan.cluster == cluster)

        if search and search.strip():
            query = query.filter(
                func.lower(RthKecamatan.kecamatan).contains(search.strip().lower())
            )

        if sort_by is not None:
            column = getattr(RthKecamatan, SortField(sort_by).value)
            if direction == SortDirection.DESCENDING:
                query = query.order_by(column.desc().nullslast(), RthKecamatan.kecamatan)
            else:
                query = query.order_by(column.asc().nullsfirst(), RthKecamatan.kecamatan)
        else:
            query = query.order_by(RthKecamatan.created_at, RthKecamatan.kecamatan)

        return query.all()

    def list_clusters(self) -> List[str]:
        rows = (
            self.db.query(RthKecamatan.cluster)
            .filter(RthKecamatan.cluster.isnot(None), RthKecamatan.cluster != "")
            .distinct()
            .order_by(RthKecamatan.cluster)
            .all()
        )
        return [row[0] for row in rows]

    def get_record(self, record_id: UUID) -> Optional[RthKecamatan]:
        return self.db.query(RthKecamatan).filter(RthKecamatan.id == record_id).first()

    def get_record_by_name(self, kecamatan: str) -> Optional[RthKecamatan]:
        return (
            self.db.query(RthKecamatan)
            .filter(func.lower(RthKecamatan.kecamatan) == kecamatan.strip().lower())
            .first()
        )

    def create_record(self, data: RthKecamatanCreate) -> RthKecamatan:
        """
        Create a district record.

        Raises:
            ValidationError: If the name is blank or a district with the same name exists
        """
        name = data.kecamatan.strip()
        if not name:
            raise ValidationError("Nama kecamatan harus diisi")
        if self.get_record_by_name(name):
            raise ValidationError(f"Data kecamatan {name} sudah ada", code="DUPLICATE_KECAMATAN")

        total_rth = data.total_rth
        if total_rth is None:
            total_rth = data.luas_taman + data.luas_pemakaman

        record = RthKecamatan(
            kecamatan=name,
            luas_taman=data.luas_taman,
            luas_pemakaman=data.luas_pemakaman,
            total_rth=total_rth,
            luas_kecamatan=data.luas_kecamatan,
            cluster=data.cluster or None,
        )
        self.db.add(record)
        self._commit_unique(name)
        self.db.refresh(record)
        return record

    def update_record(self, record_id: UUID, data: RthKecamatanUpdate) -> RthKecamatan:
        """
        Update a district record.

        When park or cemetery area changes without an explicit ``total_rth``,
        the total is recomputed from the new areas.

        Raises:
            NotFoundError: If the record does not exist
            ValidationError: If the new name belongs to another district
        """
        record = self.get_record(record_id)
        if not record:
            raise NotFoundError("Data kecamatan tidak ditemukan")

        update_data = data.model_dump(exclude_unset=True)

        if update_data.get("kecamatan") is not None:
            update_data["kecamatan"] = update_data["kecamatan"].strip()
            if not update_data["kecamatan"]:
                raise ValidationError("Nama kecamatan harus diisi")
            existing = self.get_record_by_name(update_data["kecamatan"])
            if existing and existing.id != record.id:
                raise ValidationError(
                    f"Data kecamatan {update_data['kecamatan']} sudah ada",
                    code="DUPLICATE_KECAMATAN",
                )

        recompute_total = False
        if update_data.get("total_rth") is None:
            update_data.pop("total_rth", None)
            recompute_total = "luas_taman" in update_data or "luas_pemakaman" in update_data

        for field, value in update_data.items():
            # Only cluster may be cleared; null for a required column means "unchanged"
            if value is None and field != "cluster":
                continue
            setattr(record, field, value)

        if recompute_total:
            record.total_rth = record.luas_taman + record.luas_pemakaman

        self._commit_unique(record.kecamatan)
        self.db.refresh(record)
        return record

    def delete_record(self, record_id: UUID) -> None:
        record = self.get_record(record_id)
        if not record:
            raise NotFoundError("Data kecamatan tidak ditemukan")
        self.db.delete(record)
        self.db.commit()

    def summarize(self, records: List[RthKecamatan]) -> RthSummary:
        """Totals and the RTH share against the public RTH target."""
        total_taman = sum(r.luas_taman or 0 for r in records)
        total_pemakaman = sum(r.luas_pemakaman or 0 for r in records)
        total_rth = sum(r.total_rth or 0 for r in records)
        total_kecamatan = sum(r.luas_kecamatan or 0 for r in records)
        persentase = total_rth / total_kecamatan * 100 if total_kecamatan > 0 else 0.0

        return RthSummary(
            total_luas_taman=round(total_taman, 3),
            total_luas_pemakaman=round(total_pemakaman, 3),
            total_rth=round(total_rth, 3),
            total_luas_kecamatan=round(total_kecamatan, 3),
            persentase_rth=round(persentase, 2),
            jumlah_kecamatan=len(records),
            target_persentase=RTH_TARGET_PERCENT,
            target_tercapai=persentase >= RTH_TARGET_PERCENT,
        )

    def _commit_unique(self, name: str) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationError(f"Data kecamatan {name} sudah ada", code="DUPLICATE_KECAMATAN")
