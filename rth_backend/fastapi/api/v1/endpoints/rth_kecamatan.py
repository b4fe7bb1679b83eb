"""
District RTH endpoints.

Public routes feed the data page (listing, totals, cluster options and the
Excel download); admin routes manage the district records.
"""

import io
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from uuid import UUID

import pandas as pd
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse
from openpyxl.utils import get_column_letter
from sqlalchemy.orm import Session

from rth_backend.fastapi.core.exceptions import NotFoundError
from rth_backend.fastapi.crud.rth_kecamatan import RthKecamatanCRUD
from rth_backend.fastapi.dependencies.database import get_sync_db
from rth_backend.fastapi.models.admin import Admin
from rth_backend.fastapi.models.rth_kecamatan import RthKecamatan
from rth_backend.fastapi.schemas.rth_kecamatan import (
    ClusterListResponse, RthKecamatanCreate, RthKecamatanDetail,
    RthKecamatanRead, RthKecamatanResponse, RthKecamatanUpdate,
    RthSummaryResponse, SortDirection, SortField
)
from rth_backend.fastapi.schemas.admin import MessageResponse
from rth_backend.security.dependencies import RequireAdmin


router = APIRouter(tags=["rth-kecamatan"])

EXPORT_SHEET_NAME = "Data RTH Bandung"

EXPORT_COLUMNS = [
    ("No", 5),
    ("Kecamatan", 20),
    ("Luas Taman (ha)", 18),
    ("Luas Pemakaman (ha)", 20),
    ("Total RTH (ha)", 15),
    ("Luas Kecamatan (ha)", 20),
    ("Persentase RTH (%)", 18),
    ("Cluster", 15),
]

# Export timestamps are local Bandung time (WIB)
WIB = timezone(timedelta(hours=7))

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _percentage(total_rth: float, luas_kecamatan: float) -> float:
    if not luas_kecamatan or luas_kecamatan <= 0:
        return 0.0
    return round(total_rth / luas_kecamatan * 100, 2)


def build_export_rows(records: List[RthKecamatan]) -> List[dict]:
    """
    Build spreadsheet rows for the given records plus a trailing TOTAL row.

    Areas are rounded to 3 decimals, district area to whole hectares and
    percentages to 2 decimals.
    """
    rows = []
    for index, record in enumerate(records, start=1):
        rows.append({
            "No": index,
            "Kecamatan": record.kecamatan,
            "Luas Taman (ha)": round(record.luas_taman or 0, 3),
            "Luas Pemakaman (ha)": round(record.luas_pemakaman or 0, 3),
            "Total RTH (ha)": round(record.total_rth or 0, 3),
            "Luas Kecamatan (ha)": round(record.luas_kecamatan or 0),
            "Persentase RTH (%)": round(record.persentase_rth, 2),
            "Cluster": record.cluster or "",
        })

    total_rth = sum(r.total_rth or 0 for r in records)
    total_kecamatan = sum(r.luas_kecamatan or 0 for r in records)
    rows.append({
        "No": "",
        "Kecamatan": "TOTAL",
        "Luas Taman (ha)": round(sum(r.luas_taman or 0 for r in records), 3),
        "Luas Pemakaman (ha)": round(sum(r.luas_pemakaman or 0 for r in records), 3),
        "Total RTH (ha)": round(total_rth, 3),
        "Luas Kecamatan (ha)": round(total_kecamatan),
        "Persentase RTH (%)": _percentage(total_rth, total_kecamatan),
        "Cluster": "",
    })
    return rows


def build_workbook(rows: List[dict]) -> bytes:
    """Write the rows to a single-sheet .xlsx workbook with fixed column widths."""
    df = pd.DataFrame(rows, columns=[name for name, _ in EXPORT_COLUMNS])
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=EXPORT_SHEET_NAME, index=False)
        worksheet = writer.sheets[EXPORT_SHEET_NAME]
        for position, (_, width) in enumerate(EXPORT_COLUMNS, start=1):
            worksheet.column_dimensions[get_column_letter(position)].width = width
    return buffer.getvalue()


def export_filename(filtered: bool, now: Optional[datetime] = None) -> str:
    """e.g. ``Data_RTH_Bandung_2025-01-31T14-05-00_UTC+7_filtered.xlsx``"""
    local_now = (now or datetime.now(timezone.utc)).astimezone(WIB)
    timestamp = local_now.strftime("%Y-%m-%dT%H-%M-%S")
    suffix = "_filtered" if filtered else ""
    return f"Data_RTH_Bandung_{timestamp}_UTC+7{suffix}.xlsx"


# Public routes
@router.get("/public", response_model=List[RthKecamatanRead], summary="List District RTH Data")
async def list_public(
    cluster: Optional[str] = Query(None, description="Exact cluster label, or 'all'"),
    search: Optional[str] = Query(None, description="Case-insensitive district name filter"),
    sort_by: Optional[SortField] = Query(None),
    direction: SortDirection = Query(SortDirection.ASCENDING),
    db: Session = Depends(get_sync_db)
):
    """
    List district RTH records for the public data page.

    Returns a bare JSON array; an empty array when nothing matches.
    """
    records = RthKecamatanCRUD(db).list_records(cluster, search, sort_by, direction)
    return [RthKecamatanRead.model_validate(record) for record in records]


@router.get("/public/summary", response_model=RthSummaryResponse, summary="District RTH Totals")
async def public_summary(
    cluster: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_sync_db)
):
    """Totals, RTH percentage and whether the 20% public RTH target is met."""
    crud = RthKecamatanCRUD(db)
    records = crud.list_records(cluster, search)
    return RthSummaryResponse(data=crud.summarize(records))


@router.get("/public/clusters", response_model=ClusterListResponse, summary="List Clusters")
async def public_clusters(db: Session = Depends(get_sync_db)):
    return ClusterListResponse(data=RthKecamatanCRUD(db).list_clusters())


@router.get("/public/export", summary="Download District RTH Data as Excel")
async def export_excel(
    cluster: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort_by: Optional[SortField] = Query(None),
    direction: SortDirection = Query(SortDirection.ASCENDING),
    db: Session = Depends(get_sync_db)
):
    """
    Download the (optionally filtered) district data as an .xlsx file.

    **Errors:**
    - **404**: No records to export
    """
    records = RthKecamatanCRUD(db).list_records(cluster, search, sort_by, direction)
    if not records:
        raise NotFoundError("Tidak ada data untuk didownload")

    filtered = bool((cluster and cluster != "all") or (search and search.strip()))
    filename = export_filename(filtered)
    content = build_workbook(build_export_rows(records))

    return StreamingResponse(
        io.BytesIO(content),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# Admin routes
@router.get("/", response_model=List[RthKecamatanRead], summary="List District Records (Admin)")
async def list_records(
    cluster: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort_by: Optional[SortField] = Query(None),
    direction: SortDirection = Query(SortDirection.ASCENDING),
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireAdmin
):
    records = RthKecamatanCRUD(db).list_records(cluster, search, sort_by, direction)
    return [RthKecamatanRead.model_validate(record) for record in records]


@router.get("/{record_id}", response_model=RthKecamatanResponse, summary="Get District Record")
async def get_record(
    record_id: UUID,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireAdmin
):
    record = RthKecamatanCRUD(db).get_record(record_id)
    if not record:
        raise NotFoundError("Data kecamatan tidak ditemukan")
    return RthKecamatanResponse(data=RthKecamatanDetail.model_validate(record))


@router.post(
    "/",
    response_model=RthKecamatanResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create District Record"
)
async def create_record(
    payload: RthKecamatanCreate,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireAdmin
):
    """
    Create a district record. ``total_rth`` defaults to park + cemetery area.

    **Errors:**
    - **400**: Invalid data or district already exists
    - **401**: Not authenticated
    """
    record = RthKecamatanCRUD(db).create_record(payload)
    return RthKecamatanResponse(
        message="Data RTH berhasil ditambahkan",
        data=RthKecamatanDetail.model_validate(record),
    )


@router.put("/{record_id}", response_model=RthKecamatanResponse, summary="Update District Record")
async def update_record(
    record_id: UUID,
    payload: RthKecamatanUpdate,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireAdmin
):
    record = RthKecamatanCRUD(db).update_record(record_id, payload)
    return RthKecamatanResponse(
        message="Data RTH berhasil diperbarui",
        data=RthKecamatanDetail.model_validate(record),
    )


@router.delete("/{record_id}", response_model=MessageResponse, summary="Delete District Record")
async def delete_record(
    record_id: UUID,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireAdmin
):
    RthKecamatanCRUD(db).delete_record(record_id)
    return MessageResponse(message="Data RTH berhasil dihapus")
