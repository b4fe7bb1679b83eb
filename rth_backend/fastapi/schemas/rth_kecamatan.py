"""
District RTH schemas for request/response validation.

Areas are hectares. Read models serialize the identifier as ``_id``,
which is the key the public data page expects.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

RTH_TARGET_PERCENT = 20.0


class SortField(str, Enum):
    KECAMATAN = "kecamatan"
    LUAS_TAMAN = "luas_taman"
    LUAS_PEMAKAMAN = "luas_pemakaman"
    TOTAL_RTH = "total_rth"
    LUAS_KECAMATAN = "luas_kecamatan"
    CLUSTER = "cluster"


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class RthKecamatanBase(BaseModel):
    """Base district schema with common fields."""

    model_config = ConfigDict(str_strip_whitespace=True)

    kecamatan: str = Field(..., min_length=1, max_length=100, examples=["Coblong"])
    luas_taman: float = Field(0.0, ge=0, description="Park area (ha)")
    luas_pemakaman: float = Field(0.0, ge=0, description="Cemetery area (ha)")
    total_rth: Optional[float] = Field(
        None,
        ge=0,
        description="Total RTH area (ha); defaults to park + cemetery area"
    )
    luas_kecamatan: float = Field(0.0, ge=0, description="District area (ha)")
    cluster: Optional[str] = Field(None, max_length=50)


class RthKecamatanCreate(RthKecamatanBase):
    """Schema for creating a district record."""


class RthKecamatanUpdate(BaseModel):
    """Schema for updating a district record; every field is optional."""

    model_config = ConfigDict(str_strip_whitespace=True)

    kecamatan: Optional[str] = Field(None, min_length=1, max_length=100)
    luas_taman: Optional[float] = Field(None, ge=0)
    luas_pemakaman: Optional[float] = Field(None, ge=0)
    total_rth: Optional[float] = Field(None, ge=0)
    luas_kecamatan: Optional[float] = Field(None, ge=0)
    cluster: Optional[str] = Field(None, max_length=50)


class RthKecamatanRead(BaseModel):
    """Public representation of a district record."""

    id: UUID = Field(..., alias="_id")
    kecamatan: str
    luas_taman: float
    luas_pemakaman: float
    total_rth: float
    luas_kecamatan: float
    cluster: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class RthKecamatanDetail(RthKecamatanRead):
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class RthKecamatanResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: RthKecamatanDetail


class RthSummary(BaseModel):
    """Dashboard totals across the selected districts."""

    total_luas_taman: float
    total_luas_pemakaman: float
    total_rth: float
    total_luas_kecamatan: float
    persentase_rth: float
    jumlah_kecamatan: int
    target_persentase: float = RTH_TARGET_PERCENT
    target_tercapai: bool


class RthSummaryResponse(BaseModel):
    success: bool = True
    data: RthSummary


class ClusterListResponse(BaseModel):
    success: bool = True
    data: List[str]
