import pytest

from rth_backend.fastapi.core.exceptions import ValidationError
from rth_backend.fastapi.crud.rth_kecamatan import RthKecamatanCRUD
from rth_backend.fastapi.models.rth_kecamatan import RthKecamatan
from rth_backend.fastapi.schemas.rth_kecamatan import RthKecamatanCreate, RthKecamatanUpdate


def _create(name="Coblong", **overrides):
    values = {
        "kecamatan": name,
        "luas_taman": 10.0,
        "luas_pemakaman": 5.0,
        "total_rth": None,
        "luas_kecamatan": 700.0,
        "cluster": "Pusat",
    }
    values.update(overrides)
    # Skip schema trimming so the store's own check is exercised
    return RthKecamatanCreate.model_construct(**values)


def test_blank_name_is_rejected_on_create(standalone_db):
    crud = RthKecamatanCRUD(standalone_db)

    with pytest.raises(ValidationError) as exc_info:
        crud.create_record(_create("   "))

    assert exc_info.value.message == "Nama kecamatan harus diisi"
    assert crud.list_records() == []


def test_blank_name_is_rejected_on_update(standalone_db):
    crud = RthKecamatanCRUD(standalone_db)
    record = crud.create_record(_create())

    with pytest.raises(ValidationError):
        crud.update_record(record.id, RthKecamatanUpdate.model_construct(kecamatan="  "))

    standalone_db.refresh(record)
    assert record.kecamatan == "Coblong"


def test_schema_trims_district_name():
    assert RthKecamatanCreate(kecamatan="  Coblong ").kecamatan == "Coblong"


@pytest.mark.parametrize("total_rth, luas_kecamatan, expected", [
    (15.0, 700.0, 2.14),
    (40.0, 100.0, 40.0),
    (5.0, 0.0, 0.0),
])
def test_persentase_rth(total_rth, luas_kecamatan, expected):
    record = RthKecamatan(kecamatan="X", total_rth=total_rth, luas_kecamatan=luas_kecamatan)
    assert round(record.persentase_rth, 2) == expected
