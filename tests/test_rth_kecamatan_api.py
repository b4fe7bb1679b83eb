import io
import uuid
from datetime import datetime, timezone

import pytest
from openpyxl import load_workbook

from rth_backend.fastapi.api.v1.endpoints.rth_kecamatan import (
    EXPORT_COLUMNS, EXPORT_SHEET_NAME, export_filename
)

BASE_URL = "/api/rth-kecamatan"

DISTRICTS = [
    {"kecamatan": "Coblong", "luas_taman": 10.0, "luas_pemakaman": 5.0,
     "luas_kecamatan": 700.0, "cluster": "Pusat"},
    {"kecamatan": "Sukajadi", "luas_taman": 2.5, "luas_pemakaman": 1.5,
     "luas_kecamatan": 430.0, "cluster": "Utara"},
    {"kecamatan": "Bandung Kulon", "luas_taman": 20.0, "luas_pemakaman": 30.0,
     "total_rth": 60.0, "luas_kecamatan": 650.0, "cluster": "Barat"},
]


@pytest.fixture
def districts(client, auth_headers):
    created = []
    for payload in DISTRICTS:
        resp = client.post(f"{BASE_URL}/", json=payload, headers=auth_headers)
        assert resp.status_code == 201
        created.append(resp.json()["data"])
    return created


def names(resp):
    return [row["kecamatan"] for row in resp.json()]


class TestAdminRoutes:
    def test_create_defaults_total_to_park_plus_cemetery(self, districts):
        coblong = districts[0]
        assert coblong["total_rth"] == 15.0
        assert coblong["_id"]
        assert coblong["createdAt"]
        assert coblong["updatedAt"]

    def test_explicit_total_is_kept(self, districts):
        assert districts[2]["total_rth"] == 60.0

    def test_create_requires_authentication(self, client):
        resp = client.post(f"{BASE_URL}/", json=DISTRICTS[0])
        assert resp.status_code == 401

    def test_duplicate_district_name(self, client, auth_headers, districts):
        resp = client.post(
            f"{BASE_URL}/",
            json={**DISTRICTS[0], "kecamatan": "coblong"},
            headers=auth_headers,
        )

        assert resp.status_code == 400
        assert resp.json()["code"] == "DUPLICATE_KECAMATAN"

    def test_blank_district_name_is_rejected(self, client, auth_headers):
        resp = client.post(
            f"{BASE_URL}/",
            json={**DISTRICTS[0], "kecamatan": "   "},
            headers=auth_headers,
        )

        assert resp.status_code == 400
        assert client.get(f"{BASE_URL}/public").json() == []

    def test_district_name_is_trimmed(self, client, auth_headers):
        resp = client.post(
            f"{BASE_URL}/",
            json={**DISTRICTS[0], "kecamatan": "  Coblong "},
            headers=auth_headers,
        )
        assert resp.json()["data"]["kecamatan"] == "Coblong"

    def test_negative_area_is_rejected(self, client, auth_headers):
        resp = client.post(
            f"{BASE_URL}/",
            json={**DISTRICTS[0], "luas_taman": -1},
            headers=auth_headers,
        )
        assert resp.status_code == 400

    def test_get_record(self, client, auth_headers, districts):
        record_id = districts[1]["_id"]

        resp = client.get(f"{BASE_URL}/{record_id}", headers=auth_headers)

        assert resp.status_code == 200
        assert resp.json()["data"]["kecamatan"] == "Sukajadi"

    def test_get_missing_record(self, client, auth_headers):
        resp = client.get(f"{BASE_URL}/{uuid.uuid4()}", headers=auth_headers)
        assert resp.status_code == 404

    def test_update_recomputes_total(self, client, auth_headers, districts):
        record_id = districts[0]["_id"]

        resp = client.put(
            f"{BASE_URL}/{record_id}",
            json={"luas_taman": 12.0},
            headers=auth_headers,
        )

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["luas_taman"] == 12.0
        assert data["total_rth"] == 17.0
        assert data["cluster"] == "Pusat"

    def test_update_with_explicit_total(self, client, auth_headers, districts):
        record_id = districts[0]["_id"]

        resp = client.put(
            f"{BASE_URL}/{record_id}",
            json={"luas_taman": 12.0, "total_rth": 25.0},
            headers=auth_headers,
        )

        assert resp.json()["data"]["total_rth"] == 25.0

    def test_rename_onto_existing_district(self, client, auth_headers, districts):
        resp = client.put(
            f"{BASE_URL}/{districts[0]['_id']}",
            json={"kecamatan": "Sukajadi"},
            headers=auth_headers,
        )
        assert resp.status_code == 400

    def test_rename_to_blank_is_rejected(self, client, auth_headers, districts):
        record_id = districts[0]["_id"]

        resp = client.put(f"{BASE_URL}/{record_id}", json={"kecamatan": "   "}, headers=auth_headers)

        assert resp.status_code == 400
        assert client.get(f"{BASE_URL}/{record_id}", headers=auth_headers).json()["data"]["kecamatan"] == "Coblong"

    def test_update_missing_record(self, client, auth_headers):
        resp = client.put(f"{BASE_URL}/{uuid.uuid4()}", json={"luas_taman": 1}, headers=auth_headers)
        assert resp.status_code == 404

    def test_delete(self, client, auth_headers, districts):
        record_id = districts[1]["_id"]

        resp = client.delete(f"{BASE_URL}/{record_id}", headers=auth_headers)

        assert resp.status_code == 200
        assert resp.json()["message"] == "Data RTH berhasil dihapus"
        assert client.get(f"{BASE_URL}/{record_id}", headers=auth_headers).status_code == 404

    def test_admin_list_requires_authentication(self, client, districts):
        assert client.get(f"{BASE_URL}/").status_code == 401


class TestPublicListing:
    def test_empty(self, client):
        resp = client.get(f"{BASE_URL}/public")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_insertion_order_by_default(self, client, districts):
        resp = client.get(f"{BASE_URL}/public")

        assert names(resp) == ["Coblong", "Sukajadi", "Bandung Kulon"]
        assert "_id" in resp.json()[0]
        assert "createdAt" not in resp.json()[0]

    def test_filter_by_cluster(self, client, districts):
        resp = client.get(f"{BASE_URL}/public", params={"cluster": "Utara"})
        assert names(resp) == ["Sukajadi"]

    def test_cluster_all_disables_filter(self, client, districts):
        resp = client.get(f"{BASE_URL}/public", params={"cluster": "all"})
        assert len(resp.json()) == 3

    def test_search_is_case_insensitive(self, client, districts):
        resp = client.get(f"{BASE_URL}/public", params={"search": "KULON"})
        assert names(resp) == ["Bandung Kulon"]

    def test_sort_ascending(self, client, districts):
        resp = client.get(f"{BASE_URL}/public", params={"sort_by": "total_rth"})
        assert names(resp) == ["Sukajadi", "Coblong", "Bandung Kulon"]

    def test_sort_descending(self, client, districts):
        resp = client.get(
            f"{BASE_URL}/public",
            params={"sort_by": "kecamatan", "direction": "descending"},
        )
        assert names(resp) == ["Sukajadi", "Coblong", "Bandung Kulon"]

    def test_unknown_sort_field(self, client):
        resp = client.get(f"{BASE_URL}/public", params={"sort_by": "password"})
        assert resp.status_code == 400


class TestSummaryAndClusters:
    def test_summary_totals(self, client, districts):
        resp = client.get(f"{BASE_URL}/public/summary")

        assert resp.status_code == 200
        summary = resp.json()["data"]
        assert summary["total_luas_taman"] == 32.5
        assert summary["total_luas_pemakaman"] == 36.5
        assert summary["total_rth"] == 79.0
        assert summary["total_luas_kecamatan"] == 1780.0
        assert summary["persentase_rth"] == 4.44
        assert summary["jumlah_kecamatan"] == 3
        assert summary["target_persentase"] == 20.0
        assert summary["target_tercapai"] is False

    def test_summary_of_nothing(self, client):
        summary = client.get(f"{BASE_URL}/public/summary").json()["data"]

        assert summary["jumlah_kecamatan"] == 0
        assert summary["persentase_rth"] == 0.0
        assert summary["target_tercapai"] is False

    def test_target_reached(self, client, auth_headers):
        client.post(
            f"{BASE_URL}/",
            json={"kecamatan": "Hijau", "luas_taman": 30, "luas_pemakaman": 10, "luas_kecamatan": 100},
            headers=auth_headers,
        )

        summary = client.get(f"{BASE_URL}/public/summary").json()["data"]

        assert summary["persentase_rth"] == 40.0
        assert summary["target_tercapai"] is True

    def test_clusters_are_distinct_and_sorted(self, client, auth_headers, districts):
        client.post(
            f"{BASE_URL}/",
            json={"kecamatan": "Cidadap", "luas_kecamatan": 610, "cluster": "Utara"},
            headers=auth_headers,
        )
        client.post(f"{BASE_URL}/", json={"kecamatan": "Tanpa Cluster"}, headers=auth_headers)

        resp = client.get(f"{BASE_URL}/public/clusters")

        assert resp.json()["data"] == ["Barat", "Pusat", "Utara"]


class TestExport:
    def test_workbook_layout(self, client, districts):
        resp = client.get(f"{BASE_URL}/public/export")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        disposition = resp.headers["content-disposition"]
        assert "Data_RTH_Bandung_" in disposition
        assert "_UTC+7.xlsx" in disposition

        workbook = load_workbook(io.BytesIO(resp.content))
        assert workbook.sheetnames == [EXPORT_SHEET_NAME]
        rows = list(workbook[EXPORT_SHEET_NAME].iter_rows(values_only=True))

        assert list(rows[0]) == [name for name, _ in EXPORT_COLUMNS]
        assert len(rows) == 1 + len(DISTRICTS) + 1
        assert rows[1][:2] == (1, "Coblong")
        assert rows[1][6] == 2.14
        total = rows[-1]
        assert total[1] == "TOTAL"
        assert total[4] == 79.0
        assert total[5] == 1780

    def test_column_widths(self, client, districts):
        resp = client.get(f"{BASE_URL}/public/export")
        sheet = load_workbook(io.BytesIO(resp.content))[EXPORT_SHEET_NAME]

        assert sheet.column_dimensions["A"].width == 5
        assert sheet.column_dimensions["B"].width == 20

    def test_filtered_export(self, client, districts):
        resp = client.get(f"{BASE_URL}/public/export", params={"cluster": "Pusat"})

        assert "_filtered.xlsx" in resp.headers["content-disposition"]
        rows = list(load_workbook(io.BytesIO(resp.content))[EXPORT_SHEET_NAME].iter_rows(values_only=True))
        assert len(rows) == 3

    def test_nothing_to_export(self, client):
        resp = client.get(f"{BASE_URL}/public/export")

        assert resp.status_code == 404
        assert resp.json()["message"] == "Tidak ada data untuk didownload"


def test_export_filename_uses_bandung_time():
    now = datetime(2025, 1, 31, 20, 30, 0, tzinfo=timezone.utc)

    assert export_filename(False, now) == "Data_RTH_Bandung_2025-02-01T03-30-00_UTC+7.xlsx"
    assert export_filename(True, now) == "Data_RTH_Bandung_2025-02-01T03-30-00_UTC+7_filtered.xlsx"
