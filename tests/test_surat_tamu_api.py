"""
Test Surat Tamu Endpoints (MEMBER)
"""
import pytest


@pytest.fixture
def surat_tamu_data():
    return {
        "noUrut": 1,
        "nama": "Budi Santoso",
        "keperluan": "Audiensi dengan Komisi I",
        "asalSurat": "LSM Banua",
        "tujuanSurat": "Ketua Komisi I",
        "nomorTelpon": "08123456789",
        "tanggal": "2025-01-06",
    }


class TestSuratTamu:
    """Test CRUD surat tamu"""

    def test_create(self, member_client, surat_tamu_data, member_user):
        response = member_client.post("/api/surat-tamu", json=surat_tamu_data)

        assert response.status_code == 201
        data = response.json()
        assert data["nama"] == "Budi Santoso"
        assert data["createdBy"]["id"] == member_user["id"]

    def test_duplicate_no_urut(self, member_client, surat_tamu_data):
        member_client.post("/api/surat-tamu", json=surat_tamu_data)

        response = member_client.post("/api/surat-tamu", json=surat_tamu_data)

        assert response.status_code == 400
        assert response.json() == {"error": "No urut 1 sudah digunakan"}

    def test_list_and_filter_bulan(self, member_client, surat_tamu_data):
        member_client.post("/api/surat-tamu", json=surat_tamu_data)
        member_client.post("/api/surat-tamu", json={**surat_tamu_data, "noUrut": 2, "tanggal": "2025-02-06"})

        response = member_client.get("/api/surat-tamu", params={"bulan": "2025-02"})

        assert [item["noUrut"] for item in response.json()["items"]] == [2]

    def test_search(self, member_client, surat_tamu_data):
        member_client.post("/api/surat-tamu", json=surat_tamu_data)
        member_client.post("/api/surat-tamu", json={**surat_tamu_data, "noUrut": 2, "nama": "Siti Aminah"})

        response = member_client.get("/api/surat-tamu", params={"search": "aminah"})

        assert response.json()["pagination"]["total"] == 1

    def test_update_and_delete(self, member_client, surat_tamu_data):
        created = member_client.post("/api/surat-tamu", json=surat_tamu_data).json()

        updated = member_client.put(f"/api/surat-tamu/{created['id']}", json={"keperluan": "Konsultasi"})
        deleted = member_client.delete(f"/api/surat-tamu/{created['id']}")

        assert updated.json()["keperluan"] == "Konsultasi"
        assert deleted.json() == {"message": "Surat tamu berhasil dihapus"}
        assert member_client.get(f"/api/surat-tamu/{created['id']}").status_code == 404
