"""
Test Export Excel surat masuk dan disposisi
"""
import io
from datetime import date

from openpyxl import load_workbook


class TestExportHelpers:
    """Test format dan pengelompokan baris"""

    def test_format_hari_tanggal(self):
        from persuratan.services.export import format_hari_tanggal

        assert format_hari_tanggal(date(2025, 1, 6)) == "Senin, 06/01/2025"
        assert format_hari_tanggal(date(2025, 1, 12)) == "Minggu, 12/01/2025"
        assert format_hari_tanggal(None) == "-"

    def test_format_tanggal(self):
        from persuratan.services.export import format_tanggal

        assert format_tanggal(date(2025, 3, 9)) == "09/03/2025"

    def test_group_rows_inserts_separator(self):
        from persuratan.services.export import GROUP_SEPARATOR_ROWS, group_rows

        rows = group_rows([(1, ["a"]), (1, ["b"]), (2, ["c"])], width=1)

        assert rows == [["a"], ["b"]] + [[None]] * GROUP_SEPARATOR_ROWS + [["c"]]

    def test_group_rows_empty(self):
        from persuratan.services.export import group_rows

        assert group_rows([], width=3) == []

    def test_build_workbook_header(self):
        from persuratan.services.export import DISPOSISI_COLUMNS, build_workbook

        content = build_workbook("Disposisi", DISPOSISI_COLUMNS, [])
        sheet = load_workbook(io.BytesIO(content))["Disposisi"]

        assert [cell.value for cell in sheet[1]] == [name for name, _ in DISPOSISI_COLUMNS]
        assert sheet.cell(row=1, column=1).font.bold is True
        assert sheet.column_dimensions["D"].width == 50


class TestExportEndpoints:
    """Test GET /export"""

    def test_export_surat_masuk(self, admin_client, create_surat_masuk):
        create_surat_masuk(noUrut=2, nomorSurat=None)
        create_surat_masuk(noUrut=1)

        response = admin_client.get("/api/surat-masuk/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert f"Surat-Masuk-{date.today().isoformat()}.xlsx" in response.headers["content-disposition"]

        sheet = load_workbook(io.BytesIO(response.content))["Surat Masuk"]
        assert sheet.cell(row=1, column=1).value == "No Urut"
        assert sheet.cell(row=2, column=1).value == 1
        assert sheet.cell(row=2, column=3).value == "06/01/2025"
        # tiga baris pemisah antar no urut
        assert sheet.cell(row=3, column=1).value is None
        assert sheet.cell(row=5, column=1).value is None
        assert sheet.cell(row=6, column=1).value == 2
        assert sheet.cell(row=6, column=2).value == "-"

    def test_export_disposisi(self, admin_client, create_surat_masuk):
        surat = create_surat_masuk(noUrut=4)
        for tujuan in ("SEKWAN", "Wakil - Wakil I"):
            admin_client.post(
                f"/api/surat-masuk/{surat['id']}/copy-disposisi",
                json={"tujuanDisposisi": tujuan, "tanggalDisposisi": "2025-01-07"},
            )

        response = admin_client.get("/api/disposisi/export")

        assert response.status_code == 200
        expected_name = f"Disposisi_DPRD_Kalsel_{date.today().strftime('%d-%m-%Y')}.xlsx"
        assert expected_name in response.headers["content-disposition"]

        sheet = load_workbook(io.BytesIO(response.content))["Disposisi"]
        assert sheet.cell(row=1, column=3).value == "Hari/Tanggal"
        # no urut sama, tidak ada pemisah
        assert [sheet.cell(row=r, column=1).value for r in (2, 3)] == [4, 4]
        assert sheet.cell(row=2, column=3).value == "Senin, 06/01/2025"
        assert sheet.cell(row=2, column=7).value == "Selasa, 07/01/2025"
        assert {sheet.cell(row=r, column=6).value for r in (2, 3)} == {"SEKWAN", "Wakil - Wakil I"}

    def test_export_is_audited(self, admin_client, create_surat_masuk):
        create_surat_masuk()
        admin_client.get("/api/surat-masuk/export")

        logs = admin_client.get("/api/audit-logs", params={"action": "EXPORT"}).json()["items"]

        assert len(logs) == 1
        assert logs[0]["entity"] == "SuratMasuk"
        assert "Export 1 surat masuk" in logs[0]["details"]

    def test_export_requires_admin(self, member_client):
        assert member_client.get("/api/surat-masuk/export").status_code == 403
