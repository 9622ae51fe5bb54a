"""
Test workflow modal salin surat masuk ke disposisi
"""
import pytest
from datetime import date

SURAT = {"id": "surat-1", "noUrut": 7, "perihal": "Undangan"}


class FakeClient:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    async def copy_to_disposisi(self, surat_id, tujuan_disposisi, tanggal_disposisi, keterangan=None):
        self.calls.append((surat_id, tujuan_disposisi, tanggal_disposisi, keterangan))
        if self.error:
            raise self.error
        return {"message": "Disposisi berhasil dibuat dari surat masuk"}


class TestWorkflowStates:
    """Test transisi state"""

    def test_open_starts_selecting_unit(self):
        from persuratan.client.workflow import CopyDisposisiWorkflow, WorkflowState

        workflow = CopyDisposisiWorkflow(FakeClient())
        workflow.open(SURAT)

        assert workflow.state == WorkflowState.SELECTING_UNIT
        assert workflow.is_open is True

    def test_unit_without_sub_units_is_ready(self):
        from persuratan.client.workflow import CopyDisposisiWorkflow, WorkflowState

        workflow = CopyDisposisiWorkflow(FakeClient())
        workflow.open(SURAT)
        workflow.select_unit("SEKWAN")

        assert workflow.state == WorkflowState.READY
        assert workflow.tujuan == "SEKWAN"

    def test_unit_with_sub_units_asks_sub_unit(self):
        from persuratan.client.workflow import CopyDisposisiWorkflow, WorkflowState

        workflow = CopyDisposisiWorkflow(FakeClient())
        workflow.open(SURAT)
        workflow.select_unit("Wakil")

        assert workflow.state == WorkflowState.SELECTING_SUB_UNIT
        assert workflow.sub_unit_options == ["Wakil I", "Wakil II", "Wakil III"]

        workflow.select_sub_unit("Wakil II")

        assert workflow.state == WorkflowState.READY
        assert workflow.tujuan == "Wakil - Wakil II"

    def test_sub_unit_is_optional(self):
        from persuratan.client.workflow import CopyDisposisiWorkflow, WorkflowState

        workflow = CopyDisposisiWorkflow(FakeClient())
        workflow.open(SURAT)
        workflow.select_unit("Ketua Komisi")
        workflow.select_sub_unit(None)

        assert workflow.state == WorkflowState.READY
        assert workflow.tujuan == "Ketua Komisi"

    def test_changing_unit_clears_sub_unit(self):
        from persuratan.client.workflow import CopyDisposisiWorkflow

        workflow = CopyDisposisiWorkflow(FakeClient())
        workflow.open(SURAT)
        workflow.select_unit("Wakil")
        workflow.select_sub_unit("Wakil I")
        workflow.select_unit("Staff")

        assert workflow.sub_unit is None
        assert workflow.tujuan == "Staff"

    def test_foreign_sub_unit_rejected(self):
        from persuratan.client.exceptions import WorkflowValidationError
        from persuratan.client.workflow import CopyDisposisiWorkflow

        workflow = CopyDisposisiWorkflow(FakeClient())
        workflow.open(SURAT)
        workflow.select_unit("Wakil")

        with pytest.raises(WorkflowValidationError):
            workflow.select_sub_unit("Ketua Komisi I")

    def test_unknown_unit_rejected(self):
        from persuratan.client.exceptions import WorkflowValidationError
        from persuratan.client.workflow import CopyDisposisiWorkflow

        workflow = CopyDisposisiWorkflow(FakeClient())
        workflow.open(SURAT)

        with pytest.raises(WorkflowValidationError):
            workflow.select_unit("Bagian Fiktif")

    def test_cancel_resets_everything(self):
        from persuratan.client.workflow import CopyDisposisiWorkflow, WorkflowState

        workflow = CopyDisposisiWorkflow(FakeClient())
        workflow.open(SURAT)
        workflow.select_unit("SEKWAN")
        workflow.set_tanggal("2025-01-10")
        workflow.cancel()

        assert workflow.state == WorkflowState.CLOSED
        assert workflow.surat is None
        assert workflow.tanggal is None
        assert workflow.tujuan is None


class TestWorkflowConfirm:
    """Test submit ke server"""

    async def test_confirm_without_unit(self):
        from persuratan.client.exceptions import WorkflowValidationError
        from persuratan.client.workflow import CopyDisposisiWorkflow

        client = FakeClient()
        workflow = CopyDisposisiWorkflow(client)
        workflow.open(SURAT)
        workflow.set_tanggal(date(2025, 1, 10))

        with pytest.raises(WorkflowValidationError, match="Silakan pilih tujuan disposisi"):
            await workflow.confirm()
        assert client.calls == []

    async def test_confirm_without_tanggal(self):
        from persuratan.client.exceptions import WorkflowValidationError
        from persuratan.client.workflow import CopyDisposisiWorkflow

        client = FakeClient()
        workflow = CopyDisposisiWorkflow(client)
        workflow.open(SURAT)
        workflow.select_unit("SEKWAN")

        with pytest.raises(WorkflowValidationError, match="Silakan pilih tanggal disposisi"):
            await workflow.confirm()
        assert client.calls == []

    async def test_confirm_success(self):
        from persuratan.client.workflow import CopyDisposisiWorkflow, SUCCESS_MESSAGE

        client = FakeClient()
        refreshed = []

        async def on_success():
            refreshed.append(True)

        workflow = CopyDisposisiWorkflow(client, on_success=on_success)
        workflow.open(SURAT)
        workflow.select_unit("Bagian Umum dan Keuangan")
        workflow.select_sub_unit("Sub Bagian Perencanaan dan Keuangan")
        workflow.set_tanggal("2025-01-10")
        workflow.set_keterangan("  Segera  ")

        message = await workflow.confirm()

        assert message == SUCCESS_MESSAGE
        assert client.calls == [(
            "surat-1",
            "Bagian Umum dan Keuangan - Sub Bagian Perencanaan dan Keuangan",
            date(2025, 1, 10),
            "Segera",
        )]
        assert refreshed == [True]
        assert workflow.is_open is False

    async def test_confirm_server_error_keeps_modal_open(self):
        from persuratan.client.exceptions import ApiError
        from persuratan.client.workflow import CopyDisposisiWorkflow, WorkflowState

        client = FakeClient(error=ApiError(404, "Surat masuk tidak ditemukan"))
        workflow = CopyDisposisiWorkflow(client)
        workflow.open(SURAT)
        workflow.select_unit("SEKWAN")
        workflow.set_tanggal("2025-01-10")

        with pytest.raises(ApiError) as exc_info:
            await workflow.confirm()

        assert exc_info.value.message == "Surat masuk tidak ditemukan"
        assert workflow.state == WorkflowState.READY
        assert workflow.submitting is False

    async def test_confirm_error_without_message_uses_default(self):
        from persuratan.client.exceptions import ApiError
        from persuratan.client.workflow import CopyDisposisiWorkflow, FAILURE_MESSAGE

        workflow = CopyDisposisiWorkflow(FakeClient(error=ApiError(500, "")))
        workflow.open(SURAT)
        workflow.select_unit("SEKWAN")
        workflow.set_tanggal("2025-01-10")

        with pytest.raises(ApiError) as exc_info:
            await workflow.confirm()

        assert exc_info.value.message == FAILURE_MESSAGE


class TestWorkflowWithHttpClient:
    """Test confirm lewat PersuratanClient dan httpx.MockTransport"""

    @staticmethod
    def make_workflow(copy_handler):
        import httpx
        from persuratan.client.http import PersuratanClient
        from persuratan.client.workflow import CopyDisposisiWorkflow

        def handler(request):
            if request.url.path == "/api/csrf-token":
                return httpx.Response(200, json={"csrfToken": "token-1"})
            return copy_handler(request)

        client = PersuratanClient("http://testserver", transport=httpx.MockTransport(handler))
        workflow = CopyDisposisiWorkflow(client)
        workflow.open(SURAT)
        workflow.select_unit("SEKWAN")
        workflow.set_tanggal("2025-01-10")
        return client, workflow

    async def test_non_json_gateway_error_uses_default(self):
        import httpx
        from persuratan.client.exceptions import ApiError
        from persuratan.client.workflow import FAILURE_MESSAGE, WorkflowState

        client, workflow = self.make_workflow(lambda request: httpx.Response(502, text="Bad Gateway"))

        async with client:
            with pytest.raises(ApiError) as exc_info:
                await workflow.confirm()

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == FAILURE_MESSAGE
        assert workflow.state == WorkflowState.READY

    async def test_connection_error_becomes_api_error(self):
        import httpx
        from persuratan.client.exceptions import ApiError
        from persuratan.client.workflow import FAILURE_MESSAGE

        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        client, workflow = self.make_workflow(refuse)

        async with client:
            with pytest.raises(ApiError) as exc_info:
                await workflow.confirm()

        assert exc_info.value.status_code == 0
        assert exc_info.value.message == FAILURE_MESSAGE
        assert workflow.submitting is False

    async def test_server_message_is_kept(self):
        import httpx
        from persuratan.client.exceptions import ApiError

        client, workflow = self.make_workflow(
            lambda request: httpx.Response(404, json={"error": "Surat masuk tidak ditemukan"})
        )

        async with client:
            with pytest.raises(ApiError) as exc_info:
                await workflow.confirm()

        assert exc_info.value.message == "Surat masuk tidak ditemukan"
