"""
Test ListController: debounce search, reset page, dan response basi
"""
import asyncio


def envelope(items, total=None, page=1, limit=10):
    total = len(items) if total is None else total
    total_pages = (total + limit - 1) // limit if total else 0
    return {
        "items": items,
        "pagination": {"total": total, "page": page, "limit": limit, "totalPages": total_pages},
    }


class RecordingFetcher:
    """Fetcher palsu yang mencatat query dan bisa ditahan per panggilan."""

    def __init__(self, delays=None):
        self.queries = []
        self.delays = list(delays or [])

    async def __call__(self, query):
        self.queries.append(query)
        delay = self.delays.pop(0) if self.delays else 0
        if delay:
            await asyncio.sleep(delay)
        return envelope([{"search": query.search, "page": query.page}], total=30, page=query.page)


class TestListController:
    """Test alur fetch list"""

    async def test_initial_load(self):
        from persuratan.client.controller import ListController

        fetcher = RecordingFetcher()
        controller = ListController(fetcher)

        controller.reload()
        await controller.wait()

        assert controller.items == [{"search": "", "page": 1}]
        assert controller.pagination.total_pages == 3
        assert controller.loading is False
        assert controller.error is None

    async def test_search_is_debounced_and_resets_page(self):
        from persuratan.client.controller import ListController

        fetcher = RecordingFetcher()
        controller = ListController(fetcher, debounce_delay=0.05)
        await controller.set_page(3)

        for term in ("u", "un", "undangan"):
            controller.set_search(term)
            await asyncio.sleep(0.01)
        await asyncio.sleep(0.15)
        await controller.wait()

        assert len(fetcher.queries) == 2
        assert fetcher.queries[-1].search == "undangan"
        assert fetcher.queries[-1].page == 1
        assert controller.query.page == 1

    async def test_same_search_does_not_refetch(self):
        from persuratan.client.controller import ListController
        from persuratan.client.query import ListQuery

        fetcher = RecordingFetcher()
        controller = ListController(fetcher, query=ListQuery(search="rapat"), debounce_delay=0.01)

        controller.set_search(" rapat ")
        await controller.flush_search()

        assert fetcher.queries == []

    async def test_stale_response_ignored(self):
        """Response lama yang datang belakangan tidak menimpa hasil terbaru"""
        from persuratan.client.controller import ListController

        async def fetcher(query):
            if query.page == 1:
                await asyncio.sleep(0.1)
            return envelope([{"page": query.page}], total=30, page=query.page)

        controller = ListController(fetcher)
        first = controller.reload()
        second = controller.set_page(2)
        await controller.wait()

        assert controller.items == [{"page": 2}]
        assert controller.pagination.page == 2
        assert first.cancelled() is True
        assert second.done()

    async def test_stale_result_not_applied_even_if_not_cancelled(self):
        from persuratan.client.controller import ListController

        controller = ListController(RecordingFetcher())
        controller.generation = 5

        await controller._load(4, controller.query)

        assert controller.items == []

    async def test_api_error_message(self):
        from persuratan.client.controller import ListController
        from persuratan.client.exceptions import ApiError

        async def fetcher(query):
            raise ApiError(500, "Internal server error")

        controller = ListController(fetcher, resource="surat masuk")
        controller.reload()
        await controller.wait()

        assert controller.error == "Gagal mengambil data surat masuk"
        assert controller.loading is False

    async def test_unexpected_error_message(self):
        from persuratan.client.controller import ListController

        async def fetcher(query):
            raise RuntimeError("koneksi putus")

        controller = ListController(fetcher)
        controller.reload()
        await controller.wait()

        assert controller.error == "Terjadi kesalahan sistem"

    async def test_filter_setters_reset_page(self):
        from persuratan.client.controller import ListController

        fetcher = RecordingFetcher()
        controller = ListController(fetcher)
        await controller.set_page(2)

        await controller.set_bulan("2025-01")

        assert fetcher.queries[-1].page == 1
        assert fetcher.queries[-1].bulan == "2025-01"

    async def test_close_cancels_pending_search(self):
        from persuratan.client.controller import ListController

        fetcher = RecordingFetcher()
        controller = ListController(fetcher, debounce_delay=0.05)

        controller.set_search("surat")
        controller.close()
        await asyncio.sleep(0.1)

        assert fetcher.queries == []
