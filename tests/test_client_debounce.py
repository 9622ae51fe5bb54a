"""
Test SearchDebouncer
"""
import asyncio


class TestSearchDebouncer:
    """Callback hanya dipanggil setelah input diam"""

    async def test_only_last_value_fires(self):
        from persuratan.client.debounce import SearchDebouncer

        received = []
        debouncer = SearchDebouncer(received.append, delay=0.05)

        for term in ("s", "su", "sur", "surat"):
            debouncer.submit(term)
            await asyncio.sleep(0.01)
        await asyncio.sleep(0.15)

        assert received == ["surat"]
        assert debouncer.pending is False

    async def test_cancel_drops_pending_value(self):
        from persuratan.client.debounce import SearchDebouncer

        received = []
        debouncer = SearchDebouncer(received.append, delay=0.05)

        debouncer.submit("abc")
        debouncer.cancel()
        await asyncio.sleep(0.1)

        assert received == []

    async def test_flush_fires_immediately(self):
        from persuratan.client.debounce import SearchDebouncer

        received = []
        debouncer = SearchDebouncer(received.append, delay=10)

        debouncer.submit("perihal")
        await debouncer.flush()

        assert received == ["perihal"]
        assert debouncer.pending is False

    async def test_flush_without_pending_is_noop(self):
        from persuratan.client.debounce import SearchDebouncer

        received = []
        debouncer = SearchDebouncer(received.append, delay=0.05)

        await debouncer.flush()

        assert received == []

    async def test_async_callback_awaited(self):
        from persuratan.client.debounce import SearchDebouncer

        received = []

        async def callback(value):
            await asyncio.sleep(0)
            received.append(value)

        debouncer = SearchDebouncer(callback, delay=0.01)
        debouncer.submit("x")
        await asyncio.sleep(0.1)

        assert received == ["x"]
