"""Tests for the request context helpers."""
import asyncio
import contextvars

import pytest

from clientip.context import get_ip_address, reset_ip_address, set_ip_address, with_ip_address


class TestWithIPAddress:
    """Tests for with_ip_address() and get_ip_address(ctx)."""

    def test_derived_context_carries_address(self):
        ctx = contextvars.copy_context()
        derived = with_ip_address(ctx, "48.135.12.111")

        assert get_ip_address(derived) == "48.135.12.111"
        assert derived.run(get_ip_address) == "48.135.12.111"

    def test_original_context_unchanged(self):
        ctx = contextvars.copy_context()
        with_ip_address(ctx, "48.135.12.111")

        assert get_ip_address(ctx) == ""

    def test_overwrite_in_derived_context(self):
        first = with_ip_address(contextvars.copy_context(), "1.1.1.1")
        second = with_ip_address(first, "2.2.2.2")

        assert get_ip_address(first) == "1.1.1.1"
        assert get_ip_address(second) == "2.2.2.2"

    def test_missing_value_returns_empty(self):
        assert get_ip_address(contextvars.Context()) == ""


class TestSetIPAddress:
    """Tests for set_ip_address() on the current context."""

    def test_set_and_reset(self):
        def run():
            token = set_ip_address("203.0.113.50")
            assert get_ip_address() == "203.0.113.50"
            reset_ip_address(token)
            assert get_ip_address() == ""

        contextvars.copy_context().run(run)

    def test_unset_returns_empty(self):
        assert contextvars.Context().run(get_ip_address) == ""

    @pytest.mark.asyncio
    async def test_concurrent_tasks_isolated(self):
        """Each task sees only the address it set."""
        async def handle(ip):
            set_ip_address(ip)
            await asyncio.sleep(0)
            return get_ip_address()

        results = await asyncio.gather(handle("1.1.1.1"), handle("2.2.2.2"))

        assert results == ["1.1.1.1", "2.2.2.2"]
        assert get_ip_address() == ""
