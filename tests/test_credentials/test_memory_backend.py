"""Tests for the in-memory keyring backend."""

from unittest.mock import patch

import pytest

from index_keyring.credentials import InMemoryBackend


class TestInMemoryBackend:
    """Test InMemoryBackend functionality."""

    @pytest.mark.asyncio
    async def test_fetch_existing(self):
        """Test fetching a stored entry."""
        backend = InMemoryBackend({("example.com", "user"): "password"})

        assert await backend.fetch("example.com", "user") == "password"

    @pytest.mark.asyncio
    async def test_fetch_missing(self):
        """Test fetching an absent entry returns None."""
        backend = InMemoryBackend()

        assert await backend.fetch("example.com", "user") is None

    @pytest.mark.asyncio
    async def test_accepts_iterable_of_pairs(self):
        """Test entries may be given as ((service, username), password) pairs."""
        backend = InMemoryBackend([(("example.com", "user"), "password")])

        assert backend.entries == {("example.com", "user"): "password"}

    @pytest.mark.asyncio
    async def test_store_overwrites(self):
        """Test storing replaces an existing entry."""
        backend = InMemoryBackend({("example.com", "user"): "old"})

        await backend.store("example.com", "user", "new")

        assert backend.entries == {("example.com", "user"): "new"}

    @pytest.mark.asyncio
    async def test_delete_removes(self):
        """Test deleting removes only the addressed entry."""
        backend = InMemoryBackend(
            {
                ("example.com", "user"): "password",
                ("example.com", "other"): "password",
            }
        )

        await backend.delete("example.com", "user")

        assert backend.entries == {("example.com", "other"): "password"}

    @pytest.mark.asyncio
    async def test_delete_missing_is_noop(self):
        """Test deleting an absent entry does nothing."""
        backend = InMemoryBackend()

        await backend.delete("example.com", "user")

        assert backend.entries == {}

    @pytest.mark.asyncio
    async def test_does_not_copy_caller_mapping_by_reference(self):
        """Test the backend owns its own mapping."""
        entries = {("example.com", "user"): "password"}
        backend = InMemoryBackend(entries)

        await backend.store("other.com", "user", "password")

        assert ("other.com", "user") not in entries

    @pytest.mark.asyncio
    async def test_never_spawns_processes(self):
        """Test no subprocess is started by any operation."""
        backend = InMemoryBackend()

        with patch("asyncio.create_subprocess_exec") as mock_spawn:
            await backend.store("example.com", "user", "password")
            await backend.fetch("example.com", "user")
            await backend.delete("example.com", "user")

        mock_spawn.assert_not_called()
