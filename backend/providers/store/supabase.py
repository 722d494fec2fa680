"""
Supabase Task Store.

Reads and writes the ``tasks`` table through Supabase's PostgREST endpoint.
Each call opens a PostgREST client authorised with the caller's access token,
so Postgres row-level security enforces ownership in addition to the
explicit ``user_id`` filters applied here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
from postgrest import AsyncPostgrestClient
from postgrest.constants import DEFAULT_POSTGREST_CLIENT_HEADERS
from postgrest.exceptions import APIError

from backend.core.config import is_placeholder
from backend.providers.store.base import (
    TaskRow,
    TaskStore,
    TaskStoreError,
    TaskStoreUnavailableError,
)

logger = logging.getLogger(__name__)

# Postgres "invalid_text_representation", raised for malformed UUIDs
INVALID_TEXT_REPRESENTATION = "22P02"


class SupabaseTaskStore(TaskStore):
    """PostgREST-backed task store."""

    def __init__(
        self,
        supabase_url: str,
        anon_key: str,
        table: str = "tasks",
        timeout: float = 10.0,
    ) -> None:
        """
        Initialize the Supabase task store.

        Args:
            supabase_url: Supabase project URL
            anon_key: Supabase anonymous key (sent as apikey)
            table: Table holding task rows
            timeout: Request timeout in seconds
        """
        self._url = (supabase_url or "").rstrip("/")
        self._anon_key = anon_key
        self._table = table
        self._timeout = timeout

    @property
    def provider_name(self) -> str:
        return "supabase"

    @property
    def configured(self) -> bool:
        return not is_placeholder(self._url) and not is_placeholder(self._anon_key)

    @asynccontextmanager
    async def _client(self, token: str) -> AsyncIterator[AsyncPostgrestClient]:
        """Open a PostgREST client that acts with the caller's token."""
        if not self.configured:
            raise TaskStoreUnavailableError(
                "Supabase is not configured. Set SUPABASE_URL and SUPABASE_ANON_KEY.",
                self.provider_name,
            )
        headers = {
            **DEFAULT_POSTGREST_CLIENT_HEADERS,
            "apikey": self._anon_key,
            "Authorization": f"Bearer {token}",
        }
        async with AsyncPostgrestClient(
            f"{self._url}/rest/v1",
            headers=headers,
            timeout=self._timeout,
        ) as client:
            try:
                yield client
            except httpx.TransportError as e:
                logger.error(f"Task store unreachable: {e}")
                raise TaskStoreUnavailableError(str(e), self.provider_name) from e

    def _store_error(self, operation: str, error: APIError) -> TaskStoreError:
        logger.error(f"Task store {operation} failed [{error.code}]: {error.message}")
        return TaskStoreError(error.message or f"Failed to {operation} task", self.provider_name)

    async def insert(self, token: str, record: TaskRow) -> TaskRow:
        async with self._client(token) as client:
            try:
                response = await client.table(self._table).insert(record).execute()
            except APIError as e:
                raise self._store_error("create", e) from e

        if not response.data:
            raise TaskStoreError("Insert returned no row", self.provider_name)
        return response.data[0]

    async def list(
        self,
        token: str,
        user_id: str,
        status: Optional[str] = None,
    ) -> list[TaskRow]:
        async with self._client(token) as client:
            query = (
                client.table(self._table)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
            )
            if status:
                query = query.eq("status", status)
            try:
                response = await query.execute()
            except APIError as e:
                raise self._store_error("fetch", e) from e

        return list(response.data or [])

    async def update(
        self,
        token: str,
        user_id: str,
        task_id: str,
        changes: TaskRow,
    ) -> Optional[TaskRow]:
        async with self._client(token) as client:
            try:
                response = await (
                    client.table(self._table)
                    .update(changes)
                    .eq("id", task_id)
                    .eq("user_id", user_id)
                    .execute()
                )
            except APIError as e:
                if e.code == INVALID_TEXT_REPRESENTATION:
                    return None
                raise self._store_error("update", e) from e

        return response.data[0] if response.data else None

    async def delete(self, token: str, user_id: str, task_id: str) -> Optional[TaskRow]:
        async with self._client(token) as client:
            try:
                response = await (
                    client.table(self._table)
                    .delete()
                    .eq("id", task_id)
                    .eq("user_id", user_id)
                    .execute()
                )
            except APIError as e:
                if e.code == INVALID_TEXT_REPRESENTATION:
                    return None
                raise self._store_error("delete", e) from e

        return response.data[0] if response.data else None

    async def delete_all(self, token: str, user_id: str) -> int:
        async with self._client(token) as client:
            try:
                response = await (
                    client.table(self._table)
                    .delete()
                    .eq("user_id", user_id)
                    .execute()
                )
            except APIError as e:
                raise self._store_error("delete", e) from e

        return len(response.data or [])
