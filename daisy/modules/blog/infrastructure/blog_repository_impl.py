# 📄 File: daisy/modules/blog/infrastructure/blog_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# This file handles storing blog posts in the backend database: listing them,
# listing one person's posts, and creating, editing or removing a post.
#
# 🧪 Purpose (Technical Summary):
# Concrete implementation of BlogRepository over a Supabase (PostgREST) table.
# Blocking SDK calls run in a worker thread; rows are mapped to BlogEntry and
# PostgREST errors to the client error taxonomy.
#
# 🔗 Dependencies:
# - daisy.modules.blog.domain.repositories (interface)
# - daisy.modules.blog.domain.models (domain models)
# - supabase / postgrest (table queries and APIError)
#
# 🔄 Connected Modules / Calls From:
# - RemoteGateway (document operations)

"""
Blog Repository Implementation

Maps between BlogEntry domain records and rows of the blog table.

Features:
- Full listing and server-side filtering on ``id_user``
- Client generated document ids
- Empty mutation results reported as NotFoundError
"""

import asyncio
from typing import Any, Dict, List

from postgrest import APIError
from supabase import Client

from daisy.modules.blog.domain.models import BlogDocumentModel, BlogEntry
from daisy.modules.blog.domain.repositories import BlogRepository
from daisy.shared.core.exceptions import NotFoundError, RemoteServiceError, ValidationError
from daisy.shared.utils.helpers import generate_id
from daisy.shared.utils.logging import get_logger

logger = get_logger(__name__)

OWNER_FIELD = "id_user"


class SupabaseBlogRepository(BlogRepository):
    """
    Supabase implementation of the BlogRepository interface.
    """

    def __init__(self, client: Client, table: str):
        """
        Initialize the blog repository.

        Args:
            client: Supabase client; its schema option selects the database
            table: Name of the blog table (the collection)
        """
        self._client = client
        self._table = table

    def _query(self):
        return self._client.table(self._table)

    async def _execute(self, builder, operation: str) -> List[Dict[str, Any]]:
        try:
            response = await asyncio.to_thread(builder.execute)
        except APIError as e:
            logger.error(f"Database error during {operation} on {self._table}: {e.message}")
            raise RemoteServiceError(
                f"Failed to {operation} blog documents: {e.message}",
                service="database",
                operation=operation
            ) from e
        return response.data or []

    async def list_all(self) -> List[BlogEntry]:
        rows = await self._execute(self._query().select("*"), "list")
        entries = [BlogEntry.from_document(row) for row in rows]
        logger.debug(f"Listed {len(entries)} blog documents")
        return entries

    async def list_by_user(self, user_id: str) -> List[BlogEntry]:
        rows = await self._execute(
            self._query().select("*").eq(OWNER_FIELD, user_id),
            "list",
        )
        entries = [BlogEntry.from_document(row) for row in rows]
        logger.debug(f"Listed {len(entries)} blog documents of user {user_id}")
        return entries

    async def create(self, model: BlogDocumentModel) -> BlogEntry:
        document = {"id": generate_id(), **model.to_document()}

        try:
            response = await asyncio.to_thread(self._query().insert(document).execute)
        except APIError as e:
            logger.warning(f"Blog document rejected: {e.message}", extra={"code": e.code})
            raise ValidationError(
                f"Blog document rejected: {e.message}",
                details={"code": e.code, "hint": e.hint}
            ) from e

        rows = response.data or [document]
        entry = BlogEntry.from_document(rows[0])
        logger.info(f"Created blog document {entry.id}", extra={"user_id": entry.id_user})
        return entry

    async def update(self, document_id: str, model: BlogDocumentModel) -> BlogEntry:
        rows = await self._execute(
            self._query().update(model.to_document()).eq("id", document_id),
            "update",
        )
        if not rows:
            raise NotFoundError(
                f"Blog document not found: {document_id}",
                resource_type="blog_entry",
                resource_id=document_id
            )

        logger.info(f"Updated blog document {document_id}")
        return BlogEntry.from_document(rows[0])

    async def delete(self, document_id: str) -> None:
        rows = await self._execute(
            self._query().delete().eq("id", document_id),
            "delete",
        )
        if not rows:
            raise NotFoundError(
                f"Blog document not found: {document_id}",
                resource_type="blog_entry",
                resource_id=document_id
            )

        logger.info(f"Deleted blog document {document_id}")
