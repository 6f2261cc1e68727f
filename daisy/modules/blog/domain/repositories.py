# 📄 File: daisy/modules/blog/domain/repositories.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for saving, listing, changing and removing blog posts,
# without tying it to a particular database.
# 🧪 Purpose (Technical Summary):
# Repository interface for BlogEntry documents following the repository pattern.
# 🔗 Dependencies:
# abc, typing, blog domain models
# 🔄 Connected Modules / Calls From:
# blog_repository_impl.py (implementation), RemoteGateway

from abc import ABC, abstractmethod
from typing import List

from .models import BlogDocumentModel, BlogEntry


class BlogRepository(ABC):
    """
    Repository interface for blog documents.

    Listings come back in backend order; no ordering is applied client side.
    """

    @abstractmethod
    async def list_all(self) -> List[BlogEntry]:
        """List every blog document."""
        pass

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[BlogEntry]:
        """List the documents whose ``id_user`` equals ``user_id``."""
        pass

    @abstractmethod
    async def create(self, model: BlogDocumentModel) -> BlogEntry:
        """
        Create a document.

        Raises:
            ValidationError: If the backend rejects the document
        """
        pass

    @abstractmethod
    async def update(self, document_id: str, model: BlogDocumentModel) -> BlogEntry:
        """
        Replace the writable fields of a document.

        Raises:
            NotFoundError: If no document has this id
        """
        pass

    @abstractmethod
    async def delete(self, document_id: str) -> None:
        """
        Delete a document.

        Raises:
            NotFoundError: If no document has this id
        """
        pass
