"""
Blog module: blog documents, their repository and client-side keyword search.
"""

from .domain.models import BlogDocumentModel, BlogEntry, build_document_model
from .domain.search import extract_keywords, search_entries

__all__ = [
    "BlogDocumentModel",
    "BlogEntry",
    "build_document_model",
    "extract_keywords",
    "search_entries",
]
