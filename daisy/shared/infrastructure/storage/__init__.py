"""
File storage infrastructure backed by Supabase Storage buckets.
"""

from .supabase_storage import StoredFile, SupabaseStorageClient, read_source

__all__ = [
    "StoredFile",
    "SupabaseStorageClient",
    "read_source",
]
