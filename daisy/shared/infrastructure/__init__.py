"""
Shared infrastructure components (Supabase Storage buckets).
"""
