# 📄 File: daisy/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell the Daisy client where the backend lives
# and which buckets, tables and functions to use.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization with exports for settings management
# and the Supabase client manager.
#
# 🔗 Dependencies:
# - settings.py (application settings)
# - supabase.py (client handle)
#
# 🔄 Connected Modules / Calls From:
# - daisy.gateway (composition of the remote gateway)
# - daisy.shared.utils.logging

"""
Configuration Management Package

Handles all client configuration including:
- Environment-based settings
- Backend resource identifiers (schema, tables, buckets, function id)
- Recognition polling bounds
- Supabase client creation
"""

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
