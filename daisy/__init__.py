# 📄 File: daisy/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'daisy' folder as the client library of the Daisy plant disease
# recognition and blog app, and records its version.
#
# 🧪 Purpose (Technical Summary):
# Package initialization with version metadata. The public entry point is
# daisy.gateway.RemoteGateway (or create_gateway for a configured instance).
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - Application code importing the gateway

"""
Daisy - plant disease recognition and blog client

Wraps the Supabase backend behind a single gateway offering account,
storage, recognition and blog document operations.
"""

__version__ = "1.0.0"
__title__ = "Daisy Client"
__description__ = "Plant disease recognition and blog client"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
    "__license__",
]
