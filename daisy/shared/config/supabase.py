# 📄 File: daisy/shared/config/supabase.py
# 🧭 Purpose (Layman Explanation):
# Opens the connection to the backend once and hands the same connection to
# every part of the client that needs it.
# 🧪 Purpose (Technical Summary):
# SupabaseManager with lazy client creation from Settings (schema, timeouts,
# session persistence) and a process-wide manager for create_gateway().
# 🔗 Dependencies:
# supabase, daisy.shared.config.settings, daisy.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# daisy.gateway.create_gateway

"""
Supabase client configuration for the Daisy client.
Creates the single long-lived client handle shared by every gateway call.
"""

from typing import Optional

from supabase import create_client, Client, ClientOptions

from daisy.shared.core.exceptions import RemoteServiceError
from daisy.shared.utils.logging import get_logger
from .settings import Settings, get_settings


logger = get_logger(__name__)


class SupabaseManager:
    """
    Supabase client manager with lazy initialization.
    Provides the authentication, database and storage services.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._client: Optional[Client] = None
        self.settings = settings or get_settings()

    @property
    def client(self) -> Client:
        """Get or create Supabase client with lazy initialization."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> Client:
        """Create Supabase client with proper configuration."""
        try:
            client_options = ClientOptions(
                schema=self.settings.SUPABASE_SCHEMA,
                headers={
                    "User-Agent": f"Daisy/{self.settings.APP_VERSION}",
                },
                auto_refresh_token=True,
                persist_session=True,
                postgrest_client_timeout=self.settings.SUPABASE_CLIENT_TIMEOUT,
                storage_client_timeout=self.settings.SUPABASE_CLIENT_TIMEOUT,
            )

            client = create_client(
                supabase_url=self.settings.SUPABASE_URL,
                supabase_key=self.settings.SUPABASE_ANON_KEY,
                options=client_options
            )

            logger.info(
                "Supabase client initialized successfully",
                extra={"schema": self.settings.SUPABASE_SCHEMA}
            )
            return client

        except Exception as e:
            logger.error(f"Failed to initialize Supabase client: {e}")
            raise RemoteServiceError(
                f"Supabase initialization failed: {e}",
                service="supabase",
                operation="create_client"
            ) from e


_supabase_manager: Optional[SupabaseManager] = None


def get_supabase_manager() -> SupabaseManager:
    """
    Get the process-wide Supabase manager instance.

    Returns:
        SupabaseManager: Singleton Supabase manager
    """
    global _supabase_manager
    if _supabase_manager is None:
        _supabase_manager = SupabaseManager()
    return _supabase_manager


def get_supabase_client() -> Client:
    """Get Supabase client for direct usage."""
    return get_supabase_manager().client
