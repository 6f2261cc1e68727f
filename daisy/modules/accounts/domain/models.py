# 📄 File: daisy/modules/accounts/domain/models.py
# 🧭 Purpose (Layman Explanation):
# Defines who a signed-in person is (their account) and the login session the
# backend gives them, as seen from the app.
# 🧪 Purpose (Technical Summary):
# Typed, immutable records for the backend account and session payloads,
# replacing the SDK's generic attribute maps.
# 🔗 Dependencies:
# pydantic, datetime, typing
# 🔄 Connected Modules / Calls From:
# supabase_auth.py, RemoteGateway

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Account(BaseModel):
    """
    User identity as returned by the account service.

    Immutable from the client's point of view once fetched.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    email: str
    name: str = ""


class Session(BaseModel):
    """
    Reference to a backend-owned session.

    The client never creates or extends sessions itself; it only keeps the
    identifiers the backend hands out.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    expires_at: Optional[datetime] = None
    access_token: Optional[str] = Field(default=None, repr=False)

    def is_expired(self, now: datetime) -> bool:
        """Whether the session expiry lies before ``now``."""
        return self.expires_at is not None and self.expires_at <= now
