# 📄 File: daisy/modules/blog/domain/models.py
# 🧭 Purpose (Layman Explanation):
# Defines what a blog post looks like: who wrote it, what it says, and which
# plants and symptoms it talks about, so people can find posts about a disease.
# 🧪 Purpose (Technical Summary):
# Pydantic models for blog documents: the read model (BlogEntry) built from raw
# backend documents and the writable payload (BlogDocumentModel).
# 🔗 Dependencies:
# pydantic, datetime, typing, daisy.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# blog_repository_impl.py, search.py, RemoteGateway

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from daisy.shared.core.exceptions import ValidationError


class BlogDocumentModel(BaseModel):
    """
    Writable fields of a blog document.

    This is what the client sends on create and update; the backend assigns
    ``id`` and ``created_at``.
    """

    id_user: str
    name_user: str = ""
    title: str = ""
    body: str = ""
    plants: List[str] = Field(default_factory=list)
    symptoms: List[str] = Field(default_factory=list)
    image_id: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("id_user")
    @classmethod
    def validate_id_user(cls, v):
        """A blog document always belongs to a user."""
        if not v or not v.strip():
            raise ValueError("id_user must not be empty")
        return v.strip()

    @field_validator("plants", "symptoms")
    @classmethod
    def strip_tags(cls, v):
        return [tag.strip() for tag in v if tag and tag.strip()]

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the backend document payload."""
        return self.model_dump(mode="json")


class BlogEntry(BlogDocumentModel):
    """
    A blog document as listed from the backend.
    """

    id: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "BlogEntry":
        """
        Build a BlogEntry from a raw backend document.

        Raises:
            ValidationError: If the document lacks an id or an owning user
        """
        try:
            return cls.model_validate(document)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ()))
            raise ValidationError(
                message=f"Malformed blog document: {first.get('msg')}",
                field=field or None,
                details={"document_id": document.get("id")}
            ) from e

    def to_model(self) -> BlogDocumentModel:
        """Writable part of this entry, for updates."""
        return BlogDocumentModel.model_validate(
            self.model_dump(exclude={"id", "created_at"})
        )


def build_document_model(**fields: Any) -> BlogDocumentModel:
    """
    Validate raw fields into a BlogDocumentModel.

    Raises:
        ValidationError: If the fields do not form a valid document
    """
    try:
        return BlogDocumentModel(**fields)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        raise ValidationError(
            message=f"Invalid blog document: {first.get('msg')}",
            field=field or None
        ) from e
