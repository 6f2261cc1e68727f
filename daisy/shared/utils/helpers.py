# 📄 File: daisy/shared/utils/helpers.py

# 🧭 Purpose (Layman Explanation):
# Small helper tools used across the client, like removing accents from words
# so "café" and "cafe" match, or working out the name and type of an image file.

# 🧪 Purpose (Technical Summary):
# Text normalization (diacritic stripping), identifier generation and
# filename / mime type resolution for uploads.

# 🔗 Dependencies:
# - unicodedata: Unicode decomposition
# - mimetypes: Extension based mime type lookup
# - Pillow: Content sniffing when the extension is missing or unknown

# 🔄 Connected Modules / Calls From:
# Used by: DocumentSearch (keyword normalization), SupabaseStorageClient (uploads)

import io
import mimetypes
import re
import unicodedata
from pathlib import Path
from typing import BinaryIO, Optional, Union
from uuid import uuid4

from PIL import Image, UnidentifiedImageError

from daisy.shared.utils.logging import get_logger

logger = get_logger(__name__)


def generate_id() -> str:
    """Generate a unique identifier for new files and documents."""
    return uuid4().hex


def remove_accents(text: str) -> str:
    """
    Strip diacritics from text.

    "Tulipán" -> "Tulipan", "café" -> "cafe". Characters without a
    decomposition are kept as they are.
    """
    if not text:
        return text
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def normalize_keyword(text: str) -> str:
    """Lowercase and accent-strip a keyword or tag for comparison."""
    return remove_accents(text.lower())


def safe_filename(filename: str, replacement: str = "_") -> str:
    """
    Make filename safe for object storage paths.

    Args:
        filename: Original filename
        replacement: Character to replace unsafe characters

    Returns:
        Safe filename
    """
    unsafe_chars = r'[<>:"/\\|?*]'
    safe_name = re.sub(unsafe_chars, replacement, filename)

    safe_name = safe_name.strip('. ')

    if len(safe_name) > 255:
        name, ext = safe_name.rsplit('.', 1) if '.' in safe_name else (safe_name, '')
        max_name_length = 255 - len(ext) - 1 if ext else 255
        safe_name = name[:max_name_length] + ('.' + ext if ext else '')

    return safe_name


def resolve_filename(source: Union[str, Path, BinaryIO], filename: Optional[str] = None) -> Optional[str]:
    """
    Work out the display name of an upload source.

    An explicit filename wins; otherwise the path name, or the ``name``
    attribute of an opened file object, is used. Returns None when no
    name can be found.
    """
    if filename:
        return safe_filename(Path(filename).name) or None

    if isinstance(source, (str, Path)):
        return safe_filename(Path(source).name) or None

    name = getattr(source, "name", None)
    if isinstance(name, str) and name:
        return safe_filename(Path(name).name) or None

    return None


def sniff_image_mime_type(data: bytes) -> Optional[str]:
    """Detect the mime type of image bytes with Pillow."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            if image.format:
                return Image.MIME.get(image.format)
    except (UnidentifiedImageError, OSError):
        logger.debug("Could not identify image content")
    return None


def resolve_mime_type(filename: Optional[str], data: bytes, mime_type: Optional[str] = None) -> Optional[str]:
    """
    Resolve the mime type of an upload.

    Order: explicit value, filename extension, image content. Returns None
    when none of them gives an answer.
    """
    if mime_type:
        return mime_type

    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed

    return sniff_image_mime_type(data)


def extension_for_mime_type(mime_type: str) -> str:
    """Return a file extension (with dot) for a mime type, or an empty string."""
    return mimetypes.guess_extension(mime_type) or ""
