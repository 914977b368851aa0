# =============================================================================
# core/services/image_service.py - Image Asset Store
# =============================================================================
# Stores master-data photos on the local filesystem:
#   <upload_root>/<category>/<uuid><ext>
#
# - ingest: validate type/size/category, write the file, return its imagePath
# - serve:  read a file back by relative path, with MIME inference
# - remove: delete a file by the imagePath stored on a record
#
# Paths from clients are checked for traversal before any filesystem path is
# built from them.
# =============================================================================

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

from app.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    NotFoundError,
    PathSafetyError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Categories double as subdirectory names
VALID_CATEGORIES = ("beans", "drippers", "filters", "tastings")

ALLOWED_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")

MIME_TO_EXT = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}

EXT_TO_MIME = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}

DEFAULT_MIME_TYPE = "application/octet-stream"

# Public URL prefix stored in imagePath fields
IMAGE_URL_PREFIX = "/images/"

# Served files never change once written
CACHE_CONTROL = "public, max-age=31536000, immutable"

MAX_IMAGE_SIZE = 5 * 1024 * 1024


@dataclass(frozen=True)
class StoredImage:
    """Result of a successful ingest."""
    image_path: str
    file_name: str
    category: str
    size_bytes: int


@dataclass(frozen=True)
class ImageFile:
    """Bytes and content type of a served image."""
    content: bytes
    media_type: str


def mime_type_for(path: str) -> str:
    """
    Infer a MIME type from a file extension.

    Example:
        mime_type_for("beans/a.PNG") -> "image/png"
        mime_type_for("notes.txt")   -> "application/octet-stream"
    """
    return EXT_TO_MIME.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


def safe_segments(relative_path: str) -> list[str]:
    """
    Split a client-supplied relative path into safe segments.

    Raises PathSafetyError when the path contains "..", a backslash or a
    NUL byte, or has no segments at all. Leading and repeated slashes are
    dropped, so the result can only name something below the root.
    """
    if ".." in relative_path or "\\" in relative_path or "\x00" in relative_path:
        raise PathSafetyError(relative_path)

    segments = [segment for segment in relative_path.split("/") if segment and segment != "."]
    if not segments:
        raise PathSafetyError(relative_path)
    return segments


class ImageStore:
    """
    Category-scoped image storage under one upload root.

    Holds no per-request state; concurrent ingests get distinct uuid
    file names and reads are side-effect free.
    """

    def __init__(self, upload_root: str | Path, max_size_bytes: int = MAX_IMAGE_SIZE):
        self.upload_root = Path(upload_root)
        self.max_size_bytes = max_size_bytes

    def _resolve(self, segments: list[str]) -> Path:
        path = self.upload_root.joinpath(*segments)
        # Symlinks inside the root must not lead outside it
        root = self.upload_root.resolve()
        resolved = path.resolve()
        if resolved != root and root not in resolved.parents:
            raise PathSafetyError("/".join(segments))
        return path

    # -------------------------------------------------------------------------
    # Ingest
    # -------------------------------------------------------------------------

    def ingest(self, content: bytes, content_type: str | None, category: str | None) -> StoredImage:
        """
        Validate and store an uploaded image.

        Args:
            content: Raw file bytes
            content_type: Declared MIME type of the upload
            category: One of VALID_CATEGORIES

        Returns:
            StoredImage whose image_path ("/images/<category>/<file>") is
            what owning records keep in their imagePath field

        Raises:
            ValidationError: Empty file, missing or unknown category
            InvalidFileTypeError: Type not in ALLOWED_TYPES
            FileTooLargeError: More than max_size_bytes
            StoreError: The file could not be written
        """
        if not content:
            raise ValidationError.for_field("file", "ファイルが指定されていません")

        if not category:
            raise ValidationError.for_field("category", "カテゴリが指定されていません")

        if category not in VALID_CATEGORIES:
            raise ValidationError.for_field("category", "無効なカテゴリです")

        if content_type not in ALLOWED_TYPES:
            raise InvalidFileTypeError(content_type, list(ALLOWED_TYPES))

        if len(content) > self.max_size_bytes:
            raise FileTooLargeError(len(content), self.max_size_bytes)

        file_name = f"{uuid.uuid4().hex}{MIME_TO_EXT[content_type]}"
        category_dir = self.upload_root / category

        try:
            category_dir.mkdir(parents=True, exist_ok=True)
            (category_dir / file_name).write_bytes(content)
        except OSError as e:
            logger.error(f"Failed to write image {category}/{file_name}: {e}")
            raise StoreError("アップロードに失敗しました")

        logger.info(f"Stored image {category}/{file_name} ({len(content)} bytes)")

        return StoredImage(
            image_path=f"{IMAGE_URL_PREFIX}{category}/{file_name}",
            file_name=file_name,
            category=category,
            size_bytes=len(content),
        )

    # -------------------------------------------------------------------------
    # Serve
    # -------------------------------------------------------------------------

    def serve(self, relative_path: str) -> ImageFile:
        """
        Read an image by its path relative to the upload root.

        Raises:
            PathSafetyError: Traversal attempt (checked before any I/O)
            NotFoundError: No such file
        """
        segments = safe_segments(relative_path)
        path = self._resolve(segments)

        if not path.is_file():
            raise NotFoundError("画像が見つかりません", details={"path": relative_path})

        try:
            content = path.read_bytes()
        except FileNotFoundError:
            raise NotFoundError("画像が見つかりません", details={"path": relative_path})

        logger.debug(f"Serving image {'/'.join(segments)} ({len(content)} bytes)")
        return ImageFile(content=content, media_type=mime_type_for(path.name))

    # -------------------------------------------------------------------------
    # Remove
    # -------------------------------------------------------------------------

    def remove(self, image_path: str | None) -> None:
        """
        Delete a stored image by its public imagePath ("/images/...").

        Raises:
            ValidationError: No path given
            PathSafetyError: Not under /images/ or a traversal attempt
            NotFoundError: No such file
            StoreError: The file could not be deleted
        """
        if not image_path:
            raise ValidationError.for_field("imagePath", "画像パスが指定されていません")

        if not isinstance(image_path, str) or not image_path.startswith(IMAGE_URL_PREFIX):
            raise PathSafetyError(str(image_path))

        segments = safe_segments(image_path[len(IMAGE_URL_PREFIX):])
        path = self._resolve(segments)

        if not path.is_file():
            raise NotFoundError("ファイルが見つかりません", details={"path": image_path})

        try:
            path.unlink()
        except FileNotFoundError:
            raise NotFoundError("ファイルが見つかりません", details={"path": image_path})
        except OSError as e:
            logger.error(f"Failed to delete image {image_path}: {e}")
            raise StoreError("削除に失敗しました")

        logger.info(f"Deleted image {image_path}")
