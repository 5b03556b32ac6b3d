"""Image upload and storage for facility listings"""

import io
import logging
import os
import secrets

from b2sdk.v2 import B2Api, InMemoryAccountInfo
from b2sdk.v2.exception import B2Error
from django.conf import settings
from django.core.exceptions import ValidationError
from PIL import Image, ImageOps, UnidentifiedImageError
from pillow_heif import register_heif_opener

# Enable HEIC support
register_heif_opener()

logger = logging.getLogger(__name__)

# File upload security settings
ALLOWED_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp", "heic", "heif"}
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
MAX_DIMENSIONS = (800, 600)


def b2_configured():
    return bool(
        settings.B2_KEY_ID
        and settings.B2_APPLICATION_KEY
        and settings.B2_BUCKET_ID
        and settings.B2_BUCKET_NAME
    )


def validate_image_file(file):
    """Reject files that are too large, of the wrong type, or not images"""
    if file.size > MAX_FILE_SIZE:
        raise ValidationError("File too large. Maximum size is 10MB.")

    file_ext = file.name.lower().rsplit(".", 1)[-1]
    if file_ext not in ALLOWED_EXTENSIONS:
        raise ValidationError(
            f"Invalid file type. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    # load() rather than verify(): verify() leaves the file unusable
    try:
        file.seek(0)
        img = Image.open(file)
        img.load()
        file.seek(0)
    except (UnidentifiedImageError, OSError) as e:
        raise ValidationError(f"File is not a valid image: {e}")


def get_photo_url(filename):
    """Public URL for a stored image (B2 or local media)"""
    if b2_configured():
        return f"https://{settings.B2_BUCKET_NAME}.s3.us-east-005.backblazeb2.com/{filename}"
    return f"{settings.MEDIA_URL}{filename}"


def filename_from_url(url):
    """Stored filename behind a URL we issued, None for foreign URLs"""
    for prefix in (get_photo_url(""), settings.MEDIA_URL):
        if url.startswith(prefix):
            return url[len(prefix):] or None
    return None


def prepare_image(file):
    """Orient, convert and shrink an upload into JPEG bytes"""
    img = Image.open(file)
    img = ImageOps.exif_transpose(img)

    if img.mode in ("RGBA", "LA", "P"):
        img = img.convert("RGB")

    img.thumbnail(MAX_DIMENSIONS, Image.Resampling.LANCZOS)

    img_bytes = io.BytesIO()
    img.save(img_bytes, format="JPEG", quality=85, optimize=True)
    return img_bytes.getvalue()


def get_b2_api():
    """Authorized B2 API connection"""
    info = InMemoryAccountInfo()
    b2_api = B2Api(info)
    b2_api.authorize_account("production", settings.B2_KEY_ID, settings.B2_APPLICATION_KEY)
    return b2_api


def store_bytes(data, filename):
    """Store JPEG bytes on B2 when configured, else under MEDIA_ROOT"""
    if b2_configured():
        bucket = get_b2_api().get_bucket_by_id(settings.B2_BUCKET_ID)
        bucket.upload_bytes(data, filename, content_type="image/jpeg")
        return

    path = os.path.join(settings.MEDIA_ROOT, filename)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)


def save_picture(form_picture):
    """Validate, shrink and store an upload. Returns its URL, or None if rejected."""
    try:
        validate_image_file(form_picture)
    except ValidationError as e:
        logger.warning("Rejected upload %s: %s", form_picture.name, e.messages[0])
        return None

    # Always saved as .jpg for smaller files
    picture_fn = f"{secrets.token_hex(8)}.jpg"
    try:
        store_bytes(prepare_image(form_picture), picture_fn)
    except (B2Error, OSError):
        logger.exception("Could not store upload %s", form_picture.name)
        return None

    return get_photo_url(picture_fn)


def delete_photo_file(filename):
    """Delete a stored image from B2 or local media. Returns True if removed."""
    # Validate filename doesn't contain path traversal
    if not filename or ".." in filename or filename.startswith("/"):
        logger.warning("Invalid filename detected: %s", filename)
        return False

    if b2_configured():
        try:
            bucket = get_b2_api().get_bucket_by_id(settings.B2_BUCKET_ID)
            for file_version, _ in bucket.ls(filename):
                if file_version.file_name == filename:
                    bucket.delete_file_version(file_version.id_, file_version.file_name)
                    logger.info("Deleted %s from B2", filename)
                    return True
        except B2Error:
            logger.exception("Error deleting %s from B2", filename)
            return False
        logger.info("File %s not found in B2", filename)
        return False

    safe_filename = os.path.basename(filename)
    photo_path = os.path.join(settings.MEDIA_ROOT, safe_filename)

    # Ensure the resolved path is within MEDIA_ROOT
    real_path = os.path.realpath(photo_path)
    real_media_root = os.path.realpath(settings.MEDIA_ROOT)
    if not real_path.startswith(real_media_root + os.sep):
        logger.warning("Path traversal detected: %s", filename)
        return False

    if not os.path.exists(photo_path):
        logger.info("Local file not found: %s", filename)
        return False

    os.remove(photo_path)
    logger.info("Deleted local file: %s", filename)
    return True
