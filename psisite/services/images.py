"""
Image processing for admin uploads (favicon set, hero and testimonial photos) with Pillow.

Files are written under ``settings.upload_dir`` and served from ``/uploads``.
"""

import io
import logging
import uuid
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from psisite.settings import settings

logger = logging.getLogger(__name__)

# file name -> edge size in pixels
FAVICON_SIZES: dict[str, int] = {
    "favicon.ico": 32,
    "favicon-16x16.png": 16,
    "favicon-32x32.png": 32,
    "apple-touch-icon.png": 180,
}
HERO_MAX_WIDTH = 1600
HERO_QUALITY = 82
TESTIMONIAL_PHOTO_SIZE = (300, 300)
TESTIMONIAL_QUALITY = 85


class ImageUploadError(ValueError):
    """The uploaded bytes are not a usable image."""


def _open_image(data: bytes) -> Image.Image:
    if not data:
        raise ImageUploadError("Nenhum arquivo enviado")
    if len(data) > settings.upload_max_size_bytes:
        raise ImageUploadError(f"Arquivo maior que {settings.upload_max_size_mb} MB")
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageUploadError("Apenas imagens são permitidas") from exc
    return ImageOps.exif_transpose(image)


def _square(image: Image.Image) -> Image.Image:
    """Center-crop to a square so icons keep their aspect ratio."""
    return ImageOps.fit(image.convert("RGBA"), (min(image.size),) * 2, method=Image.Resampling.LANCZOS)


def upload_url(path: Path) -> str:
    return "/uploads/" + path.relative_to(settings.upload_dir).as_posix()


def save_favicon(data: bytes) -> list[str]:
    """Write the favicon set and return the public URLs, favicon.ico first."""
    source = _square(_open_image(data))
    icons_dir = settings.icons_dir
    icons_dir.mkdir(parents=True, exist_ok=True)

    urls = []
    for name, size in FAVICON_SIZES.items():
        target = icons_dir / name
        icon = source.resize((size, size), Image.Resampling.LANCZOS)
        if name.endswith(".ico"):
            icon.save(target, format="ICO", sizes=[(size, size)])
        else:
            icon.save(target, format="PNG", optimize=True)
        urls.append(upload_url(target))

    logger.info("Favicon set written to %s", icons_dir)
    return urls


def remove_favicon() -> list[str]:
    """Delete the custom favicon files; returns the names actually removed."""
    removed = []
    for name in FAVICON_SIZES:
        target = settings.icons_dir / name
        if target.exists():
            target.unlink()
            removed.append(name)
    logger.info("Removed favicon files: %s", removed)
    return removed


def _save_webp(image: Image.Image, folder: str, quality: int) -> Path:
    if image.mode not in ("RGB", "RGBA"):
        image = image.convert("RGBA" if "A" in image.getbands() else "RGB")
    target_dir = settings.upload_dir / folder
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / f"{folder}-{uuid.uuid4().hex[:12]}.webp"
    image.save(target, format="WEBP", quality=quality, method=6)
    return target


def save_hero_image(data: bytes) -> str:
    """Store an optimised WebP copy of the hero photo and return its URL."""
    image = _open_image(data)
    if image.width > HERO_MAX_WIDTH:
        height = round(image.height * HERO_MAX_WIDTH / image.width)
        image = image.resize((HERO_MAX_WIDTH, height), Image.Resampling.LANCZOS)
    target = _save_webp(image, "hero", HERO_QUALITY)
    logger.info("Hero image saved as %s", target.name)
    return upload_url(target)


def save_testimonial_photo(data: bytes) -> str:
    """Store a WebP copy of a client photo, at most 300x300, and return its URL."""
    image = _open_image(data)
    image.thumbnail(TESTIMONIAL_PHOTO_SIZE, Image.Resampling.LANCZOS)
    target = _save_webp(image, "testimonials", TESTIMONIAL_QUALITY)
    logger.info("Testimonial photo saved as %s", target.name)
    return upload_url(target)


def remove_upload(url: str | None) -> None:
    """Delete a file previously returned by this module, ignoring foreign URLs."""
    if not url or not url.startswith("/uploads/"):
        return
    target = (settings.upload_dir / url.removeprefix("/uploads/")).resolve()
    if settings.upload_dir.resolve() not in target.parents:
        logger.warning("Refusing to delete %s outside the upload dir", url)
        return
    target.unlink(missing_ok=True)
