"""
Sheet image service: loading, cropping and drawing regions of a tileset sheet.

The sheet is loaded once per tileset and only ever read afterwards. Crops
that fall partly or entirely outside the sheet are clipped rather than
rejected; the uncovered area is transparent.
"""

import logging
from pathlib import Path
from typing import Union

from PySide6.QtCore import QRect
from PySide6.QtGui import QImage, QPainter

from ..errors import ImageLoadError, NotFoundError

logger = logging.getLogger(__name__)


def load_image(image_path: Union[str, Path]) -> QImage:
    """
    Load a sheet image from disk.

    Args:
        image_path: Path to the image file.

    Returns:
        The image, converted to ARGB32.

    Raises:
        NotFoundError: If the file does not exist.
        ImageLoadError: If the file exists but cannot be decoded.
    """
    path = Path(image_path)
    if not path.is_file():
        raise NotFoundError(f"Sheet image not found: {path}")

    image = QImage(str(path))
    if image.isNull():
        raise ImageLoadError(f"Failed to load image: {path}")

    # Convert to ARGB32 for consistent handling
    if image.format() != QImage.Format.Format_ARGB32:
        image = image.convertToFormat(QImage.Format.Format_ARGB32)

    logger.debug("Loaded sheet %s (%dx%d)", path, image.width(), image.height())
    return image


def crop_region(image: QImage, rect: QRect) -> QImage:
    """
    Copy a rectangular region out of an image.

    The result always has the size of rect. Pixels outside the source
    image are left transparent.
    """
    if not image.rect().contains(rect):
        logger.debug(
            "Crop (%d, %d, %d, %d) exceeds sheet %dx%d; clipping",
            rect.x(), rect.y(), rect.width(), rect.height(),
            image.width(), image.height(),
        )
    return image.copy(rect)


def draw_image_at(painter: QPainter, image: QImage, x: int, y: int) -> None:
    """Draw an image with its top-left corner at (x, y)."""
    painter.drawImage(x, y, image)
