"""Pytest configuration and shared fixtures for tileset tests."""

import pytest
from PySide6.QtGui import QColor, QImage, QPainter

from tileset_editor.models.tileset import Tileset


@pytest.fixture(scope="session")
def qapp_args():
    """Arguments to pass to QApplication."""
    return ["pytest-qt-qapp", "-platform", "offscreen"]


# Tell pytest-qt to use PySide6
def pytest_configure(config):
    config.addinivalue_line(
        "markers", "qt: mark test as requiring Qt"
    )


def make_sheet(width: int = 64, height: int = 32) -> QImage:
    """A sheet whose 16×16 cells each have a distinct opaque color."""
    image = QImage(width, height, QImage.Format.Format_ARGB32)
    image.fill(0)
    painter = QPainter(image)
    for cell_y in range(0, height, 16):
        for cell_x in range(0, width, 16):
            painter.fillRect(cell_x, cell_y, 16, 16, QColor(cell_x * 3, cell_y * 5, 64))
    painter.end()
    return image


@pytest.fixture
def sheet_path(tmp_path, qapp):
    """A 64×32 PNG sheet on disk."""
    path = tmp_path / "sheet.png"
    assert make_sheet().save(str(path), "PNG")
    return path


@pytest.fixture
def tileset(sheet_path):
    """A fresh 16px tileset on the test sheet."""
    return Tileset.create_new(sheet_path, 16)
