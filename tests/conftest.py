# tests/conftest.py
import logging
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def restore_root_logger():
    """configure_logging() reemplaza los handlers del root logger; se restauran tras cada test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def bar_fixture_code() -> str:
    """Clase PHP de ejemplo (Foo\\Baz\\Bar) con errores de sintaxis deliberados."""
    return (FIXTURES_DIR / "php" / "index.php").read_text(encoding="utf-8")


@pytest.fixture
def php_project(tmp_path):
    """
    Factory para crear un árbol de archivos PHP en tmp_path.
    Recibe {ruta_relativa: contenido} y devuelve el directorio raíz.
    """

    def _create(files: dict[str, str]) -> Path:
        root = tmp_path / "project"
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        root.mkdir(exist_ok=True)
        return root

    return _create
