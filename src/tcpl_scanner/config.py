# src/tcpl_scanner/config.py
"""
Configuración centralizada del escáner.

Precedencia: valores por defecto < variables de entorno < argumentos de CLI.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from tcpl_scanner.core.value_objects import PositiveValue
from tcpl_scanner.modules.indexing.domain.value_objects import SortType

ENV_TOP_FILES = "TCPL_TOP_FILES"
ENV_EXTENSION = "TCPL_EXTENSION"
ENV_LOG_FILE = "TCPL_LOG_FILE"
ENV_LOG_FORMAT = "LOG_FORMAT"


def normalize_extension(extension: str) -> str:
    """php -> .php"""
    return extension if extension.startswith(".") else f".{extension}"


@dataclass
class ScannerConfig:
    """Configuración de una ejecución del escáner."""

    root: str = "."
    extension: str = ".php"
    top_files: int = 10
    sort_type: SortType = SortType.CLASS_COMPLEXITY
    interactive: bool = True
    json_output: bool = False
    output_path: Optional[str] = None
    tokens_only: bool = False
    verbose: bool = False
    log_file: Optional[str] = None
    pretty_logs: bool = False

    def __post_init__(self):
        self.extension = normalize_extension(self.extension)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ScannerConfig:
        env = os.environ if environ is None else environ
        config = cls()
        if env.get(ENV_TOP_FILES):
            config.top_files = PositiveValue.parse(env[ENV_TOP_FILES]).value
        if env.get(ENV_EXTENSION):
            config.extension = normalize_extension(env[ENV_EXTENSION])
        config.log_file = env.get(ENV_LOG_FILE) or None
        config.pretty_logs = env.get(ENV_LOG_FORMAT) == "PRETTY"
        return config
