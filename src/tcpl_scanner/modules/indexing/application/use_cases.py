# src/tcpl_scanner/modules/indexing/application/use_cases.py
"""
Casos de Uso para la Indexación de un proyecto PHP.

Arquitectura: Modular Monolith
Capa: Application
Responsabilidad: Coordinar lectura, tokenización, parseo, índice de
dependencias y ordenamiento de los archivos escaneados.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

# === Imports de Dominio ===
from tcpl_scanner.modules.indexing.domain.exceptions import ParseError, TokenizeError
from tcpl_scanner.modules.indexing.domain.models import ClassDependencyIndex, SourceFile
from tcpl_scanner.modules.indexing.domain.parser import Parser
from tcpl_scanner.modules.indexing.domain.ports.source_reader import (
    RawSource,
    SourceReaderPort,
)
from tcpl_scanner.modules.indexing.domain.tokenizer import token_profile, tokenize
from tcpl_scanner.modules.indexing.domain.value_objects import SortType
from tcpl_scanner.modules.indexing.infrastructure.observability import (
    ObservabilityService,
    measure_time,
)

# Logger específico para la capa de aplicación
logger = logging.getLogger("scanner.app")

DEFAULT_EXTENSION = ".php"


@dataclass
class CodebaseIndex:
    """Resultado de un escaneo completo."""

    index: ClassDependencyIndex
    files: list[SourceFile]
    skipped: list[str] = field(default_factory=list)

    def usages_of(self, class_name: str) -> int:
        return self.index.get(class_name, 0)

    def summary(self) -> dict[str, int]:
        """Conteos para el evento de observabilidad del escaneo."""
        return {
            "files": len(self.files),
            "skipped": len(self.skipped),
            "classes": len(self.index),
        }


class IndexCodebase:
    """
    Caso de Uso Principal: Escanear un directorio y construir el índice.
    Implementa:
    1. Lectura recursiva (delegada al SourceReaderPort).
    2. Tokenización y parseo por archivo (los archivos inválidos se omiten).
    3. Índice de uso: cuántas clases dependen de cada clase.
    """

    def __init__(self, reader: SourceReaderPort, extension: str = DEFAULT_EXTENSION):
        self.reader = reader
        self.extension = extension

    @ObservabilityService.measure_latency(
        operation_name="index_codebase", summarize=CodebaseIndex.summary
    )
    def execute(self, root: str) -> CodebaseIndex:
        logger.info(f"Iniciando escaneo. Raíz: {root}")

        raw_sources = self._read(root)
        logger.info(f"Filtrados y leídos {len(raw_sources)} archivos")

        files, skipped = self._parse(raw_sources)
        logger.info(f"Escaneados y parseados {len(files)} archivos")

        index = self._build_index(files)
        logger.info(f"Indexadas {len(index)} clases")

        return CodebaseIndex(index=index, files=files, skipped=skipped)

    @measure_time(metric_name="read_sources")
    def _read(self, root: str) -> list[RawSource]:
        return self.reader.read_sources(root, self.extension)

    @measure_time(metric_name="parse_sources")
    def _parse(self, raw_sources: list[RawSource]) -> tuple[list[SourceFile], list[str]]:
        parser = Parser()
        files: list[SourceFile] = []
        skipped: list[str] = []

        for raw in raw_sources:
            try:
                tokens = tokenize(raw.content)
                php_class = parser.parse_file(tokens)
            except (TokenizeError, ParseError) as e:
                logger.warning(f"[SKIP] {raw.path}: {e}")
                skipped.append(raw.path)
                continue

            if php_class is None:
                logger.debug(f"[SKIP] Sin clase: {raw.path}")
                continue

            lines = tokens[-1].line if tokens else 0
            files.append(
                SourceFile(
                    path=raw.path,
                    php_class=php_class,
                    lines=lines,
                    last_accessed_hours=raw.last_accessed_hours,
                    token_profile=token_profile(tokens),
                )
            )
        return files, skipped

    @measure_time(metric_name="build_index")
    def _build_index(self, files: list[SourceFile]) -> ClassDependencyIndex:
        return build_dependency_index(files)


def build_dependency_index(files: list[SourceFile]) -> ClassDependencyIndex:
    """Toda clase aparece con 0; cada dependencia suma 1 a la clase usada."""
    index: ClassDependencyIndex = {}
    for source in files:
        index.setdefault(source.php_class.name, 0)
        for dependency in source.php_class.dependencies:
            index[dependency] = index.get(dependency, 0) + 1
    return index


def sort_files(
    files: list[SourceFile], sort_type: SortType, index: ClassDependencyIndex
) -> None:
    """Ordena en sitio, de mayor a menor, de forma estable."""
    if sort_type == SortType.CLASS_COMPLEXITY:
        files.sort(key=lambda f: f.php_class.average_complexity(), reverse=True)
    elif sort_type == SortType.USES:
        # Las clases fuera del índice quedan al final
        files.sort(key=lambda f: index.get(f.php_class.name, -1), reverse=True)
    elif sort_type == SortType.DEPENDENCIES:
        files.sort(key=lambda f: len(f.php_class.dependencies), reverse=True)
    elif sort_type == SortType.FUNCTION_COMPLEXITY:
        files.sort(key=lambda f: f.php_class.highest_complexity_function(), reverse=True)
    elif sort_type == SortType.TOKEN_COUNT:
        files.sort(key=lambda f: f.token_count, reverse=True)
    logger.debug(f"Ordenados {len(files)} archivos por: {sort_type}")


def filter_files(files: list[SourceFile], query: Optional[str]) -> list[SourceFile]:
    """Búsqueda por nombre de clase, sin distinguir mayúsculas."""
    if not query:
        return list(files)
    needle = query.lower()
    return [f for f in files if needle in f.php_class.name.lower()]
