# src/tcpl_scanner/modules/indexing/infrastructure/adapters.py
"""
Adaptadores de Infraestructura para Indexación.

Arquitectura: Modular Monolith
Capa: Infrastructure (Adapters)
Responsabilidad: Implementar los puertos del dominio con el sistema de archivos
local y exportar reportes en JSON.
"""

import json
import logging
import os
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from tcpl_scanner import __version__
from tcpl_scanner.modules.indexing.domain.exceptions import SourceReadError
from tcpl_scanner.modules.indexing.domain.models import Function, SourceFile
from tcpl_scanner.modules.indexing.domain.ports.source_reader import (
    RawSource,
    SourceReaderPort,
)

logger = logging.getLogger(__name__)


class LocalSourceReader(SourceReaderPort):
    """
    Implementación que recorre el sistema de archivos local del OS.
    """

    def read_sources(self, root: str, extension: str) -> list[RawSource]:
        if not os.path.isdir(root):
            logger.error(f"Directorio de entrada no existe: {root}")
            raise SourceReadError(f"No se puede leer el directorio: {root}")

        sources = []
        now = time.time()
        for dirpath, dirnames, filenames in os.walk(root, onerror=self._log_walk_error):
            dirnames.sort()
            for filename in sorted(filenames):
                if not filename.endswith(extension):
                    continue
                path = os.path.join(dirpath, filename)
                source = self._read_file(path, now)
                if source is not None:
                    sources.append(source)

        logger.info(f"Archivos {extension} encontrados en {root}: {len(sources)}")
        return sources

    @staticmethod
    def _log_walk_error(error: OSError) -> None:
        logger.error(f"No se pudo recorrer el directorio {error.filename}: {error}")

    def _read_file(self, path: str, now: float) -> RawSource | None:
        try:
            # El atime se toma antes de leer: la propia lectura lo actualiza
            accessed = os.stat(path).st_atime
            with open(path, encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"No se pudo leer el archivo {path}: {e}")
            return None

        last_accessed_hours = max(int((now - accessed) // 3600), 0)
        return RawSource(path=path, content=content, last_accessed_hours=last_accessed_hours)


class JsonReportExporter:
    """
    Serializa el resultado del escaneo a un documento JSON.
    """

    def build_report(self, files: list[SourceFile], index: dict[str, int]) -> dict[str, Any]:
        return {
            "generated_at": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "scanner_version": __version__,
            "summary": {
                "total_files": len(files),
                "total_classes": len(index),
                "total_functions": sum(len(f.php_class.functions) for f in files),
            },
            "files": [self._file_to_dict(f, index) for f in files],
            "index": index,
        }

    def export(self, files: list[SourceFile], index: dict[str, int], output_path: Path) -> Path:
        report = self.build_report(files, index)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
        logger.info(f"📄 Reporte JSON exportado: {output_path}")
        return output_path

    # Mapping: Entity -> DTO (Dict)
    def _file_to_dict(self, source: SourceFile, index: dict[str, int]) -> dict[str, Any]:
        php_class = source.php_class
        return {
            "path": source.path,
            "lines": source.lines,
            "last_accessed_hours": source.last_accessed_hours,
            "token_count": source.token_count,
            "class": {
                "name": php_class.name,
                "used_in": index.get(php_class.name, 0),
                "extends": php_class.extends,
                "implements": list(php_class.implements),
                "is_abstract": php_class.is_abstract,
                "dependencies": list(php_class.dependencies),
                "average_complexity": php_class.average_complexity(),
                "max_complexity": php_class.highest_complexity_function(),
                "functions": [self._function_to_dict(fn) for fn in php_class.functions],
            },
        }

    def _function_to_dict(self, function: Function) -> dict[str, Any]:
        return {
            "name": function.name,
            "visibility": str(function.visibility),
            "return_type": function.return_type,
            "params": function.params,
            "is_abstract": function.is_abstract,
            "complexity": function.complexity(),
            "statements": [
                {"kind": stmt.kind.name, "line": stmt.line, "complexity": stmt.complexity()}
                for stmt in function.stmts
            ],
        }
