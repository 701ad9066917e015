# src/tcpl_scanner/modules/interface/entry_points/cli.py
"""
Interfaz de Línea de Comandos (CLI) del escáner.

Arquitectura: Interface Adapter
Responsabilidad:
    1. Parsear argumentos (argv) sobre la configuración de entorno.
    2. Instanciar el Composition Root.
    3. Elegir la salida: menú interactivo, listado, JSON o perfil de tokens.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console

from tcpl_scanner import __version__
from tcpl_scanner.config import ScannerConfig, normalize_extension
from tcpl_scanner.core.value_objects import PositiveValue
from tcpl_scanner.modules.indexing.application.use_cases import IndexCodebase, sort_files
from tcpl_scanner.modules.indexing.domain.exceptions import ScannerError, SourceReadError
from tcpl_scanner.modules.indexing.domain.value_objects import SortType
from tcpl_scanner.modules.indexing.infrastructure.adapters import (
    JsonReportExporter,
    LocalSourceReader,
)
from tcpl_scanner.modules.indexing.infrastructure.observability import (
    ObservabilityService,
    configure_logging,
)
from tcpl_scanner.modules.interface.presentation.console_io import ConsoleIO
from tcpl_scanner.modules.interface.presentation.menu import InteractiveMenu
from tcpl_scanner.modules.interface.presentation.report_view import (
    ViewOptions,
    display_files,
    display_token_profile,
)

EXIT_OK = 0
EXIT_INVALID_PATH = 1
EXIT_SCANNER_ERROR = 2
EXIT_IO_ERROR = 3
EXIT_INTERRUPTED = 130


def _positive_int(raw: str) -> int:
    try:
        return PositiveValue.parse(raw).value
    except (TypeError, ValueError) as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _sort_type(raw: str) -> SortType:
    try:
        return SortType.from_name(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def setup_parser(defaults: ScannerConfig) -> argparse.ArgumentParser:
    """Configura los argumentos aceptados por la herramienta."""
    parser = argparse.ArgumentParser(
        prog="tcpl-scanner",
        description="TCPL Scanner - Complejidad ciclomática y dependencias de proyectos PHP",
        epilog="Ejemplo: tcpl-scanner ./src --top 5 --no-interactive",
    )
    parser.add_argument("path", help="Directorio raíz del proyecto a escanear")
    parser.add_argument(
        "--top",
        "-n",
        type=_positive_int,
        default=defaults.top_files,
        help=f"Cantidad de archivos a mostrar (default: {defaults.top_files})",
    )
    parser.add_argument(
        "--sort",
        type=_sort_type,
        default=defaults.sort_type,
        metavar="{" + ",".join(s.name.lower() for s in SortType) + "}",
        help="Criterio de orden inicial (default: class_complexity)",
    )
    parser.add_argument(
        "--extension",
        "-e",
        default=defaults.extension,
        help=f"Extensión de los archivos a escanear (default: {defaults.extension})",
    )
    parser.add_argument(
        "--no-interactive",
        dest="interactive",
        action="store_false",
        help="Imprime el ranking y termina, sin menú",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Salida en formato JSON (útil para tuberías/pipes)",
    )
    parser.add_argument("--output", "-o", help="Guarda además un reporte JSON en esta ruta")
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="Ranking por cantidad de tokens con su histograma",
    )
    parser.add_argument(
        "--log-file", default=defaults.log_file, help="Archivo adicional de logs"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Muestra logs detallados de progreso"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_config(argv: Optional[list[str]] = None) -> ScannerConfig:
    try:
        config = ScannerConfig.from_env()
    except (TypeError, ValueError) as e:
        raise SystemExit(f"❌ Configuración inválida: {e}") from e
    args = setup_parser(config).parse_args(argv)
    config.root = args.path
    config.top_files = args.top
    config.sort_type = args.sort
    config.extension = normalize_extension(args.extension)
    config.interactive = args.interactive and not (args.json or args.tokens)
    config.json_output = args.json
    config.output_path = args.output
    config.tokens_only = args.tokens
    config.log_file = args.log_file
    config.verbose = args.verbose
    return config


def run(config: ScannerConfig, io: ConsoleIO) -> int:
    # 1. Composition Root (Wiring)
    use_case = IndexCodebase(LocalSourceReader(), extension=config.extension)

    # 2. Ejecución
    result = use_case.execute(config.root)

    if config.output_path:
        JsonReportExporter().export(result.files, result.index, Path(config.output_path))

    # 3. Renderizado (Output)
    if config.tokens_only:
        sort_files(result.files, SortType.TOKEN_COUNT, result.index)
        display_token_profile(io, result.files, config.top_files)
        return EXIT_OK

    view_options = ViewOptions(top_files=config.top_files)
    if config.interactive:
        InteractiveMenu(result, io, view_options, config.sort_type).run()
        return EXIT_OK

    sort_files(result.files, config.sort_type, result.index)
    if config.json_output:
        report = JsonReportExporter().build_report(
            result.files[: config.top_files], result.index
        )
        print(json.dumps(report, indent=2))
    else:
        display_files(io, result.files, result.index, view_options)
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    config = build_config(argv)
    ObservabilityService.PRETTY_PRINT = config.pretty_logs
    try:
        configure_logging(
            level=logging.DEBUG if config.verbose else logging.WARNING,
            log_file=config.log_file,
        )
    except OSError as e:
        print(f"❌ No se pudo abrir el archivo de logs: {e}", file=sys.stderr)
        return EXIT_IO_ERROR
    io = ConsoleIO(Console())

    try:
        return run(config, io)
    except SourceReadError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return EXIT_INVALID_PATH
    except ScannerError as e:
        # Errores de dominio
        print(f"❌ Error de escaneo: {e}", file=sys.stderr)
        return EXIT_SCANNER_ERROR
    except OSError as e:
        # Reporte JSON (--output) no escribible
        print(f"❌ Error de escritura: {e}", file=sys.stderr)
        return EXIT_IO_ERROR
    except KeyboardInterrupt:
        print("\n⚠️  Operación cancelada por el usuario.", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
