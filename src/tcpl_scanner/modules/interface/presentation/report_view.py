# src/tcpl_scanner/modules/interface/presentation/report_view.py
"""
Renderizado de los archivos escaneados.

Arquitectura: Presentation Layer
Responsabilidad: Traducir `SourceFile` y el índice de uso a texto de terminal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rich import box
from rich.table import Table

from tcpl_scanner.modules.indexing.application.use_cases import filter_files
from tcpl_scanner.modules.indexing.domain.models import (
    ClassDependencyIndex,
    Function,
    SourceFile,
)

from .console_io import ConsoleIO

SEPARATOR = "* ---------- *"
FUNCTION_SEPARATOR = "* -------- *"


@dataclass
class ViewOptions:
    """Qué mostrar de cada archivo. `query` solo vive durante una búsqueda."""

    dependencies: bool = True
    top_files: int = 10
    num_functions: Optional[int] = None
    function_stmts: bool = True
    query: Optional[str] = None


def display_view_options(io: ConsoleIO, view_options: ViewOptions) -> None:
    io.display_title("Opciones de vista")
    table = Table(show_header=False, box=box.SIMPLE)
    table.add_column("Opción", style="cyan")
    table.add_column("Valor", justify="right")
    table.add_row("Número de archivos", str(view_options.top_files))
    table.add_row("Mostrar dependencias", _yes_no(view_options.dependencies))
    functions = (
        "Todos" if view_options.num_functions is None else str(view_options.num_functions)
    )
    table.add_row("Métodos por clase", functions)
    table.add_row("Mostrar sentencias de métodos", _yes_no(view_options.function_stmts))
    io.console.print(table)


def display_files(
    io: ConsoleIO,
    files: list[SourceFile],
    index: ClassDependencyIndex,
    view_options: ViewOptions,
) -> int:
    """Muestra los primeros `top_files` archivos que cumplen la búsqueda. Devuelve cuántos."""
    io.print()
    io.display_title("Archivos principales")
    selected = filter_files(files, view_options.query)[: view_options.top_files]
    if not selected:
        io.display_danger("No hay archivos que mostrar")
        return 0

    for rank, source in enumerate(selected, 1):
        _display_file(io, rank, source, index, view_options)
    return len(selected)


def _display_file(
    io: ConsoleIO,
    rank: int,
    source: SourceFile,
    index: ClassDependencyIndex,
    view_options: ViewOptions,
) -> None:
    php_class = source.php_class
    io.display_underlined(f"{rank}. {php_class.name}")
    io.print(f"Último acceso hace {source.last_accessed_hours} horas")
    io.print(f"Ruta: {source.path}")
    io.print(f"Líneas: {source.lines}")
    io.print(f"Usada en {index.get(php_class.name, 0)} lugares")

    if not php_class.dependencies:
        io.print("Sin dependencias")
    else:
        io.print(f"Dependencias: {len(php_class.dependencies)}")
        if view_options.dependencies:
            io.print("* ------ *")
            io.display_list(php_class.dependencies)

    io.print(f"Complejidad ciclomática media: {php_class.average_complexity():g}")
    io.print(f"Complejidad ciclomática máxima: {php_class.highest_complexity_function()}")
    io.print(f"Métodos: {len(php_class.functions)}")
    io.print(f"Extiende: {php_class.extends or 'Ninguna'}")
    if not php_class.implements:
        io.print("Implementa: Ninguna")
    else:
        io.print("Implementa:")
        for i, interface in enumerate(php_class.implements, 1):
            io.print(f" {i}. {interface}")
    io.print(f"Abstracta: {_yes_no(php_class.is_abstract)}")

    functions = php_class.functions
    if view_options.num_functions is not None:
        functions = functions[: view_options.num_functions]
    for function in functions:
        _display_function(io, function, view_options.function_stmts)
    io.print(SEPARATOR)


def _display_function(io: ConsoleIO, function: Function, show_stmts: bool) -> None:
    io.print(FUNCTION_SEPARATOR)
    io.print(f"  Nombre: {function.name}")
    io.print(f"  Visibilidad: {function.visibility}")
    io.print(f"  Tipo de retorno: {function.display_return_type}")
    io.print(f"  Parámetros: {function.params}")
    io.print(f"  Complejidad ciclomática: {function.complexity()}")
    if show_stmts:
        for stmt in function.stmts:
            io.print(f"  {stmt}")


def display_token_profile(io: ConsoleIO, files: list[SourceFile], top_files: int) -> None:
    """Ranking por cantidad de tokens con el histograma de cada archivo."""
    io.display_title("Perfil de tokens")
    for rank, source in enumerate(files[:top_files], 1):
        # Fuera de la tabla: el título de rich se ajusta al ancho de las columnas
        io.display_underlined(f"{rank}. {source.path} ({source.token_count} tokens)")
        table = Table(box=box.ROUNDED)
        table.add_column("Token", style="cyan")
        table.add_column("Cantidad", justify="right")
        for token_type, count in source.token_profile.most_common():
            table.add_row(token_type.name, str(count))
        io.console.print(table)


def _yes_no(flag: bool) -> str:
    return "sí" if flag else "no"
