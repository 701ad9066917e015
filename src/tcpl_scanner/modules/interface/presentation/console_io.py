# src/tcpl_scanner/modules/interface/presentation/console_io.py
"""
Entrada/Salida de terminal basada en Rich.

Arquitectura: Presentation Layer
Responsabilidad: Mensajes con estilo y lectura validada de opciones del usuario.
"""

from __future__ import annotations

from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape


class InputError(Exception):
    """La entrada del usuario no es válida para la pregunta realizada."""

    pass


class ConsoleIO:
    """
    Envoltorio de `rich.console.Console` con un lector de entrada inyectable
    (por defecto `input`), para poder probar el menú sin stdin real.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        reader: Optional[Callable[[], str]] = None,
    ):
        self.console = console or Console()
        self._reader = reader or input

    # === Salida ===

    def print(self, message: str = "") -> None:
        self.console.print(message, markup=False, highlight=False)

    def display_success(self, message: str) -> None:
        self.console.print(f"\n[green]{escape(message)}[/]\n")

    def display_danger(self, message: str) -> None:
        self.console.print(f"\n[red]{escape(message)}[/]\n")

    def display_error(self, message: str) -> None:
        self.console.print(f"\nError: [red]{escape(message)}[/]\n")

    def display_title(self, message: str) -> None:
        self.console.print(f"\n* --- [underline yellow]{escape(message)}[/] --- *\n")

    def display_underlined(self, message: str) -> None:
        self.console.print(f"[underline yellow]{escape(message)}[/]")

    def display_list(self, items: list[str]) -> None:
        for i, item in enumerate(items, 1):
            self.console.print(f"  {i}. {escape(item)}", highlight=False)

    # === Entrada ===

    def _read(self, message: str) -> str:
        self.console.print(f"[blue]{escape(message)}[/]")
        try:
            return self._reader().strip()
        except OSError as e:
            # stdin cerrado o sin terminal: equivale a fin de entrada
            raise EOFError("No se pudo leer la entrada") from e

    def get_string_input(self, message: str) -> str:
        text = self._read(message)
        if not text:
            raise InputError("La entrada no puede estar vacía")
        return text

    def get_int_input(self, message: str) -> int:
        text = self._read(message)
        try:
            number = int(text)
        except ValueError:
            raise InputError(f"No se pudo interpretar '{text}' como número") from None
        if number < 0:
            raise InputError("El número no puede ser negativo")
        return number
