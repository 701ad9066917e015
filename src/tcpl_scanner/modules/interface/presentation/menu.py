# src/tcpl_scanner/modules/interface/presentation/menu.py
"""
Menú interactivo del escáner.

Arquitectura: Presentation Layer (Interface Adapter)
Responsabilidad: Bucle de opciones sobre un índice ya construido:
ver archivos, cambiar opciones de vista, buscar y reordenar.
"""

from __future__ import annotations

import logging

from tcpl_scanner.modules.indexing.application.use_cases import CodebaseIndex, sort_files
from tcpl_scanner.modules.indexing.domain.value_objects import SortType

from .console_io import ConsoleIO, InputError
from .report_view import ViewOptions, display_files, display_view_options

logger = logging.getLogger(__name__)

MENU_SEPARATOR = "* ----------------------- *"

# Opción del menú -> criterio de orden
SORT_OPTIONS = {
    1: SortType.CLASS_COMPLEXITY,
    2: SortType.USES,
    3: SortType.DEPENDENCIES,
    4: SortType.FUNCTION_COMPLEXITY,
    5: SortType.TOKEN_COUNT,
}


class InteractiveMenu:
    """
    Uso:
        InteractiveMenu(result, ConsoleIO()).run()

    `run()` termina con la opción 8 o al cerrarse la entrada (EOF).
    """

    def __init__(
        self,
        result: CodebaseIndex,
        io: ConsoleIO,
        view_options: ViewOptions | None = None,
        sort_type: SortType = SortType.CLASS_COMPLEXITY,
    ):
        self.result = result
        self.io = io
        self.view_options = view_options or ViewOptions()
        self.sort_type = sort_type

    @property
    def files(self):
        return self.result.files

    def run(self) -> None:
        self.io.print()
        self.io.print(f"Ordenando por: {self.sort_type}")
        sort_files(self.files, self.sort_type, self.result.index)
        if self.result.skipped:
            self.io.display_danger(
                f"{len(self.result.skipped)} archivos no se pudieron parsear (ver logs)"
            )

        self.io.display_title("TCPL Scanner")
        while True:
            self.io.print()
            self.io.console.print(f"[bold red]{MENU_SEPARATOR}[/]")
            self.io.print()
            self.io.display_underlined("Opciones")
            self.io.print("1. Ver archivos principales")
            self.io.print("2. Ver opciones de vista")
            self.io.print("3. Cambiar opciones de vista")
            self.io.print("4. Buscar un archivo")
            self.io.print("5. Reordenar archivos")
            self.io.print("8. Salir\n")

            try:
                option = self.io.get_int_input("Elige una opción")
            except InputError as e:
                self.io.display_error(str(e))
                continue
            except EOFError:
                logger.debug("Entrada cerrada, saliendo del menú")
                return
            self.io.print()

            if option == 8:
                self.io.display_success("¡Adiós!")
                return
            try:
                self._dispatch(option)
            except EOFError:
                return

    def _dispatch(self, option: int) -> None:
        if option == 1:
            display_files(self.io, self.files, self.result.index, self.view_options)
        elif option == 2:
            display_view_options(self.io, self.view_options)
        elif option == 3:
            self.update_view_options()
        elif option == 4:
            self.search()
        elif option == 5:
            self.re_sort()
        else:
            self.io.display_error("Opción incorrecta, inténtalo de nuevo")

    def update_view_options(self) -> None:
        options = self.view_options
        while True:
            display_view_options(self.io, options)
            self.io.display_title("Elige la opción a cambiar")
            self.io.print("1. Número de archivos")
            self.io.print("2. Mostrar/ocultar dependencias")
            self.io.print("3. Máximo de métodos por clase")
            self.io.print("4. Mostrar/ocultar sentencias de métodos")
            self.io.print("8. Listo\n")

            try:
                option = self.io.get_int_input("Elige una opción")
            except InputError as e:
                self.io.display_error(str(e))
                continue

            if option == 1:
                try:
                    options.top_files = self.io.get_int_input(
                        "¿Cuántos archivos quieres ver?"
                    )
                except InputError:
                    continue
                return
            if option == 2:
                options.dependencies = not options.dependencies
                state = "activadas" if options.dependencies else "desactivadas"
                self.io.display_success(f"Dependencias {state}")
                return
            if option == 3:
                if self._update_num_functions():
                    return
                continue
            if option == 4:
                options.function_stmts = not options.function_stmts
                state = "activadas" if options.function_stmts else "desactivadas"
                self.io.display_success(f"Sentencias de métodos {state}")
                return
            if option == 8:
                return
            self.io.display_error("Opción incorrecta, inténtalo de nuevo")

    def _update_num_functions(self) -> bool:
        """True si se fijó un límite; False para volver al submenú."""
        self.io.print()
        self.io.print("1. Sí")
        self.io.print("2. No (ver todos los métodos)")
        try:
            answer = self.io.get_int_input("¿Quieres un número fijo de métodos por clase?")
        except InputError:
            return False
        if answer == 2:
            self.view_options.num_functions = None
            return False
        if answer != 1:
            self.io.display_error("Opción incorrecta, inténtalo de nuevo")
            return False
        try:
            limit = self.io.get_int_input("¿Cuántos métodos por clase?")
        except InputError:
            return False
        self.view_options.num_functions = limit
        return True

    def search(self) -> None:
        try:
            query = self.io.get_string_input("Texto a buscar")
        except InputError:
            return
        self.view_options.query = query
        try:
            display_files(self.io, self.files, self.result.index, self.view_options)
        finally:
            self.view_options.query = None

    def re_sort(self) -> None:
        self.io.display_title("Opciones de orden")
        self.io.print("  1. Complejidad ciclomática media de la clase")
        self.io.print("  2. Usos de la clase")
        self.io.print("  3. Número de dependencias de la clase")
        self.io.print("  4. Complejidad máxima de un método")
        self.io.print("  5. Cantidad de tokens del archivo")
        try:
            option = self.io.get_int_input("Elige un criterio de orden")
        except InputError:
            return
        sort_type = SORT_OPTIONS.get(option)
        if sort_type is None:
            self.io.display_error("Criterio incorrecto")
            return
        self.sort_type = sort_type
        sort_files(self.files, sort_type, self.result.index)
        self.io.display_success(f"Ordenado por: {sort_type}")
