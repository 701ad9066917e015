# src/tcpl_scanner/modules/indexing/domain/ports/source_reader.py
"""
Puerto (Interface) para la lectura del código fuente a escanear.

Arquitectura: Modular Monolith
Capa: Domain -> Ports
Responsabilidad: Abstraer el descubrimiento y la lectura de archivos.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RawSource:
    """Contenido de un archivo todavía sin tokenizar."""

    path: str
    content: str
    last_accessed_hours: int


class SourceReaderPort(ABC):
    """
    Contrato para obtener los archivos de un proyecto (disco local, memoria, etc.).
    """

    @abstractmethod
    def read_sources(self, root: str, extension: str) -> list[RawSource]:
        """
        Lee recursivamente los archivos bajo `root` con la extensión indicada.
        Los archivos ilegibles se omiten; un `root` inexistente lanza SourceReadError.
        """
        pass
