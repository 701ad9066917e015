# src/tcpl_scanner/modules/indexing/domain/value_objects.py
"""
Value Objects para el Bounded Context de Indexación.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Definir los enumerados inmutables del modelo de código PHP.
"""
from __future__ import annotations

from enum import Enum, auto

# === Guía de Organización ===
# ✅ PUREZA: Solo tipos nativos, sin I/O.


class Visibility(Enum):
    """Visibilidad declarada de un método PHP."""

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"

    def __str__(self) -> str:
        return self.value


class StmtType(Enum):
    """
    Sentencias que suman puntos de decisión a la complejidad ciclomática.
    """

    IF = auto()
    ELSEIF = auto()
    FOR = auto()
    FOREACH = auto()
    THROW = auto()
    CATCH = auto()
    SWITCH = auto()
    MATCH = auto()


class SortType(Enum):
    """Criterios de ordenamiento para el ranking de archivos."""

    CLASS_COMPLEXITY = "complejidad de clase"
    USES = "usos"
    DEPENDENCIES = "dependencias"
    FUNCTION_COMPLEXITY = "complejidad de método"
    TOKEN_COUNT = "cantidad de tokens"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> SortType:
        """Acepta 'uses', 'class-complexity', 'CLASS_COMPLEXITY', etc."""
        normalized = name.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[normalized]
        except KeyError:
            raise ValueError(f"Criterio de orden desconocido: {name}") from None
