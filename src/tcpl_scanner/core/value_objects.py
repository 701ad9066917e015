# src/tcpl_scanner/core/value_objects.py
"""
Value Objects universales, sin dependencia del dominio PHP.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PositiveValue:
    """
    Entero estrictamente positivo (cantidades, límites de listado).
    """

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Se esperaba un entero: {self.value!r}")
        if self.value <= 0:
            raise ValueError("Must be positive")

    @classmethod
    def parse(cls, raw: str) -> PositiveValue:
        """Construye desde texto (argv, variables de entorno, input)."""
        try:
            number = int(raw.strip())
        except ValueError:
            raise ValueError(f"No es un número entero: {raw!r}") from None
        return cls(number)
