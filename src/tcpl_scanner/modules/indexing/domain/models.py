# src/tcpl_scanner/modules/indexing/domain/models.py
"""
Entidades del modelo de código PHP.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Representar clases, métodos y sentencias ya parseadas,
junto con sus métricas de complejidad ciclomática.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from .tokens import TokenType
from .value_objects import StmtType, Visibility

# Nombre de clase -> número de clases que dependen de ella
ClassDependencyIndex = dict[str, int]

CONSTRUCTOR = "__construct"
NO_RETURN_TYPE = "No indicado"


@dataclass(frozen=True)
class Stmt:
    """
    Sentencia que aporta puntos de decisión.

    `case_count` y `stmts` solo tienen sentido en SWITCH/MATCH.
    """

    kind: StmtType
    line: int
    case_count: int = 0
    stmts: tuple[Stmt, ...] = ()

    def complexity(self) -> int:
        if self.kind == StmtType.MATCH:
            return self.case_count
        if self.kind == StmtType.SWITCH:
            return self.case_count + sum(stmt.complexity() for stmt in self.stmts)
        return 1

    def __str__(self) -> str:
        if self.kind in (StmtType.SWITCH, StmtType.MATCH):
            return f"{self.kind.name} (línea {self.line}, casos: {self.case_count})"
        return f"{self.kind.name} (línea {self.line})"


@dataclass
class Function:
    name: str
    stmts: list[Stmt] = field(default_factory=list)
    params: int = 0
    return_type: Optional[str] = None
    visibility: Visibility = Visibility.PUBLIC
    is_abstract: bool = False

    def complexity(self) -> int:
        """1 + puntos de decisión de todas las sentencias del cuerpo."""
        return sum(stmt.complexity() for stmt in self.stmts) + 1

    @property
    def display_return_type(self) -> str:
        if self.name == CONSTRUCTOR:
            return "self"
        return self.return_type if self.return_type is not None else NO_RETURN_TYPE


@dataclass
class Class:
    """
    Clase (o trait) encontrada en un archivo.
    El nombre incluye el namespace: Foo\\Baz\\Bar.
    """

    name: str = ""
    functions: list[Function] = field(default_factory=list)
    extends: Optional[str] = None
    implements: list[str] = field(default_factory=list)
    is_abstract: bool = False
    dependencies: list[str] = field(default_factory=list)

    def add_function(self, function: Function) -> None:
        if function.return_type is not None:
            self.add_dependency(function.return_type)
        self.functions.append(function)

    def add_dependency(self, dependency: str) -> None:
        # Solo nombres que empiezan en mayúscula (Foo\Bar); los \Globales no cuentan
        if (
            dependency
            and dependency[0].isupper()
            and dependency not in self.dependencies
        ):
            self.dependencies.append(dependency)

    def highest_complexity_function(self) -> int:
        return max((f.complexity() for f in self.functions), default=0)

    def average_complexity(self) -> float:
        """Media sin contar el constructor. 0.0 si no hay métodos que medir."""
        if not self.functions:
            return 0.0
        measured = [f.complexity() for f in self.functions if f.name != CONSTRUCTOR]
        return sum(measured) / max(len(measured), 1)


@dataclass(frozen=True)
class Alias:
    """`use A\\B as C` -> name='A\\B', alias='A\\C'."""

    name: str
    alias: str


@dataclass
class SourceFile:
    """Archivo escaneado con su clase y metadatos de disco."""

    path: str
    php_class: Class
    lines: int
    last_accessed_hours: int
    token_profile: Counter[TokenType] = field(default_factory=Counter)

    @property
    def token_count(self) -> int:
        return sum(self.token_profile.values())
