# src/tcpl_scanner/modules/indexing/domain/exceptions.py
"""
Excepciones del dominio de Indexación.

Arquitectura: Domain Layer
Responsabilidad: Definir errores semánticos independientes de la infraestructura.
"""


class ScannerError(Exception):
    """Clase base para errores del escáner."""

    pass


class SourceReadError(ScannerError):
    """El directorio o archivo fuente no existe o es ilegible."""

    pass


class TokenizeError(ScannerError):
    """El código fuente contiene una construcción léxica inválida."""

    def __init__(self, message: str, line: int):
        super().__init__(f"línea {line}: {message}")
        self.line = line


class ParseError(ScannerError):
    """La secuencia de tokens no forma una estructura reconocible."""

    pass
