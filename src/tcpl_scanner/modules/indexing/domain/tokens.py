# src/tcpl_scanner/modules/indexing/domain/tokens.py
"""
Vocabulario léxico de PHP.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Tipos de token, palabras clave y tipos nativos reconocidos.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .value_objects import Visibility


class TokenType(Enum):
    PHP_TAG = auto()

    # Un solo carácter
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()
    QUESTION = auto()
    COLON = auto()
    PIPE = auto()
    HASH = auto()
    REFERENCE = auto()
    MODULO = auto()
    AT_SIGN = auto()
    BINARY_NEGATION = auto()

    # Uno, dos o tres caracteres
    BANG = auto()
    BANG_EQUAL = auto()
    BANG_EQUAL_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    EQUAL_EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    OR_OPERATOR = auto()
    AND_OPERATOR = auto()
    HEREDOC = auto()
    FAT_ARROW = auto()
    THIN_ARROW = auto()
    COLON_COLON = auto()

    # Literales
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()  # int/float da igual para la complejidad


class Keyword(Enum):
    IF = "if"
    ELSEIF = "elseif"
    FOR = "for"
    FOREACH = "foreach"
    MATCH = "match"
    SWITCH = "switch"
    WHILE = "while"
    CASE = "case"
    NAMESPACE = "namespace"
    CLASS = "class"
    FUNCTION = "function"
    THROW = "throw"
    CATCH = "catch"
    EXTENDS = "extends"
    ABSTRACT = "abstract"
    USE = "use"
    AS = "as"
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    CONST = "const"
    STATIC = "static"
    ITERABLE = "iterable"
    STRING = "string"
    ARRAY = "array"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    SELF = "self"
    VOID = "void"
    READONLY = "readonly"
    MIXED = "mixed"
    IMPLEMENTS = "implements"
    TRAIT = "trait"

    @property
    def visibility(self) -> Optional[Visibility]:
        return _VISIBILITIES.get(self)


_VISIBILITIES = {
    Keyword.PUBLIC: Visibility.PUBLIC,
    Keyword.PRIVATE: Visibility.PRIVATE,
    Keyword.PROTECTED: Visibility.PROTECTED,
}

KEYWORDS: dict[str, Keyword] = {kw.value: kw for kw in Keyword}
KEYWORDS["true"] = Keyword.BOOL
KEYWORDS["false"] = Keyword.BOOL

# Tipos que nunca son dependencias de una clase.
# None marca los que no tienen palabra clave propia.
BUILT_IN_DATA_TYPES: dict[str, Optional[Keyword]] = {
    "string": Keyword.STRING,
    "array": Keyword.ARRAY,
    "int": Keyword.INT,
    "float": Keyword.FLOAT,
    "bool": Keyword.BOOL,
    "self": Keyword.SELF,
    "void": Keyword.VOID,
    "readonly": Keyword.READONLY,
    "iterable": Keyword.ITERABLE,
    "static": Keyword.STATIC,
    "mixed": Keyword.MIXED,
    "true": Keyword.BOOL,
    "false": Keyword.BOOL,
    "null": None,
    "callable": None,
    "object": None,
    "never": None,
    "parent": None,
}


@dataclass(frozen=True)
class Token:
    token_type: TokenType
    line: int
    lexeme: str

    @property
    def is_identifier(self) -> bool:
        return self.token_type == TokenType.IDENTIFIER


def match_keyword(token: Token) -> Optional[Keyword]:
    """Palabra clave del token, solo para identificadores (sensible a mayúsculas)."""
    if not token.is_identifier:
        return None
    return KEYWORDS.get(token.lexeme)


def match_data_type(token: Token) -> bool:
    """Indica si el token nombra un tipo nativo de PHP."""
    return token.is_identifier and token.lexeme in BUILT_IN_DATA_TYPES
