# src/tcpl_scanner/modules/indexing/domain/tokenizer.py
"""
Analizador léxico de PHP.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Convertir el texto de un archivo PHP en una secuencia de tokens.

No pretende ser un lexer completo de PHP: reconoce lo suficiente para
contar puntos de decisión y dependencias entre clases.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from typing import Optional

from .exceptions import TokenizeError
from .tokens import Token, TokenType

# Tokens de un carácter sin variantes compuestas
_SINGLE_CHAR_TOKENS = {
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "#": TokenType.HASH,
    "*": TokenType.STAR,
    "?": TokenType.QUESTION,
    "%": TokenType.MODULO,
    "@": TokenType.AT_SIGN,
    "~": TokenType.BINARY_NEGATION,
}

_WHITESPACE = (" ", "\r", "\t", "\n")


class Tokenizer:
    """
    Iterador de tokens sobre el código fuente.

    Uso:
        tokens = list(Tokenizer(code))
    """

    def __init__(self, code: str):
        self.code = code
        self.pos = 0
        self.line = 1

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.scan_token()
            if token is None:
                return
            yield token

    # === Navegación ===

    def _at_end(self) -> bool:
        return self.pos >= len(self.code)

    def _advance(self) -> str:
        if self._at_end():
            raise TokenizeError("Se esperaba un carácter", self.line)
        char = self.code[self.pos]
        if char == "\n":
            self.line += 1
        self.pos += 1
        return char

    def _peek(self) -> Optional[str]:
        return None if self._at_end() else self.code[self.pos]

    def _peek_next(self) -> Optional[str]:
        nxt = self.pos + 1
        return self.code[nxt] if nxt < len(self.code) else None

    def _match(self, expected: str) -> bool:
        if self._peek() == expected:
            self._advance()
            return True
        return False

    def _make_token(self, token_type: TokenType, lexeme: str) -> Token:
        return Token(token_type, self.line, lexeme)

    # === Literales ===

    def _string(self, quote: str) -> Token:
        chars = []
        escaped = False
        while not self._at_end() and (self._peek() != quote or escaped):
            char = self._advance()
            escaped = not escaped if char == "\\" else False
            chars.append(char)
        if self._at_end():
            raise TokenizeError("Cadena sin cerrar", self.line)
        self._advance()  # comilla de cierre
        return self._make_token(TokenType.STRING, "".join(chars))

    def _number(self, first: str) -> Token:
        chars = [first]
        while (c := self._peek()) is not None and c.isdigit():
            chars.append(self._advance())
        if self._peek() == ".":
            chars.append(self._advance())
            while (c := self._peek()) is not None and c.isdigit():
                chars.append(self._advance())
        return self._make_token(TokenType.NUMBER, "".join(chars))

    def _identifier(self, first: str) -> Token:
        chars = [first]
        while (c := self._peek()) is not None and (c.isalnum() or c in "_\\"):
            chars.append(self._advance())
        return self._make_token(TokenType.IDENTIFIER, "".join(chars))

    def _here_doc(self) -> Token:
        """Heredoc (<<<FOO) y nowdoc (<<<'FOO'): el cuerpo llega hasta el título."""
        title = []
        opening = self._peek()
        if opening in ("'", '"'):
            self._advance()
            while (c := self._peek()) is not None and c != opening:
                title.append(self._advance())
            self._advance()
        else:
            while (c := self._peek()) is not None and c != "\n":
                title.append(self._advance())
        self._advance()  # salto de línea tras el título

        terminator = "".join(title)
        if not terminator:
            raise TokenizeError("Heredoc sin título", self.line)

        doc = []
        while not self.code.startswith(terminator, self.pos):
            if self._at_end():
                raise TokenizeError(f"Heredoc '{terminator}' sin cerrar", self.line)
            doc.append(self._advance())
        for _ in terminator:
            self._advance()
        return self._make_token(TokenType.HEREDOC, "".join(doc))

    # === Comentarios ===

    def _skip_block_comment(self) -> None:
        while not self._at_end() and not (
            self._peek() == "*" and self._peek_next() == "/"
        ):
            self._advance()
        if self._at_end():
            raise TokenizeError("Comentario de bloque sin cerrar", self.line)
        self._advance()
        self._advance()

    def _skip_line_comment(self) -> None:
        while (c := self._peek()) is not None and c != "\n":
            self._advance()

    # === Escaneo ===

    def scan_token(self) -> Optional[Token]:
        """Devuelve el siguiente token o None al final del archivo."""
        while True:
            if self._at_end():
                return None
            char = self._advance()

            if char in _WHITESPACE:
                continue
            if char == "/":
                if self._match("*"):
                    self._skip_block_comment()
                    continue
                if self._match("/"):
                    self._skip_line_comment()
                    continue
                return self._make_token(TokenType.SLASH, "/")
            return self._scan_non_trivia(char)

    def _scan_non_trivia(self, char: str) -> Token:
        if char in _SINGLE_CHAR_TOKENS:
            return self._make_token(_SINGLE_CHAR_TOKENS[char], char)

        if char == "-":
            if self._match(">"):
                return self._make_token(TokenType.THIN_ARROW, "->")
            return self._make_token(TokenType.MINUS, "-")
        if char == ":":
            if self._match(":"):
                return self._make_token(TokenType.COLON_COLON, "::")
            return self._make_token(TokenType.COLON, ":")
        if char == "!":
            if self._match("="):
                if self._match("="):
                    return self._make_token(TokenType.BANG_EQUAL_EQUAL, "!==")
                return self._make_token(TokenType.BANG_EQUAL, "!=")
            return self._make_token(TokenType.BANG, "!")
        if char == "=":
            if self._match("="):
                if self._match("="):
                    return self._make_token(TokenType.EQUAL_EQUAL_EQUAL, "===")
                return self._make_token(TokenType.EQUAL_EQUAL, "==")
            if self._match(">"):
                return self._make_token(TokenType.FAT_ARROW, "=>")
            return self._make_token(TokenType.EQUAL, "=")
        if char == ">":
            if self._match("="):
                return self._make_token(TokenType.GREATER_EQUAL, ">=")
            return self._make_token(TokenType.GREATER, ">")
        if char == "<":
            # Coincidencia ávida: consume mientras avanza (<< produce un solo LESS)
            if self._match("<") and self._match("<"):
                return self._here_doc()
            if (
                self._match("?")
                and self._match("p")
                and self._match("h")
                and self._match("p")
            ):
                return self._make_token(TokenType.PHP_TAG, "<?php")
            if self._match("="):
                return self._make_token(TokenType.LESS_EQUAL, "<=")
            return self._make_token(TokenType.LESS, "<")
        if char == "|":
            if self._match("|"):
                return self._make_token(TokenType.OR_OPERATOR, "||")
            return self._make_token(TokenType.PIPE, "|")
        if char == "&":
            if self._match("&"):
                return self._make_token(TokenType.AND_OPERATOR, "&&")
            return self._make_token(TokenType.REFERENCE, "&")

        if char in ("'", '"'):
            return self._string(char)
        if char.isascii() and char.isdigit():
            return self._number(char)
        if char == "_" or char in "$\\" or (char.isascii() and char.isalpha()):
            return self._identifier(char)

        raise TokenizeError(f"Carácter inesperado {char!r}", self.line)


def tokenize(code: str) -> list[Token]:
    """Atajo para materializar todos los tokens de un archivo."""
    return list(Tokenizer(code))


def token_profile(tokens: Iterable[Token]) -> Counter[TokenType]:
    """Histograma de tipos de token (complejidad 'en bruto' de un archivo)."""
    return Counter(token.token_type for token in tokens)
