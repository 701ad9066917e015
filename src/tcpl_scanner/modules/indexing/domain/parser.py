# src/tcpl_scanner/modules/indexing/domain/parser.py
"""
Parser estructural de archivos PHP.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Recorrer los tokens de un archivo y construir la `Class` que
declara: métodos, sentencias de control, herencia y dependencias.

No es un parser de la gramática completa de PHP. Sigue la estructura de llaves
y reconoce palabras clave; el resto de tokens se ignora.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from typing import Optional

from .exceptions import ParseError
from .models import Alias, Class, Function, Stmt
from .tokens import Keyword, Token, TokenType, match_data_type, match_keyword
from .value_objects import StmtType, Visibility

_OPENING = {TokenType.LEFT_PAREN: TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE: TokenType.RIGHT_BRACE}
_CLOSING = {TokenType.RIGHT_PAREN, TokenType.RIGHT_BRACE}
_MEMBER_ACCESS = (TokenType.COLON_COLON, TokenType.THIN_ARROW)

_SIMPLE_STATEMENTS = {
    Keyword.IF: StmtType.IF,
    Keyword.ELSEIF: StmtType.ELSEIF,
    Keyword.FOR: StmtType.FOR,
    Keyword.FOREACH: StmtType.FOREACH,
    Keyword.THROW: StmtType.THROW,
    Keyword.CATCH: StmtType.CATCH,
}


class Parser:
    """
    Uso:
        php_class = Parser().parse_file(tokenize(code))

    Una misma instancia puede reutilizarse para muchos archivos; el estado
    (namespace, imports, pila de llaves) se reinicia en cada `parse_file`.
    """

    def __init__(self) -> None:
        self.tokens: deque[Token] = deque()
        self.brackets: list[TokenType] = []
        self.namespace = ""
        self.uses: list[str] = []
        self.aliases: list[Alias] = []

    # === Navegación ===

    def _close_bracket(self, token: Token) -> None:
        if not self.brackets:
            raise ParseError(
                f"Cierre sin apertura {token.lexeme!r} en la línea {token.line}"
            )
        top = self.brackets.pop()
        if _OPENING[top] != token.token_type:
            raise ParseError(
                f"Cierre {token.lexeme!r} no coincide en la línea {token.line}"
            )

    def _next_token_opt(self) -> Optional[Token]:
        if not self.tokens:
            return None
        token = self.tokens.popleft()
        if token.token_type in _OPENING:
            self.brackets.append(token.token_type)
        elif token.token_type in _CLOSING:
            self._close_bracket(token)
        return token

    def _next_token(self) -> Token:
        token = self._next_token_opt()
        if token is None:
            raise ParseError("Se esperaba un token, pero el archivo terminó")
        return token

    def _peek(self) -> Optional[Token]:
        return self.tokens[0] if self.tokens else None

    def _next_matches_types(self, *token_types: TokenType) -> bool:
        token = self._peek()
        return token is not None and token.token_type in token_types

    def _next_matches_keywords(self, *keywords: Keyword) -> bool:
        token = self._peek()
        return token is not None and match_keyword(token) in keywords

    def _synchronize(self) -> None:
        """Descarta tokens hasta el siguiente ';' (incluido)."""
        while self._peek() is not None and not self._next_matches_types(
            TokenType.SEMICOLON
        ):
            self._next_token()
        self._next_token()

    # === Archivo ===

    def parse_file(self, tokens: Iterable[Token]) -> Optional[Class]:
        """Devuelve la primera clase/trait del archivo, o None si no hay ninguna."""
        self.tokens = deque(tokens)
        self.brackets.clear()
        self.namespace = ""
        self.uses.clear()
        self.aliases.clear()

        while (token := self._next_token_opt()) is not None:
            if not token.is_identifier:
                continue
            keyword = match_keyword(token)
            if keyword is None:
                # Foo::class o $this->match() no son palabras clave
                if self._next_matches_types(*_MEMBER_ACCESS):
                    self._next_token()
                    self._next_token()
                continue
            if keyword == Keyword.NAMESPACE:
                self.namespace = self._next_token().lexeme
            elif keyword == Keyword.USE:
                self._use_statement()
            elif keyword == Keyword.ABSTRACT:
                self._next_token()  # class
                return self._class(is_abstract=True)
            elif keyword in (Keyword.CLASS, Keyword.TRAIT):
                return self._class(is_abstract=False)
        return None

    def _use_statement(self) -> None:
        name = self._next_token().lexeme
        if self._next_matches_keywords(Keyword.AS):
            self._next_token()
            aliased = self._next_token().lexeme
            parts = name.split("\\")
            parts[-1] = aliased
            alias_path = "\\".join(parts)
            self.uses.append(alias_path)
            self.aliases.append(Alias(name=name, alias=alias_path))
            return
        self.uses.append(name)

    # === Clase ===

    def _class(self, is_abstract: bool) -> Class:
        php_class = Class(is_abstract=is_abstract)
        php_class.name = f"{self.namespace}\\{self._next_token().lexeme}"

        if self._next_matches_keywords(Keyword.EXTENDS):
            self._next_token()
            php_class.extends = self.find_type(self._next_token())

        if self._next_matches_keywords(Keyword.IMPLEMENTS):
            self._next_token()
            while self._peek() is not None and not self._next_matches_types(
                TokenType.LEFT_BRACE
            ):
                implements = self._next_token()
                if implements.token_type == TokenType.COMMA:
                    continue
                php_class.implements.append(implements.lexeme)

        depth = len(self.brackets)
        self._next_token()  # {
        while depth != len(self.brackets):
            self._statement(php_class)

        for usage in self.uses:
            php_class.add_dependency(usage)
        for alias in self.aliases:
            php_class.dependencies = [
                alias.name if dependency == alias.alias else dependency
                for dependency in php_class.dependencies
            ]
            if php_class.extends == alias.alias:
                php_class.extends = alias.name
        php_class.functions.sort(key=lambda f: f.complexity(), reverse=True)
        return php_class

    def _statement(self, php_class: Class) -> None:
        token = self._next_token()
        keyword = match_keyword(token)
        if keyword is None:
            return
        if keyword == Keyword.ABSTRACT:
            self._statement(php_class)
        elif keyword == Keyword.USE:
            php_class.add_dependency(self.find_type(self._next_token()))
        else:
            self._member(php_class, token, keyword)

    def _member(self, php_class: Class, token: Token, keyword: Keyword) -> None:
        visibility = Visibility.PUBLIC
        if keyword.visibility is not None:
            visibility = keyword.visibility
            token = self._next_token()
            # public abstract function ...
            if match_keyword(token) == Keyword.ABSTRACT:
                token = self._next_token()
            # Propiedad tipada: public Foo $foo; / private ?Foo $foo;
            token = self._skip_nullable(token)
            data_type = self.parse_type(token)
            if data_type is not None:
                php_class.add_dependency(data_type)
                return
            next_keyword = match_keyword(token)
            if next_keyword is None:
                return
            keyword = next_keyword

        if keyword == Keyword.CONST:
            self._synchronize()
        elif keyword == Keyword.READONLY:
            data_type = self.parse_type(self._skip_nullable(self._next_token()))
            if data_type is not None:
                php_class.add_dependency(data_type)
        elif keyword == Keyword.STATIC:
            token = self._skip_nullable(self._next_token())
            if match_keyword(token) == Keyword.FUNCTION:
                php_class.add_function(self._function(visibility, php_class))
                return
            data_type = self.parse_type(token)
            if data_type is not None:
                php_class.add_dependency(data_type)
        elif keyword == Keyword.FUNCTION:
            php_class.add_function(self._function(visibility, php_class))
        else:
            self._synchronize()

    def _skip_nullable(self, token: Token) -> Token:
        """?Foo -> Foo"""
        if token.token_type == TokenType.QUESTION:
            return self._next_token()
        return token

    # === Métodos ===

    def _function(self, visibility: Visibility, php_class: Class) -> Function:
        name = self._next_token().lexeme
        depth = len(self.brackets)
        self._next_token()  # (
        params = 0
        while len(self.brackets) != depth:
            token = self._next_token()
            if token.lexeme.startswith("$"):
                params += 1
                continue
            data_type = self.parse_type(token)
            if data_type is not None:
                php_class.add_dependency(data_type)

        return_type = None
        if self._next_matches_types(TokenType.COLON):
            self._next_token()
            return_token = self._skip_nullable(self._next_token())
            return_type = self.find_type(return_token)
            # Uniones/intersecciones (int|string, A&B): se queda el primer tipo
            while self._peek() is not None and not self._next_matches_types(
                TokenType.LEFT_BRACE, TokenType.SEMICOLON
            ):
                self._next_token()

        depth = len(self.brackets)
        token = self._next_token()
        if token.token_type == TokenType.SEMICOLON:
            return Function(name, [], params, return_type, visibility, is_abstract=True)

        stmts = []
        while depth != len(self.brackets):
            stmt = self._parse_stmt()
            if stmt is not None:
                stmts.append(stmt)
        return Function(name, stmts, params, return_type, visibility, is_abstract=False)

    def parse_type(self, token: Token) -> Optional[str]:
        """Tipo de usuario resuelto, o None si no es un tipo (variable, nativo, keyword)."""
        if not token.is_identifier:
            return None
        if token.lexeme.startswith("$"):
            return None
        if match_data_type(token) or match_keyword(token) is not None:
            return None
        return self.find_type(token)

    def find_type(self, token: Token) -> str:
        """
        Resuelve un nombre de tipo a su nombre completo:
        nativos y \\Calificados tal cual, imports por su último segmento,
        el resto relativo al namespace actual.
        """
        if match_data_type(token):
            return token.lexeme
        if token.lexeme.startswith("\\"):
            return token.lexeme
        for use in self.uses:
            if use.split("\\")[-1] == token.lexeme:
                return use
        return f"{self.namespace}\\{token.lexeme}"

    # === Sentencias ===

    def _skip_member_access(self, token: Token) -> bool:
        """Salta el nombre tras '->' o '::' para que $this->match() no cuente."""
        if token.token_type in _MEMBER_ACCESS:
            if self._peek() is not None and self._peek().is_identifier:
                self._next_token()
            return True
        return False

    def _parse_stmt(self) -> Optional[Stmt]:
        token = self._next_token()
        if not token.is_identifier:
            self._skip_member_access(token)
            return None
        keyword = match_keyword(token)
        if keyword is None:
            return None
        return self._create_statement(keyword, token.line)

    def _create_statement(self, keyword: Keyword, line: int) -> Optional[Stmt]:
        if keyword in _SIMPLE_STATEMENTS:
            return Stmt(_SIMPLE_STATEMENTS[keyword], line)
        if keyword == Keyword.SWITCH:
            return self._switch_stmt(line)
        if keyword == Keyword.MATCH:
            return self._match_stmt(line)
        return None

    def _switch_stmt(self, line: int) -> Stmt:
        """Cuenta las etiquetas `case` y las sentencias anidadas hasta la llave de cierre."""
        case_count = 0
        depth = len(self.brackets)
        stmts = []
        while True:
            token = self._next_token_opt()
            if token is None:
                raise ParseError(f"switch sin cerrar (línea {line})")
            if token.token_type == TokenType.RIGHT_BRACE:
                if len(self.brackets) == depth:
                    break
                continue
            if self._skip_member_access(token):
                continue
            keyword = match_keyword(token)
            if keyword is None:
                continue
            if keyword == Keyword.CASE:
                case_count += 1
                continue
            stmt = self._create_statement(keyword, token.line)
            if stmt is not None:
                stmts.append(stmt)
        return Stmt(StmtType.SWITCH, line, case_count=case_count, stmts=tuple(stmts))

    def _match_stmt(self, line: int) -> Stmt:
        """Cuenta los brazos `=>` (incluido default) hasta la llave de cierre."""
        case_count = 0
        depth = len(self.brackets)
        while True:
            token = self._next_token_opt()
            if token is None:
                raise ParseError(f"match sin cerrar (línea {line})")
            if token.token_type == TokenType.FAT_ARROW:
                case_count += 1
            elif token.token_type == TokenType.RIGHT_BRACE and len(self.brackets) == depth:
                break
        return Stmt(StmtType.MATCH, line, case_count=case_count)
