# tests/modules/indexing/domain/test_tokenizer.py
"""
Tests para: Tokenizer
Tipo: Unitario (Domain)
"""
import pytest

from tcpl_scanner.modules.indexing.domain.exceptions import TokenizeError
from tcpl_scanner.modules.indexing.domain.tokenizer import token_profile, tokenize
from tcpl_scanner.modules.indexing.domain.tokens import Token, TokenType


def _types(code: str) -> list[TokenType]:
    return [t.token_type for t in tokenize(code)]


def test_strings_keep_content_and_line():
    """
    Given: Cadenas con comillas simples y dobles en líneas distintas
    When: Se tokeniza
    Then: El lexema no incluye las comillas y cada token lleva su línea
    """
    # Arrange
    code = "'string';\n\"String with a 'string' inside\";\n"

    # Act
    tokens = tokenize(code)

    # Assert
    assert tokens == [
        Token(TokenType.STRING, 1, "string"),
        Token(TokenType.SEMICOLON, 1, ";"),
        Token(TokenType.STRING, 2, "String with a 'string' inside"),
        Token(TokenType.SEMICOLON, 2, ";"),
    ]


def test_escaped_quote_does_not_close_string():
    tokens = tokenize(r'"say \"hi\"" ;')

    assert tokens[0].lexeme == r"say \"hi\""
    assert tokens[1].token_type == TokenType.SEMICOLON


def test_unterminated_string_raises():
    with pytest.raises(TokenizeError) as exc_info:
        tokenize("'never closed")

    assert "sin cerrar" in str(exc_info.value)


def test_compound_operators():
    code = "-> :: != !== == === => >= <= || && | & ! = > < ~"

    assert _types(code) == [
        TokenType.THIN_ARROW,
        TokenType.COLON_COLON,
        TokenType.BANG_EQUAL,
        TokenType.BANG_EQUAL_EQUAL,
        TokenType.EQUAL_EQUAL,
        TokenType.EQUAL_EQUAL_EQUAL,
        TokenType.FAT_ARROW,
        TokenType.GREATER_EQUAL,
        TokenType.LESS_EQUAL,
        TokenType.OR_OPERATOR,
        TokenType.AND_OPERATOR,
        TokenType.PIPE,
        TokenType.REFERENCE,
        TokenType.BANG,
        TokenType.EQUAL,
        TokenType.GREATER,
        TokenType.LESS,
        TokenType.BINARY_NEGATION,
    ]


def test_php_tag_and_identifiers():
    tokens = tokenize("<?php\n$foo = \\Foo\\Bar::baz_1;")

    assert tokens[0] == Token(TokenType.PHP_TAG, 1, "<?php")
    assert [t.lexeme for t in tokens[1:]] == ["$foo", "=", "\\Foo\\Bar", "::", "baz_1", ";"]
    assert tokens[1].line == 2


def test_numbers_keep_first_digit():
    tokens = tokenize("123 4.56")

    assert [(t.token_type, t.lexeme) for t in tokens] == [
        (TokenType.NUMBER, "123"),
        (TokenType.NUMBER, "4.56"),
    ]


def test_comments_are_skipped_and_lines_counted():
    code = "/* block\n comment */ a // line comment\n# b"

    tokens = tokenize(code)

    assert tokens == [
        Token(TokenType.IDENTIFIER, 2, "a"),
        Token(TokenType.HASH, 3, "#"),
        Token(TokenType.IDENTIFIER, 3, "b"),
    ]


def test_line_comment_at_end_of_file():
    assert _types("a // sin salto final") == [TokenType.IDENTIFIER]


def test_unterminated_block_comment_raises():
    with pytest.raises(TokenizeError):
        tokenize("/* nunca termina")


def test_heredoc_and_nowdoc():
    """
    Given: Un heredoc y un nowdoc con el mismo título
    When: Se tokeniza
    Then: Cada uno es un único token HEREDOC con el cuerpo hasta el título
    """
    code = "$a = <<<FOO\n  la la la\nFOO;\n$b = <<<'BAR'\n  {$x}\nBAR;"

    tokens = tokenize(code)
    heredocs = [t for t in tokens if t.token_type == TokenType.HEREDOC]

    assert [t.lexeme for t in heredocs] == ["  la la la\n", "  {$x}\n"]
    assert tokens[-1].token_type == TokenType.SEMICOLON


def test_unterminated_heredoc_raises():
    with pytest.raises(TokenizeError):
        tokenize("<<<EOT\nno termina nunca")


def test_shift_operator_is_a_single_less():
    assert _types("$a << 2") == [TokenType.IDENTIFIER, TokenType.LESS, TokenType.NUMBER]


def test_unexpected_character_reports_line():
    with pytest.raises(TokenizeError) as exc_info:
        tokenize("a\nb ^ c")

    assert exc_info.value.line == 2


def test_token_profile_counts_by_type():
    profile = token_profile(tokenize("a(b, c);"))

    assert profile[TokenType.IDENTIFIER] == 3
    assert profile[TokenType.COMMA] == 1
    assert sum(profile.values()) == 7


def test_bar_fixture_tokenizes_despite_syntax_errors(bar_fixture_code):
    """La clase de ejemplo tiene errores deliberados (falta `new`, falta `;`)."""
    tokens = tokenize(bar_fixture_code)

    assert tokens[0].token_type == TokenType.PHP_TAG
    assert tokens[-1] == Token(TokenType.RIGHT_BRACE, 96, "}")
    assert sum(1 for t in tokens if t.token_type == TokenType.HEREDOC) == 2
