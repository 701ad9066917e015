# tests/modules/indexing/domain/test_parser.py
"""
Tests para: Parser
Tipo: Unitario (Domain)
"""
import pytest

from tcpl_scanner.modules.indexing.domain.exceptions import ParseError
from tcpl_scanner.modules.indexing.domain.parser import Parser
from tcpl_scanner.modules.indexing.domain.tokenizer import tokenize
from tcpl_scanner.modules.indexing.domain.value_objects import StmtType, Visibility


def _parse(code: str):
    return Parser().parse_file(tokenize(code))


def _function(php_class, name):
    return next(f for f in php_class.functions if f.name == name)


class TestBarFixture:
    """Clase de ejemplo con errores de sintaxis que el parser debe tolerar."""

    @pytest.fixture
    def bar(self, bar_fixture_code):
        return _parse(bar_fixture_code)

    def test_class_identity(self, bar):
        assert bar.name == "Foo\\Baz\\Bar"
        assert bar.extends is None
        assert bar.implements == []
        assert bar.is_abstract is False
        assert bar.dependencies == []

    def test_functions_sorted_by_complexity(self, bar):
        assert [(f.name, f.complexity()) for f in bar.functions] == [
            ("switcheroo", 14),
            ("zab", 6),
            ("baz", 4),
            ("__construct", 1),
            ("noReturn", 1),
        ]

    def test_function_signatures(self, bar):
        switcheroo = _function(bar, "switcheroo")
        zab = _function(bar, "zab")
        construct = _function(bar, "__construct")
        no_return = _function(bar, "noReturn")

        assert (switcheroo.visibility, switcheroo.params, switcheroo.return_type) == (
            Visibility.PRIVATE,
            1,
            "void",
        )
        assert (zab.visibility, zab.params, zab.return_type) == (
            Visibility.PRIVATE,
            2,
            "string",
        )
        assert construct.params == 2
        assert construct.display_return_type == "self"
        assert no_return.return_type is None
        assert no_return.visibility == Visibility.PUBLIC

    def test_metrics(self, bar):
        assert bar.average_complexity() == 6.25
        assert bar.highest_complexity_function() == 14

    def test_zab_statements(self, bar):
        kinds = [s.kind for s in _function(bar, "zab").stmts]

        assert kinds == [
            StmtType.THROW,
            StmtType.THROW,
            StmtType.CATCH,
            StmtType.FOR,
            StmtType.FOREACH,
        ]

    def test_nested_switch_and_match(self, bar):
        match_stmt, switch_stmt = _function(bar, "switcheroo").stmts

        assert match_stmt.kind == StmtType.MATCH
        assert match_stmt.case_count == 4
        assert switch_stmt.kind == StmtType.SWITCH
        assert switch_stmt.case_count == 3
        assert [s.kind for s in switch_stmt.stmts] == [
            StmtType.FOR,
            StmtType.FOREACH,
            StmtType.SWITCH,
        ]
        nested = switch_stmt.stmts[2]
        assert nested.case_count == 2
        assert nested.complexity() == 4


def test_file_without_class_returns_none():
    assert _parse("<?php\nfunction helper() { return 1; }\n") is None


def test_extends_implements_and_abstract():
    """
    Given: Una clase abstracta que extiende una clase importada e implementa interfaces
    When: Se parsea
    Then: extends se resuelve por el use, implements se guarda tal cual
    """
    # Arrange
    code = """<?php
namespace App\\Service;

use App\\Base\\Model;

abstract class Repo extends Model implements Countable, \\JsonSerializable
{
    abstract protected function load(int $id): ?Model;
}
"""

    # Act
    php_class = _parse(code)

    # Assert
    assert php_class.name == "App\\Service\\Repo"
    assert php_class.is_abstract is True
    assert php_class.extends == "App\\Base\\Model"
    assert php_class.implements == ["Countable", "\\JsonSerializable"]
    load = php_class.functions[0]
    assert load.is_abstract is True
    assert load.visibility == Visibility.PROTECTED
    assert load.return_type == "App\\Base\\Model"
    assert "App\\Base\\Model" in php_class.dependencies


def test_dependencies_from_properties_params_and_traits():
    code = """<?php
namespace App;

use Psr\\Log\\LoggerInterface;
use Vendor\\Clock as SystemClock;

class Service
{
    use Helpers;
    private LoggerInterface $logger;
    public const LIMIT = 10;

    public function __construct(Mailer $mailer, SystemClock $clock, string $name) {}
}
"""

    php_class = _parse(code)

    assert php_class.dependencies == [
        "App\\Helpers",
        "Psr\\Log\\LoggerInterface",
        "App\\Mailer",
        "Vendor\\Clock",
    ]
    assert php_class.functions[0].params == 3


def test_abstract_after_visibility():
    """
    Given: Un método declarado `public abstract function`
    When: Se parsea la clase
    Then: El método se registra como abstracto y su tipo de retorno es dependencia
    """
    # Arrange
    code = """<?php
namespace App;

abstract class A
{
    public abstract function load(): Model;
    public function f() { if ($a) {} }
}
"""

    # Act
    php_class = _parse(code)

    # Assert
    assert [f.name for f in php_class.functions] == ["f", "load"]
    load = _function(php_class, "load")
    assert load.is_abstract is True
    assert load.visibility == Visibility.PUBLIC
    assert php_class.dependencies == ["App\\Model"]


def test_nullable_typed_property_is_a_dependency():
    code = "<?php\nnamespace App;\nclass A {\n  private ?Logger $logger;\n}\n"

    assert _parse(code).dependencies == ["App\\Logger"]


def test_readonly_properties_are_dependencies():
    code = """<?php
namespace App;

class A
{
    readonly Clock $clock;
    public readonly ?Logger $logger;
}
"""

    assert _parse(code).dependencies == ["App\\Clock", "App\\Logger"]


def test_trait_is_parsed_as_class():
    code = """<?php
namespace App\\Concerns;

trait Greets
{
    public function hi(): string { if ($a) {} return ''; }
}
"""

    php_class = _parse(code)

    assert php_class.name == "App\\Concerns\\Greets"
    assert [(f.name, f.complexity()) for f in php_class.functions] == [("hi", 2)]


def test_aliased_import_maps_back_to_real_name():
    """`use Lib\\Base\\Model as BaseModel`: extends y dependencias usan el nombre real."""
    code = """<?php
namespace App;

use Lib\\Base\\Model as BaseModel;

class User extends BaseModel
{
    public function copy(): BaseModel {}
}
"""

    php_class = _parse(code)

    assert php_class.extends == "Lib\\Base\\Model"
    assert php_class.dependencies == ["Lib\\Base\\Model"]


def test_unterminated_switch_raises():
    code = "<?php\nclass A {\n  function f() {\n    switch ($a) {\n      case 1:\n"

    with pytest.raises(ParseError, match="switch sin cerrar"):
        _parse(code)


def test_unterminated_match_raises():
    code = "<?php\nclass A {\n  function f() {\n    $b = match ($a) {\n      1 => 2,\n"

    with pytest.raises(ParseError, match="match sin cerrar"):
        _parse(code)


def test_static_function_keeps_visibility():
    code = "<?php\nclass A {\n  private static function make(): self { if ($x) {} }\n}\n"

    make = _parse(code).functions[0]

    assert make.name == "make"
    assert make.visibility == Visibility.PRIVATE
    assert make.return_type == "self"
    assert make.complexity() == 2


def test_union_return_type_keeps_first_type():
    code = "<?php\nclass A {\n  public function f(): int|string { return 1; }\n}\n"

    f = _parse(code).functions[0]

    assert f.return_type == "int"
    assert f.is_abstract is False


def test_member_access_is_not_a_keyword():
    """$this->match() y Foo::class no deben contar como sentencias ni clases."""
    code = """<?php
$x = Foo::class;
class A {
    public function f() {
        $this->match($a);
        self::if();
        if ($a) {}
    }
}
"""

    php_class = _parse(code)

    assert php_class.name == "\\A"
    assert [s.kind for s in php_class.functions[0].stmts] == [StmtType.IF]


def test_while_is_not_counted():
    code = "<?php\nclass A {\n  function f() { while ($a) { if ($b) {} } }\n}\n"

    assert _parse(code).functions[0].complexity() == 2


def test_parser_resets_namespace_between_files():
    parser = Parser()
    parser.parse_file(tokenize("<?php\nnamespace First;\nclass A {}\n"))

    second = parser.parse_file(tokenize("<?php\nclass B {}\n"))

    assert second.name == "\\B"


def test_unbalanced_brackets_raise():
    with pytest.raises(ParseError):
        _parse("<?php\nclass A { function f() { ) }\n")


def test_truncated_file_raises():
    with pytest.raises(ParseError):
        _parse("<?php\nclass A {\n  function f() {\n")


def test_find_type_resolution():
    parser = Parser()
    parser.parse_file(tokenize("<?php\nnamespace App;\nuse Lib\\Thing;\n"))
    [thing, local, absolute, native] = tokenize("Thing Local \\Abs string")

    assert parser.find_type(thing) == "Lib\\Thing"
    assert parser.find_type(local) == "App\\Local"
    assert parser.find_type(absolute) == "\\Abs"
    assert parser.find_type(native) == "string"
