# tests/modules/interface/presentation/test_console_io.py
import pytest

from tcpl_scanner.modules.interface.presentation.console_io import InputError


def test_get_int_input_parses_number(scripted):
    console = scripted([" 7 "])

    assert console.io.get_int_input("Elige una opción") == 7
    assert "Elige una opción" in console.output


@pytest.mark.parametrize("answer,message", [("abc", "como número"), ("-3", "negativo")])
def test_get_int_input_rejects_invalid(scripted, answer, message):
    console = scripted([answer])

    with pytest.raises(InputError, match=message):
        console.io.get_int_input("Número")


def test_get_string_input_rejects_empty(scripted):
    console = scripted(["   "])

    with pytest.raises(InputError):
        console.io.get_string_input("Texto")


def test_closed_input_propagates_eof(scripted):
    console = scripted([])

    with pytest.raises(EOFError):
        console.io.get_string_input("Texto")


def test_unreadable_input_is_end_of_input(scripted):
    console = scripted()

    def broken_reader():
        raise OSError("tty perdida")

    console.io._reader = broken_reader

    with pytest.raises(EOFError, match="No se pudo leer"):
        console.io.get_int_input("Número")


def test_messages_are_not_parsed_as_markup(scripted):
    """Nombres como Foo[Bar] no deben interpretarse como estilos de rich."""
    console = scripted()

    console.io.print("Dependencias[0]: [bold]")
    console.io.display_error("ruta [red] rara")
    console.io.display_title("Opciones")
    console.io.display_list(["App\\Foo", "App\\Bar"])

    output = console.output
    assert "Dependencias[0]: [bold]" in output
    assert "Error: ruta [red] rara" in output
    assert "* --- Opciones --- *" in output
    assert "  1. App\\Foo" in output
    assert "  2. App\\Bar" in output
