# tests/e2e/conftest.py
import pytest

CLASS_TEMPLATE = """<?php
namespace Generated\\Layer{layer};

{uses}

class Service{index}
{{
{properties}

    public function handle(int $input): int
    {{
{branches}
        return $input;
    }}

    private function route(string $kind): string
    {{
        return match ($kind) {{
            'a' => 'A',
            'b' => 'B',
            default => 'Z',
        }};
    }}
}}
"""


@pytest.fixture
def generated_project_factory(tmp_path):
    """
    Factory para crear un proyecto PHP sintético de `n_classes` clases.
    La clase i depende de todas las clases de la capa anterior, así el
    índice de uso es predecible: cada clase de la capa L es usada por
    todas las de la capa L+1.
    """

    def _create(n_layers: int, per_layer: int):
        root = tmp_path / "generated"
        for layer in range(n_layers):
            layer_dir = root / f"Layer{layer}"
            layer_dir.mkdir(parents=True)
            for i in range(per_layer):
                previous = (
                    [f"Generated\\Layer{layer - 1}\\Service{j}" for j in range(per_layer)]
                    if layer > 0
                    else []
                )
                uses = "\n".join(f"use {name};" for name in previous)
                properties = "\n".join(
                    f"    private Service{j} $dep{j};" for j in range(len(previous))
                )
                branches = "\n".join(
                    f"        if ($input > {k}) {{ $input--; }}" for k in range(i + 1)
                )
                code = CLASS_TEMPLATE.format(
                    layer=layer,
                    index=i,
                    uses=uses,
                    properties=properties,
                    branches=branches,
                )
                (layer_dir / f"Service{i}.php").write_text(code, encoding="utf-8")
        return root

    return _create
