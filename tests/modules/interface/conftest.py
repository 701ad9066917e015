# tests/modules/interface/conftest.py
import io

import pytest
from rich.console import Console

from tcpl_scanner.modules.indexing.application.use_cases import IndexCodebase
from tcpl_scanner.modules.indexing.infrastructure.adapters import LocalSourceReader
from tcpl_scanner.modules.interface.presentation.console_io import ConsoleIO


class ScriptedConsole:
    """ConsoleIO sobre un buffer, con respuestas del usuario predefinidas."""

    def __init__(self, answers=()):
        self.buffer = io.StringIO()
        self.answers = list(answers)
        self.io = ConsoleIO(
            Console(file=self.buffer, width=200, color_system=None),
            reader=self._next_answer,
        )

    def _next_answer(self) -> str:
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    @property
    def output(self) -> str:
        return self.buffer.getvalue()


@pytest.fixture
def scripted():
    return ScriptedConsole


@pytest.fixture
def scanned_project(php_project):
    root = php_project(
        {
            "App/Service.php": """<?php
namespace App;

use App\\Model\\User;

class Service implements \\Countable
{
    public function handle(User $user): User
    {
        if ($user) {
            foreach ($user->roles as $role) {}
        }
        return $user;
    }

    protected function count(): int { return 0; }
}
""",
            "App/Model/User.php": """<?php
namespace App\\Model;

class User
{
    public function __construct(private string $name) {}
}
""",
        }
    )
    return IndexCodebase(LocalSourceReader()).execute(str(root))
