import json

import pytest

from studybuddy import cli
from studybuddy.cli import main
from studybuddy.modules.llm.errors import BackendTimeout
from studybuddy.modules.llm.registry import BackendRegistry

from conftest import FakeBackend


def test_decode_flashcards_from_file(tmp_path, capsys):
    raw = tmp_path / "out.txt"
    raw.write_text('```json\n{"cards": [{"question": "Q", "answer": "A",}]}\n```', encoding="utf-8")

    assert main(["decode", "--kind", "flashcards", "--count", "2", "--file", str(raw)]) == 0

    result = json.loads(capsys.readouterr().out)
    assert [c["question"] for c in result["cards"]] == [
        "Q",
        "Additional question 2 about the topic?",
    ]


def test_decode_quiz_failure_exit_code(tmp_path, capsys):
    raw = tmp_path / "out.txt"
    raw.write_text("not a quiz", encoding="utf-8")

    assert main(["decode", "--kind", "quiz", "--file", str(raw)]) == 1
    assert "invalid-json" in capsys.readouterr().err


@pytest.fixture
def failing_registry(monkeypatch):
    backend = FakeBackend(error=BackendTimeout("openai did not respond", provider="openai"))
    registry = BackendRegistry({"openai": backend}, default="openai")
    monkeypatch.setattr(cli.BackendRegistry, "from_settings", staticmethod(lambda cfg: registry))
    return registry


def test_unknown_llm_exit_code(capsys):
    assert main(["quiz", "--prompt", "cells", "--llm", "mistral"]) == 1
    assert "are supported" in capsys.readouterr().err


@pytest.mark.parametrize("cmd", ["quiz", "flashcards"])
def test_backend_failure_exit_code(failing_registry, capsys, cmd):
    assert main([cmd, "--prompt", "cells"]) == 1
    err = capsys.readouterr().err
    assert f"Failed to generate {cmd}" in err
    assert "did not respond" in err
