import json

import pytest

from recipe_ai_core import cli

from .conftest import FakeClient


@pytest.fixture()
def no_db(monkeypatch):
    monkeypatch.setattr(cli, "init_db", lambda: None)


def _missing_api_key():
    raise RuntimeError("OPENAI_API_KEY is not configured in .env")


def test_missing_api_key_is_reported_without_traceback(no_db, monkeypatch, capsys):
    monkeypatch.setattr(cli, "build_default_generator", _missing_api_key)

    code = cli.main(["--cuisine", "italian", "--ingredient", "tomato"])

    assert code == 1
    assert "OPENAI_API_KEY is not configured" in capsys.readouterr().err


def test_validation_message_wins_over_missing_configuration(no_db, monkeypatch, capsys):
    monkeypatch.setattr(cli, "build_default_generator", _missing_api_key)

    code = cli.main(["--ingredient", "tomato"])

    assert code == 2
    assert "At least one cuisine must be selected" in capsys.readouterr().err


def test_generates_and_prints_recipe_json(no_db, monkeypatch, capsys, make_generator):
    client = FakeClient()
    generator = make_generator(client)
    monkeypatch.setattr(cli, "build_default_generator", lambda: generator)

    code = cli.main(["-c", "italian", "-i", "tomato", "-d", "vegan", "--model", "gpt-4o"])

    out, err = capsys.readouterr()
    assert code == 0
    assert "Receta (nueva): Rustic Tomato Pasta" in err
    assert json.loads(out)["name"] == "Rustic Tomato Pasta"
    assert client.calls[0]["model"] == "gpt-4o"
