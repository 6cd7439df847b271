import json

import pytest
from click.testing import CliRunner

from qquotes.cli import app

TWAIN = "Lies, damned lies, and statistics."


@pytest.fixture
def env(tmp_path):
    config = tmp_path / "config.toml"
    data = tmp_path / "data" / "quotes.json"
    log = tmp_path / "qquotes.log"
    config.write_text(f"path_log_file = '{log}'\npath_data_file = '{data}'\n", encoding="utf-8")
    runner = CliRunner()

    def run(*args, input=None):
        return runner.invoke(app, ["--config", str(config), *args], input=input)

    run.data = data
    run.log = log
    return run


def stored(env):
    return json.loads(env.data.read_text(encoding="utf-8"))


def test_add_then_list(env):
    result = env("add", input=f"Twain\n{TWAIN}\n")
    assert result.exit_code == 0, result.output
    assert "author ⏵" in result.output and "quote  ⏵" in result.output
    assert "Saved. Total quotes: 1" in result.output
    assert list(stored(env).values()) == [{"author": "Twain", "quote": TWAIN}]

    result = env("list")
    assert result.exit_code == 0, result.output
    lines = [line for line in result.output.splitlines() if line.strip()]
    assert lines[0].startswith("Author | Quote")
    assert set(lines[1].strip()) == {"-", "+"}
    assert len(lines) == 3
    assert lines[2].startswith(f"Twain  | {TWAIN}")


def test_list_long_format_shows_id(env):
    env("add", input=f"Twain\n{TWAIN}\n")
    (quote_id,) = stored(env)
    result = env("list", "--long-format")
    assert result.exit_code == 0, result.output
    lines = [line for line in result.output.splitlines() if line.strip()]
    assert lines[0].split() == ["QUOTE_ID", "|", "Author", "|", "Quote"]
    assert lines[2].startswith(f"{quote_id} | Twain  | ")
    assert env("list", "-l").output == result.output


def test_list_empty(env):
    result = env("list")
    assert result.exit_code == 0
    assert "There is no quote saved." in result.output


def test_delete(env):
    env("add", input="A\nfirst\n")
    env("add", input="B\nsecond\n")
    first_id = next(i for i, r in stored(env).items() if r["author"] == "A")
    result = env("delete", first_id)
    assert result.exit_code == 0, result.output
    assert f"Deleted {first_id}. Total quotes: 1" in result.output
    assert list(stored(env).values()) == [{"author": "B", "quote": "second"}]


def test_delete_unknown_id(env):
    env("add", input="A\nfirst\n")
    result = env("delete", "nope")
    assert result.exit_code == 1
    assert "No quote found with id nope" in result.output
    assert len(stored(env)) == 1


def test_delete_requires_id(env):
    result = env("delete")
    assert result.exit_code != 0


def test_add_at_end_of_input(env):
    result = env("add", input="only an author\n")
    assert result.exit_code == 1
    assert not env.data.exists()


def test_broken_data_file(env):
    env.data.parent.mkdir(parents=True)
    env.data.write_text("{oops", encoding="utf-8")
    result = env("list")
    assert result.exit_code == 1
    assert "Could not read quotes" in result.output


def test_no_subcommand(env):
    result = env()
    assert result.exit_code == 0
    assert "No default action" in result.output


def test_version():
    result = CliRunner().invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_log_file_records_changes(env):
    env("add", input=f"Twain\n{TWAIN}\n")
    (quote_id,) = stored(env)
    env("delete", quote_id)
    text = env.log.read_text(encoding="utf-8")
    assert "repository_saved_quote" in text
    assert f"repository_delete_quote id: {quote_id}" in text
    assert "app_setup" not in text


def test_verbose_shows_trace_on_terminal(env):
    assert "app_setup" not in env("list").output
    result = env("-vv", "list")
    assert result.exit_code == 0
    assert "app_setup" in result.output
    assert "repository_get_quotes" in result.output


def test_invalid_config_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    config = tmp_path / "config.toml"
    config.write_text("this is = = not toml", encoding="utf-8")
    result = CliRunner().invoke(app, ["-v", "--config", str(config), "list"])
    assert result.exit_code == 0, result.output
    assert "There is no quote saved." in result.output
    assert "config_file_invalid" in result.output
    assert (tmp_path / "qquotes.log").exists()


def test_exit_app_only_after_success(env):
    ok = env("-vv", "list")
    assert "exit_app" in ok.output
    failed = env("-vv", "delete", "nope")
    assert failed.exit_code == 1
    assert "exit_app" not in failed.output


def test_undecodable_config_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    config = tmp_path / "config.toml"
    config.write_bytes(b'path_data_file = "\xff"\n')
    result = CliRunner().invoke(app, ["--config", str(config), "list"])
    assert result.exit_code == 0, result.output
    assert "There is no quote saved." in result.output


def test_undecodable_data_file(env):
    env.data.parent.mkdir(parents=True)
    env.data.write_bytes(b'{"x": {"author": "\xff", "quote": "q"}}')
    result = env("list")
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Could not read quotes" in result.output
