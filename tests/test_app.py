import json

import pytest

import app
from tools.example_programs import SQUARE


@pytest.fixture
def config_path(tmp_path):
    config = {
        "step_delay_ms": 0,
        "output_directory": str(tmp_path / "logs"),
        "log_file_prefix": "utm_",
        "log_runs": True,
    }
    path = tmp_path / "runtime_config.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return str(path)


def run_log(tmp_path):
    files = list((tmp_path / "logs").glob("utm_*.jsonl"))
    assert len(files) == 1
    with open(files[0], "r", encoding="utf-8") as f:
        return [json.loads(line) for line in f]


class TestCli:

    def test_run_example(self, config_path, tmp_path, capsys):
        assert app.main(["--example", "scan", "--input", "111", "--run", "--config", config_path]) == 0
        out = capsys.readouterr().out
        assert "HALT  ->  ACCEPTED" in out
        assert "Steps  : 4" in out
        entries = run_log(tmp_path)
        assert entries[-1]["event"] == "run"
        assert entries[-1]["accepted"] is True

    def test_step_mode(self, config_path, capsys):
        assert app.main(["--program", "0100100100100", "--input", "1", "--step", "--config", config_path]) == 0
        out = capsys.readouterr().out
        assert "Step 0 | q1" in out
        assert "Step 1 | q2" in out

    def test_decimal_input(self, config_path, tmp_path, capsys):
        app.main(["--example", "binary-increment", "--input", "5", "--config", config_path])
        entries = run_log(tmp_path)
        assert entries[-1]["input"] == "101"
        assert entries[-1]["tape"] == "110"

    def test_program_file(self, config_path, tmp_path, capsys):
        path = tmp_path / "square.txt"
        path.write_text(SQUARE.bits + "\n", encoding="utf-8")
        assert app.main(["--program", str(path), "--input", "11", "--config", config_path]) == 0
        assert run_log(tmp_path)[-1]["tape"] == "AA01111"

    def test_invalid_encoding(self, config_path, capsys):
        assert app.main(["--program", "0100100100", "--config", config_path]) == 1
        assert "Invalid encoding" in capsys.readouterr().out

    def test_max_steps(self, config_path, tmp_path, capsys):
        runaway = "0100010100010"  # (1, '_') -> (1, '_', L)
        assert app.main(["--program", runaway, "--max-steps", "25", "--config", config_path]) == 0
        out = capsys.readouterr().out
        assert "without halting" in out
        assert "Steps  : 25" in out
        assert "STOPPED  ->  NO HALT" in out
        assert "HALT  ->" not in out.replace("STOPPED  ->", "")
        entries = run_log(tmp_path)
        assert entries[-2]["event"] == "final"
        assert entries[-2]["stopped"] is True
        assert entries[-1]["result"] == "NO HALT"
        assert entries[-1]["halted"] is False
        assert entries[-1]["accepted"] is False

    def test_cap_in_accepting_state_has_no_result(self, config_path, tmp_path, capsys):
        # (1, '_') -> (2, '_', R), then (2, '_') -> (2, '_', R) forever
        program = "0100010010001001110010001001000100"
        assert app.main(["--program", program, "--max-steps", "5", "--config", config_path]) == 0
        assert "ACCEPTED" not in capsys.readouterr().out
        assert run_log(tmp_path)[-1]["result"] == "NO HALT"

    def test_inspect(self, config_path, capsys):
        assert app.main(["--example", "square", "--inspect", "--latex", "--config", config_path]) == 0
        out = capsys.readouterr().out
        assert "Transition Table" in out
        assert r"\begin{array}" in out

    def test_encode(self, config_path, tmp_path, capsys):
        rules = tmp_path / "accept.rules"
        rules.write_text("q1 1 -> q2 1 R\n", encoding="utf-8")
        assert app.main(["--encode", str(rules), "--config", config_path]) == 0
        assert "0100100100100" in capsys.readouterr().out

    def test_batch(self, config_path, capsys):
        assert app.main(["--example", "square", "--batch", "1", "11", "111", "--config", config_path]) == 0
        out = capsys.readouterr().out
        assert "ACCEPTED" in out
        assert "AAA0111111111" in out

    def test_list_examples(self, config_path, capsys):
        assert app.main(["--list-examples", "--config", config_path]) == 0
        out = capsys.readouterr().out
        assert "square" in out
        assert "tquad-marker" in out

    def test_unknown_example(self, config_path, capsys):
        assert app.main(["--example", "nope", "--config", config_path]) == 1

    def test_missing_config(self, tmp_path):
        with pytest.raises(SystemExit):
            app.main(["--example", "scan", "--config", str(tmp_path / "absent.json")])


class TestInteractive:

    def test_example_coerces_decimal_input(self, config_path, tmp_path, monkeypatch):
        config = app.load_runtime_config(config_path)
        index = list(app.EXAMPLES).index("binary-increment")
        monkeypatch.setattr(app.IntPrompt, "ask", lambda *args, **kwargs: index)
        monkeypatch.setattr(app.Prompt, "ask", lambda *args, **kwargs: "5")
        monkeypatch.setattr(app.Confirm, "ask", lambda *args, **kwargs: False)
        app.handle_example(config)
        entries = run_log(tmp_path)
        assert entries[-1]["input"] == "101"
        assert entries[-1]["tape"] == "110"
