import json

import visionboard.__main__ as cli
from visionboard import SettleResult, connect, example_board, load_board, save_board


def test_main_steps_board_and_writes_outputs(tmp_path, capsys):
    board_path = save_board(connect(example_board(), "1", "2"), tmp_path / "board.json")
    saved_path = tmp_path / "out" / "stepped.json"
    tikz_path = tmp_path / "out" / "board.tex"

    cli.main(
        [
            str(board_path),
            "--steps",
            "5",
            "--save",
            str(saved_path),
            "--tikz-output-path",
            str(tikz_path),
        ]
    )

    out = capsys.readouterr().out
    assert "Ran 5 step(s)" in out
    assert "1 -> 2: M " in out
    assert len(load_board(saved_path)) == 8
    assert tikz_path.read_text(encoding="utf-8").startswith("\\documentclass")


def test_main_settle_uses_example_board(monkeypatch, capsys):
    calls = []

    def _settle(cards, width, height, config, **kwargs):
        calls.append((len(cards), width, height, config.sway_phase, kwargs["max_steps"]))
        return SettleResult(cards=list(cards), steps=1, settled=False, energy=0.0)

    monkeypatch.setattr(cli, "settle", _settle)

    cli.main(["--settle", "--steps", "50", "--sway-phase", "identity", "--width", "900"])

    assert calls == [(8, 900.0, 680.0, "identity", 50)]
    assert "Settled: False after 1 step(s)" in capsys.readouterr().out


def test_main_falls_back_to_example_board_for_malformed_file(tmp_path, capsys):
    board_path = tmp_path / "board.json"
    board_path.write_text(json.dumps({"not": "a list"}), encoding="utf-8")

    cli.main([str(board_path), "--steps", "1"])

    out = capsys.readouterr().out
    assert "Ran 1 step(s)" in out
    for card in example_board():
        assert f"  {card.id} [{card.kind}] {card.label}:" in out
