import os

from linkstats.cli import build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.scenario == "baseline"
    assert args.stations == 1
    assert not args.no_plots


def test_main_writes_outputs(tmp_path, capsys):
    code = main(
        [
            "--scenario",
            "congested",
            "--duration",
            "2",
            "--seed",
            "3",
            "--output-dir",
            str(tmp_path),
            "--output-name",
            "cli",
            "--no-plots",
        ]
    )
    assert code == 0
    assert os.path.exists(tmp_path / "results-cli.json")
    assert os.path.exists(tmp_path / "throughput-cli.dat")
    out = capsys.readouterr().out
    assert "Scenario           : congested" in out
    assert "Busy time" in out
