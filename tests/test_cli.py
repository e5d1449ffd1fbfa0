import json
from pathlib import Path

from reviewer import cli

SAMPLES = Path(__file__).resolve().parent.parent / "samples"


def test_cli_memory_leaks_on_leaky_sample(capsys):
    exit_code = cli.main(["memory-leaks", str(SAMPLES / "LeakyService")])

    captured = capsys.readouterr()
    assert exit_code == 2
    assert captured.out.startswith("# Memory Leak Analysis Report ⚠️")
    assert "### Services/EventPublisher.cs" in captured.out
    assert "Found 3 event subscriptions (+=) but only 0 unsubscriptions (-=)." in captured.out
    assert "**[High] Async Void** (Line 22)" in captured.out


def test_cli_quality_writes_json_report(tmp_path, capsys):
    output_path = tmp_path / "quality.json"

    exit_code = cli.main(
        [
            "--format",
            "json",
            "--out",
            str(output_path),
            "quality",
            str(SAMPLES / "LeakyService"),
        ]
    )

    captured = capsys.readouterr()
    assert f"Report written to {output_path}" in captured.out
    assert exit_code == 2
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["passed"] is False
    rules = [(issue["rule"], issue["line"]) for issue in data["issues"]]
    assert ("performance.query-in-loop", 23) in rules
    assert ("architecture.db-in-controller", None) in rules


def test_cli_passes_on_clean_sample(capsys):
    exit_code = cli.main(["quality", str(SAMPLES / "CleanService")])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.out.startswith("## Code Quality Review passed! ✅")


def test_cli_dependencies_flags_leaky_project(capsys):
    exit_code = cli.main(["dependencies", str(SAMPLES / "LeakyService")])

    captured = capsys.readouterr()
    assert exit_code == 2
    assert "# Dependency Analysis for LeakyService.csproj" in captured.out
    assert "Microsoft.AspNetCore.Mvc 2.2.0" in captured.out
    assert "Newtonsoft.Json 9.0.1" in captured.out


def test_cli_microservice_summary(capsys):
    exit_code = cli.main(["microservice", str(SAMPLES / "CleanService")])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "- [x] Health Checks" in captured.out
    assert "- [x] Resilience (Polly)" in captured.out
    assert "✅ Using 'net8.0'." in captured.out


def test_cli_reports_tool_failure_on_stderr(tmp_path, capsys):
    exit_code = cli.main(["dependencies", str(tmp_path)])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "Error executing tool check_dependencies: No .csproj file found" in captured.err
    assert captured.out == ""


def test_cli_rejects_unreadable_config(tmp_path, capsys):
    config_dir = tmp_path / "review.yaml"
    config_dir.mkdir()

    exit_code = cli.main(["--config", str(config_dir), "quality", str(SAMPLES / "CleanService")])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.err.startswith("Invalid configuration: Cannot read")
