from pathlib import Path

from compliance_tracker.cli import main


def test_reminders_command(capsys):
    assert main(["--today", "2024-03-15", "--seed", "3", "reminders"]) == 0

    out = capsys.readouterr().out
    assert "Reminders for 2024-03-15" in out


def test_summary_command(capsys):
    assert main(["--seed", "3", "summary"]) == 0

    out = capsys.readouterr().out
    assert "Executive Summary" in out
    assert "Completion rate:" in out
    assert "Total revenue:" in out


def test_export_csv_command(tmp_path: Path, capsys):
    target = tmp_path / "report.csv"

    assert main(["--seed", "1", "export", "--format", "CSV", "--output", str(target)]) == 0

    content = target.read_text(encoding="utf-8")
    assert content.startswith("id,name,")
    assert content.count("comp-") == 15
    assert "Monthly_Compliance_Review_Data.csv" in capsys.readouterr().out


def test_checklist_override_is_used(tmp_path: Path, capsys):
    override = tmp_path / "override.json"
    override.write_text('[{"name": "Professional Tax", "frequency": "Monthly", "criticality": "Low", "due_date": "16"}]')
    target = tmp_path / "report.csv"

    main(["--checklist", str(override), "--seed", "1", "export", "--format", "CSV", "--output", str(target)])

    assert "Professional Tax" in target.read_text(encoding="utf-8")
