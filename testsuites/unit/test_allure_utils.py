import json

from storefront_tools.report_tools import AllureReportProcessor


def _write_result(directory, name, **fields):
    (directory / f"{name}-result.json").write_text(json.dumps(fields), encoding="utf-8")


def test_retried_tests_count_once_with_latest_status(tmp_path):
    _write_result(tmp_path, "a1", historyId="checkout", status="failed", start=0, stop=1000)
    _write_result(tmp_path, "a2", historyId="checkout", status="passed", start=2000, stop=5000)
    _write_result(tmp_path, "b1", historyId="guest-panel", status="passed", start=0, stop=500)

    summary = AllureReportProcessor(tmp_path).generate_summary()

    assert summary.total == 2
    assert summary.passed == 2
    assert summary.failed == 0
    assert summary.duration_ms == 3500
    assert summary.pass_rate == 100.0


def test_unreadable_result_files_are_skipped(tmp_path):
    (tmp_path / "bad-result.json").write_text("{not json", encoding="utf-8")
    _write_result(tmp_path, "ok", historyId="x", status="broken", start=0, stop=10)

    summary = AllureReportProcessor(tmp_path).generate_summary()

    assert summary.total == 1
    assert summary.broken == 1


def test_missing_allure_cli_is_not_fatal(tmp_path, monkeypatch):
    def no_cli(*args, **kwargs):
        raise FileNotFoundError("allure")

    monkeypatch.setattr("storefront_tools.report_tools.allure_utils.subprocess.run", no_cli)

    assert AllureReportProcessor(tmp_path, tmp_path / "report").generate_report() is False
