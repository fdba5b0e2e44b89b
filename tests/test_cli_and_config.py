import pytest
from pydantic import ValidationError

from hailstorm.cli import EXIT_CONFIG, build_parser, main
from hailstorm.config import LoadConfig


@pytest.mark.parametrize(
    "argv, message",
    [
        ([], "missing URL"),
        (["-w", "0", "http://example.com"], "must use at least one worker"),
        (["-r", "0", "http://example.com"], "must perform at least one request"),
    ],
)
def test_invalid_configuration_exits(argv, message, capsys):
    assert main(argv) == EXIT_CONFIG
    captured = capsys.readouterr()
    assert message in captured.err
    assert captured.out == ""


def test_report_printed_for_failed_run(capsys):
    code = main(["-w", "2", "-r", "3", "--no-progress", "--per-worker", "--histogram", "not a url"])
    assert code == 0
    out = capsys.readouterr().out
    assert out.startswith("Requests:")
    assert "Percentiles:" in out
    assert "W01" in out
    assert "No latency data" in out


def test_failed_requests_are_quiet_by_default(capsys):
    assert main(["-w", "2", "-r", "3", "--no-progress", "not a url"]) == 0
    captured = capsys.readouterr()
    assert captured.err == ""
    assert captured.out.startswith("Requests:")


def test_verbose_logs_each_failed_request(capsys):
    assert main(["-v", "-w", "2", "-r", "3", "--no-progress", "not a url"]) == 0
    err = capsys.readouterr().err
    assert err.count("create request for not a url") == 6
    assert "[W1]" in err


def test_parser_defaults():
    args = build_parser().parse_args(["http://example.com"])
    config = LoadConfig.from_args(args)
    assert config.workers == 1
    assert config.requests_per_worker == 1
    assert config.success_status_code == 200
    assert config.percentiles == (0, 25, 50, 75, 100)
    assert config.progress is True


def test_parser_options():
    args = build_parser().parse_args(["-w", "8", "-r", "50", "-s", "204", "-p", "99,50,50", "--no-progress", "http://x"])
    config = LoadConfig.from_args(args)
    assert config.total_requests == 400
    assert config.success_status_code == 204
    assert config.percentiles == (50, 99)
    assert config.progress is False


def test_bad_percentile_list_is_a_usage_error():
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["-p", "fifty", "http://x"])
    assert exc.value.code == 2


@pytest.mark.parametrize(
    "kwargs",
    [
        {"target_url": "   "},
        {"target_url": "http://x", "percentiles": (101,)},
        {"target_url": "http://x", "percentiles": ()},
        {"target_url": "http://x", "success_status_code": 42},
    ],
)
def test_config_validation(kwargs):
    with pytest.raises(ValidationError):
        LoadConfig(**kwargs)
