import logging

from pythonjsonlogger import jsonlogger

from veritas_guard.core.logger_config import setup_logging


def test_setup_logging_falls_back_to_json(tmp_path, monkeypatch, mocker):
    monkeypatch.delenv("VERITAS_LOG_CFG", raising=False)
    mock_basic = mocker.patch("logging.basicConfig")

    setup_logging(default_path=str(tmp_path / "missing.yaml"))

    kwargs = mock_basic.call_args.kwargs
    assert kwargs["level"] == logging.INFO
    assert isinstance(kwargs["handlers"][0].formatter, jsonlogger.JsonFormatter)


def test_setup_logging_uses_yaml_file(tmp_path, monkeypatch, mocker):
    path = tmp_path / "logging.yaml"
    path.write_text(
        "version: 1\n"
        "root:\n"
        "  level: WARNING\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("VERITAS_LOG_CFG", str(path))
    mock_dict_config = mocker.patch("logging.config.dictConfig")

    setup_logging()

    mock_dict_config.assert_called_once_with({"version": 1, "root": {"level": "WARNING"}})
