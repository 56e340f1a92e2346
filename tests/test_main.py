import logging

import pytest

from space_dystopia import main as main_module


def test_main_exits_with_cli_status(monkeypatch) -> None:
    monkeypatch.setattr(main_module, "cli_main", lambda: 1)
    monkeypatch.setattr(main_module.logging, "basicConfig", lambda **kwargs: None)
    with pytest.raises(SystemExit) as excinfo:
        main_module.main()
    assert excinfo.value.code == 1


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, logging.WARNING), ("debug", logging.DEBUG), ("chatty", logging.WARNING)],
)
def test_log_level_from_environment(monkeypatch, raw, expected) -> None:
    captured = {}
    monkeypatch.setattr(main_module.logging, "basicConfig", lambda **kwargs: captured.update(kwargs))
    if raw is None:
        monkeypatch.delenv(main_module.LOG_LEVEL_ENV_VAR, raising=False)
    else:
        monkeypatch.setenv(main_module.LOG_LEVEL_ENV_VAR, raw)

    main_module.configure_logging()

    assert captured["level"] == expected
