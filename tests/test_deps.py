import logging

from pushframe.deps import Settings, get_settings, setup_logging


def test_settings_defaults(monkeypatch):
    for name in ("PUSH_LOG_LEVEL", "PUSH_RATE_LIMIT", "PUSH_DEFAULT_SOUND"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.PUSH_LOG_LEVEL == "INFO"
    assert settings.PUSH_RATE_LIMIT == "120/minute"
    assert settings.PUSH_DEFAULT_SOUND is None


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("PUSH_LOG_LEVEL", "debug")
    monkeypatch.setenv("PUSH_RATE_LIMIT", "5/second")
    settings = get_settings()
    assert settings.PUSH_LOG_LEVEL == "debug"
    assert settings.PUSH_RATE_LIMIT == "5/second"


def test_setup_logging_attaches_one_handler():
    logger = logging.getLogger("pushframe")
    level = logger.level
    try:
        setup_logging(Settings(PUSH_LOG_LEVEL="DEBUG"))
        handlers = list(logger.handlers)
        assert handlers
        assert logger.level == logging.DEBUG

        setup_logging(Settings(PUSH_LOG_LEVEL="warning"))
        assert logger.handlers == handlers
        assert logger.level == logging.WARNING
    finally:
        logger.setLevel(level)


def test_setup_logging_unknown_level_falls_back_to_info():
    logger = logging.getLogger("pushframe")
    level = logger.level
    try:
        assert setup_logging(Settings(PUSH_LOG_LEVEL="chatty")) is logger
        assert logger.level == logging.INFO
    finally:
        logger.setLevel(level)
