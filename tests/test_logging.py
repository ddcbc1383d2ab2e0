import logging

from unit_engine.core.units.registry import CategoryRegistry
from unit_engine.infrastructure.logging.engine_logger import (
    EngineLogger,
    get_logger,
    setup_logging,
    shutdown_logging
)


def test_messages_are_buffered_until_flush(tmp_path):
    log_file = tmp_path / 'engine.log'
    engine_logger = EngineLogger(str(log_file), buffer_size=100, flush_interval=3600)

    engine_logger.info("first message", category="test")
    assert "first message" not in log_file.read_text(encoding='utf-8')

    engine_logger.flush()
    contents = log_file.read_text(encoding='utf-8')
    assert "INFO    - [test] first message" in contents

    engine_logger.finalize()
    assert "End of Log" in log_file.read_text(encoding='utf-8')


def test_buffer_size_triggers_flush(tmp_path):
    log_file = tmp_path / 'engine.log'
    engine_logger = EngineLogger(str(log_file), buffer_size=2, flush_interval=3600)

    engine_logger.warning("one")
    engine_logger.error("two")

    contents = log_file.read_text(encoding='utf-8')
    assert "WARNING - one" in contents
    assert "ERROR   - two" in contents

    stats = engine_logger.get_statistics()
    assert stats['messages_logged'] == 2
    assert stats['flush_count'] == 1
    assert stats['errors'] == 1

    engine_logger.finalize()


def test_overwrite_replaces_existing_log(tmp_path):
    log_file = tmp_path / 'engine.log'
    log_file.write_text("stale content\n", encoding='utf-8')

    engine_logger = EngineLogger(str(log_file), overwrite=True)
    engine_logger.finalize()

    assert "stale content" not in log_file.read_text(encoding='utf-8')


def test_standard_logging_is_routed(tmp_path):
    log_file = tmp_path / 'engine.log'
    engine_logger = EngineLogger(str(log_file))

    logging.getLogger('UnitEngine.test').info("routed through handler")
    engine_logger.finalize()

    assert "UnitEngine.test - routed through handler" in log_file.read_text(encoding='utf-8')


def test_global_logger_lifecycle(tmp_path):
    log_file = tmp_path / 'global.log'

    engine_logger = setup_logging(str(log_file), verbose=True)
    try:
        assert get_logger() is engine_logger
        assert setup_logging(str(tmp_path / 'other.log')) is engine_logger

        CategoryRegistry()
        engine_logger.flush()
        assert "Category registry initialized" in log_file.read_text(encoding='utf-8')
    finally:
        shutdown_logging()
        logging.getLogger('UnitEngine').setLevel(logging.INFO)

    assert not (tmp_path / 'other.log').exists()
