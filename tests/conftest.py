import pytest

from logger import setup_logger


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send log files to a per-test directory instead of the home folder."""
    logger = setup_logger(log_dir=tmp_path / "logs")
    yield logger
    for handler in logger.logger.handlers:
        handler.close()
