import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    # main() binds a handler to the captured stderr of the test
    logger.remove()
