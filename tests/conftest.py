import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from backup_runtime.config import CalculatorConfig  # noqa: E402


@pytest.fixture
def default_config():
    return CalculatorConfig()
