import os
import sys

import pytest

# Ensure the package and the shared vectors are importable without installation
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from ocn_notary.logging_config import correlation_id_var


# Reset the correlation context before each test for isolation
@pytest.fixture(autouse=True)
def _reset_correlation_id():
    token = correlation_id_var.set("")
    yield
    correlation_id_var.reset(token)
