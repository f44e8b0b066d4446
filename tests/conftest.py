import os
import sys
from glob import glob

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from tests.test_util import data_file, open_file  # isort:skip


@pytest.fixture(scope="session")
def add_program() -> str:
    return open_file(data_file("valid", "add.tl"))


@pytest.fixture(scope="session", params=sorted(glob(data_file("valid", "*.tl"))))
def valid_file(request) -> str:
    return request.param
