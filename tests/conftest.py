import os
import pytest
from ulidgen.logging_setup import get_logger


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # Keep host settings and stray ulidgen.yaml files out of the tests
    for key in list(os.environ):
        if key.startswith("ULIDGEN_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    get_logger().handlers = []
