from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterator

import pytest

import reqlog.api as reqlog_api
from reqlog.core.manager import GLOBAL_MANAGER


@pytest.fixture(autouse=True)
def reset_reqlog() -> Iterator[None]:
    yield
    GLOBAL_MANAGER.shutdown()
    reqlog_api._CONFIGURED = False
    root = logging.getLogger()
    root.setLevel(logging.WARNING)
    logging.captureWarnings(False)


@pytest.fixture
def moment() -> datetime:
    return datetime(2024, 5, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)
