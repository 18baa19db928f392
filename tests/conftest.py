from __future__ import annotations

import os

import pytest

# Read once at import by voltweb.constants, so set before any test module loads
os.environ.setdefault("VOLT_STATUS_API_URL", "http://status.invalid/3")
os.environ.setdefault("VOLT_LOG_LEVEL", "WARNING")

from voltweb.models import ServerDescriptor  # noqa: E402

pytest_plugins = ["nicegui.testing.user_plugin"]


@pytest.fixture
def descriptors() -> list[ServerDescriptor]:
    return [
        ServerDescriptor("creative", "demo.voltservers.com", 25565, 100),
        ServerDescriptor("survival", "survival.voltservers.com", 25566, 50),
    ]
