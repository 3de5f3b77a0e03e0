"""Shared test fixtures for hostpub tests."""
from typing import Dict, List, Optional

import pytest

from hostpub.core.config import HostpubConfig, set_config
from hostpub.models.container import ContainerHandle, ExecResult
from hostpub.services.proxmox.transport import STATUS_RUNNING, ContainerTransport


class FakeTransport(ContainerTransport):
    """In-memory transport recording every remote call."""

    def __init__(
        self,
        result: Optional[ExecResult] = None,
        status: str = STATUS_RUNNING,
        error: Optional[Exception] = None,
    ):
        super().__init__(mock=False)
        self.result = result or ExecResult(0, "HOSTPUB_RESULT applied eth0 192.168.1.50\n")
        self.status = status
        self.error = error
        self.calls: List[Dict] = []

    def container_status(self, handle: ContainerHandle) -> str:
        return self.status

    def run_script(self, handle, script, env=None):
        self.calls.append({'vmid': handle.vmid, 'script': script, 'env': dict(env or {})})
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep host settings out of the tests."""
    for name in (
        'HOSTPUB_MOCK',
        'HOSTPUB_HOSTNAME',
        'HOSTPUB_EXEC_TIMEOUT',
        'HOSTPUB_STATUS_TIMEOUT',
        'HOSTPUB_CONTAINER_BOOT_TIMEOUT',
        'HOSTPUB_CONTAINER_READY_TIMEOUT',
    ):
        monkeypatch.delenv(name, raising=False)
    set_config(HostpubConfig())
    yield
    set_config(None)


@pytest.fixture
def handle():
    """Container 105."""
    return ContainerHandle(105)


@pytest.fixture
def fake_transport():
    """Transport reporting a successful publish."""
    return FakeTransport()
