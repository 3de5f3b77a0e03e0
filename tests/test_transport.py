"""Tests for the pct transport."""
import subprocess

import pytest

from hostpub.core.config import HostpubConfig, set_config
from hostpub.core.errors import RemoteSessionError
from hostpub.core.hostname import normalize_hostname
from hostpub.services.dhcp_hostname import HostnamePublisher
from hostpub.services.proxmox import transport as transport_module
from hostpub.services.proxmox.transport import (
    STATUS_MISSING,
    STATUS_RUNNING,
    STATUS_STOPPED,
    PctTransport,
)


class FakeRun:
    """Stand-in for subprocess.run returning queued results."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, BaseException):
            raise result
        return result


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess([], returncode, stdout=stdout, stderr=stderr)


class TestRunScript:
    """Test pct exec invocation."""

    def test_command_binds_env_and_streams_script(self, monkeypatch, handle):
        fake = FakeRun(completed(0, "HOSTPUB_RESULT applied eth0 10.0.0.2\n"))
        monkeypatch.setattr(transport_module.subprocess, 'run', fake)

        result = PctTransport().run_script(handle, "echo hi\n", env={'HN': 'web'})

        cmd, kwargs = fake.calls[0]
        assert cmd == ['pct', 'exec', '105', '--', 'env', 'HN=web', 'bash', '-s']
        assert kwargs['input'] == "echo hi\n"
        assert kwargs['timeout'] == 120
        assert result.ok
        assert result.stdout.startswith("HOSTPUB_RESULT")

    def test_value_with_shell_syntax_is_one_argument(self, handle):
        cmd = PctTransport().build_command(handle, {'HN': 'a b; rm -rf /'})

        assert cmd[5] == 'HN=a b; rm -rf /'
        assert cmd[-2:] == ['bash', '-s']

    def test_no_env(self, handle):
        assert PctTransport().build_command(handle) == ['pct', 'exec', '105', '--', 'bash', '-s']

    def test_nonzero_exit_returned(self, monkeypatch, handle):
        monkeypatch.setattr(transport_module.subprocess, 'run', FakeRun(completed(2, "", "boom\n")))

        result = PctTransport().run_script(handle, "exit 2")

        assert not result.ok
        assert result.returncode == 2
        assert result.stderr == "boom\n"

    def test_timeout_raises_session_error(self, monkeypatch, handle):
        set_config(HostpubConfig(exec_timeout=7))
        monkeypatch.setattr(
            transport_module.subprocess, 'run',
            FakeRun(subprocess.TimeoutExpired(['pct'], 7)),
        )

        with pytest.raises(RemoteSessionError) as exc_info:
            PctTransport().run_script(handle, "sleep 100")

        assert "timed out after 7s" in str(exc_info.value)
        assert exc_info.value.vmid == 105

    def test_missing_pct_raises_session_error(self, monkeypatch, handle):
        monkeypatch.setattr(transport_module.subprocess, 'run', FakeRun(FileNotFoundError('pct')))

        with pytest.raises(RemoteSessionError, match="pct not found"):
            PctTransport().run_script(handle, "true")

    def test_mock_does_not_execute(self, monkeypatch, handle):
        fake = FakeRun(completed(1))
        monkeypatch.setattr(transport_module.subprocess, 'run', fake)

        result = PctTransport(mock=True).run_script(handle, "true", env={'HN': 'web'})

        assert result.ok
        assert fake.calls == []


class TestContainerStatus:
    """Test pct status parsing."""

    def test_running(self, monkeypatch, handle):
        fake = FakeRun(completed(0, "status: running\n"))
        monkeypatch.setattr(transport_module.subprocess, 'run', fake)

        assert PctTransport().container_status(handle) == STATUS_RUNNING
        assert fake.calls[0][0] == ['pct', 'status', '105']

    def test_stopped(self, monkeypatch, handle):
        monkeypatch.setattr(transport_module.subprocess, 'run', FakeRun(completed(0, "status: stopped\n")))

        assert PctTransport().container_status(handle) == STATUS_STOPPED

    def test_missing(self, monkeypatch, handle):
        monkeypatch.setattr(
            transport_module.subprocess, 'run',
            FakeRun(completed(2, "", "Configuration file 'nodes/pve/lxc/105.conf' does not exist\n")),
        )

        assert PctTransport().container_status(handle) == STATUS_MISSING

    def test_missing_pct(self, monkeypatch, handle):
        monkeypatch.setattr(transport_module.subprocess, 'run', FakeRun(FileNotFoundError('pct')))

        with pytest.raises(RemoteSessionError):
            PctTransport().container_status(handle)

    def test_permission_denied_raises_session_error(self, monkeypatch, handle):
        monkeypatch.setattr(
            transport_module.subprocess, 'run',
            FakeRun(PermissionError(13, 'Permission denied', 'pct')),
        )

        with pytest.raises(RemoteSessionError, match="Permission denied"):
            PctTransport().container_status(handle)

    def test_permission_denied_publish_fails_cleanly(self, monkeypatch, handle):
        monkeypatch.setattr(
            transport_module.subprocess, 'run',
            FakeRun(PermissionError(13, 'Permission denied', 'pct')),
        )

        result = HostnamePublisher(PctTransport()).publish(normalize_hostname("web"), handle)

        assert result.failed
        assert "Permission denied" in result.reason


class TestWaitUntilReady:
    """Test boot readiness polling."""

    def test_ready_after_retries(self, monkeypatch, handle):
        fake = FakeRun(
            completed(1),
            subprocess.TimeoutExpired(['pct'], 2),
            completed(0),
        )
        sleeps = []
        monkeypatch.setattr(transport_module.subprocess, 'run', fake)
        monkeypatch.setattr(transport_module.time, 'sleep', sleeps.append)

        assert PctTransport().wait_until_ready(handle, timeout=5) is True
        assert len(fake.calls) == 3
        assert sleeps == [1, 1]
        assert fake.calls[0][0] == ['pct', 'exec', '105', '--', 'true']

    def test_gives_up(self, monkeypatch, handle):
        fake = FakeRun(completed(1))
        monkeypatch.setattr(transport_module.subprocess, 'run', fake)
        monkeypatch.setattr(transport_module.time, 'sleep', lambda seconds: None)

        assert PctTransport().wait_until_ready(handle, timeout=3) is False
        assert len(fake.calls) == 3

    def test_zero_timeout_checks_once(self, monkeypatch, handle):
        fake = FakeRun(completed(0))
        monkeypatch.setattr(transport_module.subprocess, 'run', fake)
        monkeypatch.setattr(transport_module.time, 'sleep', lambda seconds: None)

        assert PctTransport().wait_until_ready(handle, timeout=0) is True
        assert len(fake.calls) == 1

    def test_mock_ready(self, handle):
        assert PctTransport(mock=True).wait_until_ready(handle) is True
