"""Tests for systemd service."""

from unittest.mock import MagicMock, Mock

import pytest

from docker_bootstrap.services.exceptions import CommandError, SystemdServiceError
from docker_bootstrap.services.systemd_service import SystemdService


class TestSystemdService:
    """Test cases for SystemdService."""

    def test_start_and_enable(self):
        runner = MagicMock()
        service = SystemdService(runner)

        service.start("docker")
        service.enable("docker")

        assert runner.run.call_args_list[0].args[0] == ["systemctl", "start", "docker"]
        assert runner.run.call_args_list[1].args[0] == ["systemctl", "enable", "docker"]

    def test_start_failure(self):
        runner = MagicMock()
        runner.run.side_effect = CommandError("failed", stderr="Unit docker.service not found.")

        with pytest.raises(SystemdServiceError, match="Failed to start docker"):
            SystemdService(runner).start("docker")

    def test_is_active(self):
        runner = MagicMock()
        runner.run.return_value = Mock(returncode=0)
        assert SystemdService(runner).is_active("docker") is True

        runner.run.return_value = Mock(returncode=3)
        assert SystemdService(runner).is_active("docker") is False
        runner.run.assert_called_with(["systemctl", "is-active", "--quiet", "docker"], check=False)
