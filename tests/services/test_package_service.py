"""Tests for package service."""

from unittest.mock import MagicMock

import pytest

from docker_bootstrap.services.exceptions import CommandError, PackageServiceError
from docker_bootstrap.services.package_service import PackageService


class TestPackageService:
    """Test cases for PackageService."""

    def test_update(self):
        runner = MagicMock()
        PackageService(runner).update()
        runner.run.assert_called_once_with(
            ["apt-get", "update", "-qq"], env={"DEBIAN_FRONTEND": "noninteractive"}
        )

    def test_install(self):
        runner = MagicMock()

        installed = PackageService(runner).install(["vim", "htop"])

        assert installed == ["vim", "htop"]
        runner.run.assert_called_once_with(
            ["apt-get", "install", "-y", "-qq", "vim", "htop"],
            env={"DEBIAN_FRONTEND": "noninteractive"},
        )

    def test_install_empty_list_is_noop(self):
        runner = MagicMock()

        assert PackageService(runner).install([]) == []
        runner.run.assert_not_called()

    def test_install_failure(self):
        runner = MagicMock()
        runner.run.side_effect = CommandError("failed", stderr="E: Unable to locate package nope")

        with pytest.raises(PackageServiceError, match="apt-get install failed"):
            PackageService(runner).install(["nope"])
