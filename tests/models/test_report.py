from docker_bootstrap.models.report import BootstrapReport, DeployedStack


class TestBootstrapReport:
    """Tests for the summary rows."""

    def test_rows_for_full_run(self):
        report = BootstrapReport(
            packages=["vim", "git"],
            docker_version="24.0.7",
            compose_version="2.24.5",
            compose_plugin_installed=True,
            service_user="docker",
            service_user_created=True,
            login_user="alice",
            login_user_added=True,
            smoke_test_passed=True,
            repo_action="cloned",
            repo_commit="0123456789abcdef0123",
            deploy_mode="compose",
            stacks=[DeployedStack("foo", "docker/foo.yml", "up")],
        )

        rows = dict(report.rows())

        assert rows["Packages"] == "vim, git"
        assert rows["Compose plugin"] == "2.24.5 (installed)"
        assert rows["Service user"] == "docker (created)"
        assert rows["Login user"] == "alice - added to docker group (re-login required)"
        assert rows["Smoke test"] == "passed"
        assert rows["Stack repo"] == "cloned @ 0123456789ab"
        assert rows["Stacks"] == "1 deployed via compose"
        assert "Portainer" not in rows

    def test_rows_for_empty_report(self):
        rows = dict(BootstrapReport().rows())

        assert rows["Packages"] == "(none)"
        assert rows["Docker"] == "unknown"
        assert rows["Smoke test"] == "not run"
        assert "Stacks" not in rows
