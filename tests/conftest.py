import pytest
from click.testing import CliRunner

from docker_bootstrap.models.config import BootstrapSettings


SETTINGS_ENV_VARS = [
    "EXTRA_PKGS", "EXTRA_PACKAGES", "COMPOSE_REPO_URL", "COMPOSE_CLONE_DIR",
    "COMPOSE_SUBDIR", "DEPLOY_MODE", "SERVICE_USER", "SERVICE_GROUP",
    "SMOKE_TEST_IMAGE", "PORTAINER_VERSION", "PORTAINER_UI_PORT",
    "PORTAINER_AGENT_PORT", "PORTAINER_URL", "PORTAINER_ADMIN_USER",
    "PORTAINER_ADMIN_PASSWORD", "PORTAINER_ENDPOINT_ID", "PORTAINER_VERIFY_TLS",
    "STATUS_POLL_INTERVAL", "STATUS_TIMEOUT", "REQUIRE_ROOT", "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    """Keep host environment variables out of settings."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.lower(), raising=False)


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def isolated_cli_runner(cli_runner):
    """Provides a CLI runner with isolated filesystem."""
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def stack_repo(tmp_path):
    """Creates a checkout of a stack repository with a few compose files."""
    repo = tmp_path / "docker-stacks"
    stacks = repo / "docker"
    (stacks / "my-app").mkdir(parents=True)
    (stacks / "my-app" / "docker-compose.yml").write_text(
        "services:\n  web:\n    image: nginx:alpine\n"
    )
    (stacks / "monitoring").mkdir()
    (stacks / "monitoring" / "compose.yaml").write_text(
        "services:\n  grafana:\n    image: grafana/grafana\n"
    )
    # Service config living next to a compose file, not a stack
    (stacks / "monitoring" / "prometheus.yml").write_text(
        "global:\n  scrape_interval: 15s\n"
    )
    (stacks / "foo.yml").write_text("services:\n  foo:\n    image: busybox\n")
    (repo / "README.md").write_text("# stacks\n")
    return repo


@pytest.fixture
def settings(tmp_path, stack_repo):
    """Settings pointing at the temporary stack repository."""
    return BootstrapSettings(
        _env_file=None,
        compose_clone_dir=stack_repo,
        extra_packages=["vim", "git"],
        require_root=False,
    )


@pytest.fixture
def portainer_settings(stack_repo):
    """Settings for Portainer deployment."""
    return BootstrapSettings(
        _env_file=None,
        compose_clone_dir=stack_repo,
        deploy_mode="portainer",
        portainer_admin_password="correct-horse-battery",
        status_poll_interval=0.01,
        status_timeout=1,
        require_root=False,
    )
