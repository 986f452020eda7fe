from pathlib import Path

import pytest

from docker_bootstrap.core.stacks import (
    derive_stack_name,
    discover_stacks,
    find_compose_files,
    normalize_stack_name,
)
from docker_bootstrap.services.exceptions import StackDiscoveryError


class TestDeriveStackName:
    """Tests for stack naming."""

    def test_uses_parent_directory(self):
        assert derive_stack_name("docker/my-app/docker-compose.yml", "docker") == "my-app"

    def test_top_level_file_uses_base_name(self):
        assert derive_stack_name("docker/foo.yml", "docker") == "foo"

    def test_nested_directory_uses_closest_parent(self):
        assert derive_stack_name("docker/apps/blog/compose.yaml", "docker") == "blog"

    def test_accepts_path_objects(self):
        assert derive_stack_name(Path("docker/bar.yaml"), Path("docker")) == "bar"

    def test_name_is_normalized(self):
        assert derive_stack_name("docker/My App/docker-compose.yml", "docker") == "my-app"

    def test_unusable_name_raises(self):
        with pytest.raises(StackDiscoveryError, match="Cannot derive a stack name"):
            derive_stack_name("docker/___.yml", "docker")


class TestNormalizeStackName:
    """Tests for compose project name normalization."""

    @pytest.mark.parametrize("raw,expected", [
        ("my-app", "my-app"),
        ("My_App", "my_app"),
        ("home assistant", "home-assistant"),
        ("nginx.proxy", "nginx-proxy"),
        ("-leading", "leading"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_stack_name(raw) == expected


class TestDiscoverStacks:
    """Tests for stack discovery."""

    def test_discovers_compose_files(self, stack_repo):
        stacks = discover_stacks(stack_repo, "docker")

        assert [s.name for s in stacks] == ["foo", "monitoring", "my-app"]
        assert stacks[0].path == stack_repo / "docker" / "foo.yml"
        assert stacks[2].path == stack_repo / "docker" / "my-app" / "docker-compose.yml"

    def test_skips_non_compose_yaml(self, stack_repo):
        stacks = discover_stacks(stack_repo, "docker")
        assert all(s.path.name != "prometheus.yml" for s in stacks)

    def test_skips_duplicate_names(self, stack_repo):
        (stack_repo / "docker" / "my-app" / "override.yml").write_text(
            "services:\n  worker:\n    image: busybox\n"
        )

        stacks = discover_stacks(stack_repo, "docker")

        my_app = [s for s in stacks if s.name == "my-app"]
        assert len(my_app) == 1
        assert my_app[0].path.name == "docker-compose.yml"

    def test_invalid_yaml_raises(self, stack_repo):
        (stack_repo / "docker" / "broken.yml").write_text("services: [unclosed\n")

        with pytest.raises(StackDiscoveryError, match="not valid YAML"):
            discover_stacks(stack_repo, "docker")

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(StackDiscoveryError, match="does not exist"):
            discover_stacks(tmp_path, "docker")

    def test_empty_directory(self, tmp_path):
        (tmp_path / "docker").mkdir()
        assert discover_stacks(tmp_path, "docker") == []

    def test_stack_content(self, stack_repo):
        stacks = discover_stacks(stack_repo, "docker")
        assert "busybox" in stacks[0].content()

    def test_find_compose_files_sorted(self, stack_repo):
        files = find_compose_files(stack_repo / "docker")
        assert files == sorted(files)
        assert len(files) == 4

    def test_stacks_at_repository_root(self, tmp_path):
        """Test top-level files keep their own names when the subdir is the checkout itself."""
        (tmp_path / "foo.yml").write_text("services:\n  foo:\n    image: busybox\n")
        (tmp_path / "bar.yml").write_text("services:\n  bar:\n    image: busybox\n")
        (tmp_path / "web").mkdir()
        (tmp_path / "web" / "compose.yaml").write_text("services:\n  web:\n    image: nginx\n")

        stacks = discover_stacks(tmp_path, ".")

        assert [s.name for s in stacks] == ["bar", "foo", "web"]

    def test_empty_subdir_means_repository_root(self, tmp_path):
        (tmp_path / "foo.yml").write_text("services:\n  foo:\n    image: busybox\n")
        (tmp_path / "bar.yml").write_text("services:\n  bar:\n    image: busybox\n")

        stacks = discover_stacks(tmp_path, "")

        assert [s.name for s in stacks] == ["bar", "foo"]
