"""Unit tests for path helper functions."""

from pathlib import Path

from evmchain_deploy.paths import get_artifact_paths, get_default_artifacts_dir


class TestGetDefaultArtifactsDir:
    """Test the get_default_artifacts_dir function."""

    def test_returns_artifacts_in_working_directory(self):
        """Test that the default is ./artifacts."""
        artifacts_dir = get_default_artifacts_dir()

        assert isinstance(artifacts_dir, Path)
        assert artifacts_dir.name == "artifacts"
        assert artifacts_dir.parent == Path.cwd()

    def test_returns_absolute_path(self):
        """Test that returned path is absolute."""
        assert get_default_artifacts_dir().is_absolute()


class TestGetArtifactPaths:
    """Test the get_artifact_paths function."""

    def test_uses_hardhat_layout(self, tmp_path: Path):
        """Test artifact path follows artifacts/contracts/{Name}.sol/{Name}.json."""
        artifact_path, build_info_dir = get_artifact_paths("Pos25", tmp_path)

        assert artifact_path == tmp_path / "contracts" / "Pos25.sol" / "Pos25.json"
        assert build_info_dir == tmp_path / "build-info"

    def test_default_root(self):
        """Test paths are under ./artifacts when no root is given."""
        artifact_path, build_info_dir = get_artifact_paths("Pos25")

        assert artifact_path.is_relative_to(get_default_artifacts_dir())
        assert build_info_dir == get_default_artifacts_dir() / "build-info"

    def test_custom_source_name(self, tmp_path: Path):
        """Test a contract defined in a differently named source file."""
        artifact_path, _ = get_artifact_paths("Token", tmp_path, source_name="contracts/tokens/All.sol")

        assert artifact_path == tmp_path / "contracts" / "tokens" / "All.sol" / "Token.json"

    def test_relative_root_is_made_absolute(self):
        """Test that a relative root resolves against the working directory."""
        artifact_path, _ = get_artifact_paths("Pos25", "build/artifacts")

        assert artifact_path.is_absolute()
        assert artifact_path == Path.cwd() / "build" / "artifacts" / "contracts" / "Pos25.sol" / "Pos25.json"
