"""Unit tests for ProtoConfiguration and load_configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError
import yaml

from protoc_invoker.config import ProtoConfiguration, load_configuration
from protoc_invoker.errors import ConfigurationError


class TestProtoConfiguration:
    """Tests for ProtoConfiguration Pydantic model."""

    def test_minimal_configuration(self, proto_root: Path) -> None:
        """Test only root_directory is required."""
        config = ProtoConfiguration(root_directory=str(proto_root))

        assert config.root_directory == str(proto_root)
        assert config.include_paths == ()
        assert config.protoc_path is None
        assert config.keep_descriptor_file is True

    def test_with_include_paths(self, proto_root: Path, include_dir: Path) -> None:
        """Test existing include paths are accepted in order."""
        config = ProtoConfiguration(
            root_directory=str(proto_root),
            include_paths=[str(include_dir), str(proto_root)],
        )

        assert config.include_paths == (str(include_dir), str(proto_root))

    def test_empty_root_rejected(self) -> None:
        """Test empty root_directory fails immediately."""
        with pytest.raises(ValidationError) as exc_info:
            ProtoConfiguration(root_directory="")

        assert "root_directory" in str(exc_info.value)

    def test_root_required(self) -> None:
        """Test root_directory cannot be omitted."""
        with pytest.raises(ValidationError) as exc_info:
            ProtoConfiguration()  # type: ignore[call-arg]

        assert "root_directory" in str(exc_info.value)

    def test_missing_root_rejected(self, tmp_path: Path) -> None:
        """Test a root that does not exist fails construction."""
        missing = tmp_path / "nope"

        with pytest.raises(ValidationError) as exc_info:
            ProtoConfiguration(root_directory=str(missing))

        assert "Proto root does not exist" in str(exc_info.value)

    def test_missing_include_path_rejected(self, proto_root: Path, tmp_path: Path) -> None:
        """Test any missing include path fails construction."""
        missing = tmp_path / "missing-include"

        with pytest.raises(ValidationError) as exc_info:
            ProtoConfiguration(
                root_directory=str(proto_root),
                include_paths=[str(proto_root), str(missing)],
            )

        assert "Include path does not exist" in str(exc_info.value)
        assert str(missing) in str(exc_info.value)

    def test_frozen(self, proto_root: Path) -> None:
        """Test configuration is immutable."""
        config = ProtoConfiguration(root_directory=str(proto_root))

        with pytest.raises(ValidationError):
            config.root_directory = "/elsewhere"  # type: ignore[misc]

    def test_include_paths_cannot_be_mutated(self, proto_root: Path, tmp_path: Path) -> None:
        """Test include paths cannot be extended after validation."""
        config = ProtoConfiguration(
            root_directory=str(proto_root),
            include_paths=[str(proto_root)],
        )

        assert isinstance(config.include_paths, tuple)
        with pytest.raises(AttributeError):
            config.include_paths.append(str(tmp_path / "does-not-exist"))  # type: ignore[attr-defined]
        assert config.include_paths == (str(proto_root),)

    def test_extra_fields_forbidden(self, proto_root: Path) -> None:
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            ProtoConfiguration(root_directory=str(proto_root), use_reflection=True)  # type: ignore[call-arg]

        assert "use_reflection" in str(exc_info.value)


class TestLoadConfiguration:
    """Tests for load_configuration()."""

    def test_load_relative_paths(self, proto_root: Path, include_dir: Path) -> None:
        """Test relative paths resolve against the YAML file's directory."""
        config_file = proto_root.parent / "protos.yaml"
        config_file.write_text(
            yaml.dump(
                {
                    "root_directory": proto_root.name,
                    "include_paths": [include_dir.name],
                    "keep_descriptor_file": False,
                }
            )
        )

        config = load_configuration(config_file)

        assert Path(config.root_directory) == proto_root
        assert [Path(p) for p in config.include_paths] == [include_dir]
        assert config.keep_descriptor_file is False

    def test_load_absolute_paths(self, proto_root: Path, tmp_path: Path) -> None:
        """Test absolute paths are kept as written."""
        config_dir = tmp_path / "conf"
        config_dir.mkdir()
        config_file = config_dir / "protos.yaml"
        config_file.write_text(
            yaml.dump({"root_directory": str(proto_root), "protoc_path": "/usr/bin/protoc"})
        )

        config = load_configuration(str(config_file))

        assert config.root_directory == str(proto_root)
        assert config.protoc_path == "/usr/bin/protoc"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing config file raises ConfigurationError."""
        missing = tmp_path / "missing.yaml"

        with pytest.raises(ConfigurationError) as exc_info:
            load_configuration(missing)

        assert exc_info.value.file_path == str(missing)
        assert "not found" in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test YAML syntax errors raise ConfigurationError."""
        config_file = tmp_path / "protos.yaml"
        config_file.write_text("root_directory: [unclosed\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_configuration(config_file)

        assert "Invalid YAML" in str(exc_info.value)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """Test YAML that is not a mapping raises ConfigurationError."""
        config_file = tmp_path / "protos.yaml"
        config_file.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_configuration(config_file)

        assert "mapping" in str(exc_info.value)

    def test_invalid_values(self, tmp_path: Path) -> None:
        """Test validation failures are wrapped in ConfigurationError."""
        config_file = tmp_path / "protos.yaml"
        config_file.write_text(yaml.dump({"root_directory": "does-not-exist"}))

        with pytest.raises(ConfigurationError) as exc_info:
            load_configuration(config_file)

        assert "Invalid proto configuration" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValidationError)
