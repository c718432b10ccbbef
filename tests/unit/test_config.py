"""
Unit tests for generator configuration and YAML loading.
"""

import pytest
from pydantic import ValidationError

from cml_php.config import (
    DEFAULT_NAMESPACE,
    PRESET_CONFIGS,
    GeneratorConfig,
    build_config,
    load_config,
)
from cml_php.errors import ConfigError
from cml_php.lib.model import UnitKind


class TestGeneratorConfig:
    """Test defaults, aliases and derived switches."""

    def test_defaults(self):
        config = GeneratorConfig()

        assert config.framework == "plain"
        assert not config.public_properties
        assert config.add_getters
        assert config.add_setters
        assert config.namespace == "App\\Models"
        assert config.constructor_type == "none"
        assert not config.constructor_property_promotion
        assert config.doctrine_attributes
        assert config.directory_structure == "flat"
        assert not config.group_by_type
        assert config.php_version == "8.1"
        assert not config.readonly_value_objects
        assert config.path_rules == []
        assert config.on_path_collision == "warn"

    def test_camel_case_aliases(self):
        config = GeneratorConfig.model_validate({
            "publicProperties": True,
            "constructorType": "required",
            "directoryStructure": "psr-4",
        })
        assert config.public_properties
        assert config.constructor_type == "required"
        assert config.directory_structure == "psr-4"

    def test_invalid_choice_raises(self):
        with pytest.raises(ValidationError):
            GeneratorConfig(framework="symfony")

    def test_unknown_key_raises(self):
        with pytest.raises(ValidationError):
            GeneratorConfig.model_validate({"frameworks": "plain"})

    def test_numeric_php_version(self):
        assert GeneratorConfig(php_version=8.2).php_version == "8.2"

    def test_namespace_normalized(self):
        assert GeneratorConfig(namespace="\\Acme\\Domain\\").namespace == "Acme\\Domain"
        assert GeneratorConfig(namespace="  ").namespace == DEFAULT_NAMESPACE

    @pytest.mark.parametrize("version, active, readonly_class, readonly_properties", [
        ("8.1", True, False, True),
        ("8.2", True, True, False),
        ("8.4", True, True, False),
    ])
    def test_readonly_switches(self, version, active, readonly_class, readonly_properties):
        config = GeneratorConfig(readonly_value_objects=True, php_version=version)

        assert config.readonly_active is active
        assert config.readonly_class is readonly_class
        assert config.readonly_properties is readonly_properties

    def test_readonly_off(self):
        config = GeneratorConfig(php_version="8.3")
        assert not config.readonly_active
        assert not config.readonly_class

    def test_path_rule_regex_not_validated(self):
        config = GeneratorConfig(path_rules=[{"pattern": "([", "kind": "entity"}])

        assert config.path_rules[0].pattern == "(["
        assert config.path_rules[0].kind is UnitKind.ENTITY

    def test_path_rule_subfolder_normalized(self):
        config = GeneratorConfig(path_rules=[{"pattern": "^Mon", "subfolder": "/Shared//./Money/"}])
        assert config.path_rules[0].subfolder == "Shared/Money"

        config = GeneratorConfig(path_rules=[{"pattern": "^Mon", "subfolder": "Shared\\Money"}])
        assert config.path_rules[0].subfolder == "Shared/Money"

    @pytest.mark.parametrize("subfolder", ["../x", "Shared/../../etc", "my-folder", "2024", "Shared/Money Values"])
    def test_path_rule_subfolder_rejected(self, subfolder):
        with pytest.raises(ValidationError, match="not a valid PHP namespace segment"):
            GeneratorConfig(path_rules=[{"pattern": "^Mon", "subfolder": subfolder}])

    def test_describe(self):
        assert GeneratorConfig(framework="doctrine").describe().startswith("doctrine (private")

    def test_presets_cover_every_framework(self):
        assert {c.framework for c in PRESET_CONFIGS} == {"plain", "laravel", "doctrine"}


class TestBuildConfig:

    def test_overrides_win(self):
        config = build_config({"framework": "laravel"}, framework="doctrine", namespace=None)

        assert config.framework == "doctrine"
        assert config.namespace == DEFAULT_NAMESPACE

    def test_validation_error_wrapped(self):
        with pytest.raises(ConfigError, match="Invalid generator configuration"):
            build_config({"constructor_type": "some"})

    def test_escaping_subfolder_wrapped(self):
        with pytest.raises(ConfigError, match="subfolder"):
            build_config({"path_rules": [{"pattern": "Line$", "subfolder": "../../outside"}]})


class TestLoadConfig:
    """Test reading YAML configuration files."""

    def test_load_yaml(self, temp_output_dir):
        path = temp_output_dir / "config.yaml"
        path.write_text(
            "framework: doctrine\n"
            "php_version: 8.2\n"
            "readonlyValueObjects: true\n"
            "path_rules:\n"
            "  - pattern: \"Repository$\"\n"
            "    subfolder: Repository\n"
            "    strip: \"Repository$\"\n"
        )
        config = load_config(path)

        assert config.framework == "doctrine"
        assert config.php_version == "8.2"
        assert config.readonly_value_objects
        assert config.path_rules[0].subfolder == "Repository"
        assert config.path_rules[0].strip == "Repository$"

    def test_example_config(self, project_root):
        config = load_config(project_root / "examples" / "cml" / "doctrine-psr4.yaml")

        assert config.framework == "doctrine"
        assert config.namespace == "App\\Domain"
        assert config.path_rules[0].kind is UnitKind.ENTITY

    def test_empty_file_gives_defaults(self, temp_output_dir):
        path = temp_output_dir / "empty.yaml"
        path.write_text("")

        assert load_config(path) == GeneratorConfig()

    def test_overrides(self, temp_output_dir):
        path = temp_output_dir / "config.yaml"
        path.write_text("framework: laravel\n")

        assert load_config(path, framework="plain").framework == "plain"

    def test_missing_file(self, temp_output_dir):
        with pytest.raises(ConfigError, match="Cannot read config file"):
            load_config(temp_output_dir / "missing.yaml")

    def test_invalid_yaml(self, temp_output_dir):
        path = temp_output_dir / "bad.yaml"
        path.write_text("framework: [doctrine\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, temp_output_dir):
        path = temp_output_dir / "list.yaml"
        path.write_text("- framework\n- doctrine\n")

        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config(path)

    def test_invalid_value(self, temp_output_dir):
        path = temp_output_dir / "config.yaml"
        path.write_text("directory_structure: nested\n")

        with pytest.raises(ConfigError):
            load_config(path)
