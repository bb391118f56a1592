"""Tests for configuration loading."""
import logging
import tempfile
from pathlib import Path

import pytest

from strapigen.core.config import Configuration, load_config
from strapigen.core.errors import ConfigError


def _write(directory: Path, text: str, name: str = "strapi.config.yaml") -> Path:
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_defaults(tmp_path):
    """A minimal file gets every documented default."""
    _write(tmp_path, "url: http://localhost:1337\n")

    config = load_config(tmp_path)

    assert config.url == "http://localhost:1337"
    assert config.token is None
    assert config.api_prefix == "/api"
    assert config.strapi_version == "v5"
    assert config.output_format == "typescript"
    assert config.module_type == "esm"
    assert config.output.path == "src/strapi"
    assert config.output.structure == "by-feature"
    assert config.output.actions == "actions/strapi"
    assert config.features.upload is False
    assert config.schema_options.advanced_relations is False
    assert config.options.detect_version is True
    assert config.schemas_enabled is True
    assert config.file_extension == "ts"


def test_load_config_accepts_camel_case_keys(tmp_path):
    _write(tmp_path, """
url: https://cms.example.com/
apiPrefix: /v2/
strapiVersion: v4
outputFormat: jsdoc
moduleType: commonjs
output:
  structure: by-layer
features:
  upload: true
schemaOptions:
  advancedRelations: true
options:
  blocksRendererInstalled: true
""")

    config = load_config(tmp_path)

    assert config.url == "https://cms.example.com"
    assert config.api_prefix == "/v2"
    assert config.strapi_version == "v4"
    assert config.output_format == "jsdoc"
    assert config.module_type == "commonjs"
    assert config.output.structure == "by-layer"
    assert config.features.upload is True
    assert config.schema_options.advanced_relations is True
    assert config.options.blocks_renderer_installed is True
    # jsdoc projects default to no zod schemas
    assert config.schemas_enabled is False
    assert config.file_extension == "js"


def test_load_config_expands_env_references(tmp_path, monkeypatch):
    monkeypatch.setenv("MY_CMS_TOKEN", "secret-token")
    _write(tmp_path, "url: http://localhost:1337\ntoken: ${MY_CMS_TOKEN}\n")

    config = load_config(tmp_path)

    assert config.token == "secret-token"


def test_load_config_reads_url_and_token_from_dotenv(tmp_path, monkeypatch):
    monkeypatch.delenv("STRAPI_URL", raising=False)
    monkeypatch.delenv("STRAPI_TOKEN", raising=False)
    (tmp_path / ".env").write_text("STRAPI_URL=http://from-env:1337\nSTRAPI_TOKEN=abc\n", encoding="utf-8")
    _write(tmp_path, "outputFormat: typescript\n")

    config = load_config(tmp_path)

    assert config.url == "http://from-env:1337"
    assert config.token == "abc"


def test_load_config_expands_any_dotenv_variable(tmp_path, monkeypatch):
    """Variables defined only in .env resolve, not just STRAPI_URL and STRAPI_TOKEN."""
    monkeypatch.delenv("CMS_PREFIX", raising=False)
    (tmp_path / ".env").write_text("CMS_PREFIX=cms\n", encoding="utf-8")
    _write(tmp_path, "url: http://localhost:1337\napiPrefix: ${CMS_PREFIX}\n")

    assert load_config(tmp_path).api_prefix == "/cms"


def test_process_environment_overrides_dotenv(tmp_path, monkeypatch):
    monkeypatch.setenv("CMS_PREFIX", "from-env")
    (tmp_path / ".env").write_text("CMS_PREFIX=cms\n", encoding="utf-8")
    _write(tmp_path, "url: http://localhost:1337\napiPrefix: ${CMS_PREFIX}\n")

    assert load_config(tmp_path).api_prefix == "/from-env"


def test_unset_variable_is_logged(tmp_path, monkeypatch, caplog):
    monkeypatch.delenv("NOT_SET_ANYWHERE", raising=False)
    monkeypatch.delenv("STRAPI_TOKEN", raising=False)
    _write(tmp_path, "url: http://localhost:1337\ntoken: ${NOT_SET_ANYWHERE}\n")

    with caplog.at_level(logging.WARNING, logger="strapigen.core.config"):
        config = load_config(tmp_path)

    assert config.token is None
    assert "NOT_SET_ANYWHERE" in caplog.text


def test_load_config_yml_extension_and_explicit_path():
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(temp_dir)
        _write(root, "url: http://a.test\n", name="strapi.config.yml")
        assert load_config(root).url == "http://a.test"

        other = _write(root, "url: http://b.test\n", name="custom.yaml")
        assert load_config(root, other).url == "http://b.test"


def test_missing_config_raises(tmp_path, monkeypatch):
    monkeypatch.delenv("STRAPIGEN_CONFIG", raising=False)
    with pytest.raises(ConfigError) as exc:
        load_config(tmp_path)
    assert "strapi.config.yaml" in exc.value.message


def test_invalid_config_names_file_and_field(tmp_path):
    path = _write(tmp_path, "url: not-a-url\nstrapiVersion: v3\n")

    with pytest.raises(ConfigError) as exc:
        load_config(tmp_path)

    message = str(exc.value)
    assert str(path) in message
    assert "url" in message
    assert "strapi_version" in message or "strapiVersion" in message


def test_non_mapping_config_raises(tmp_path):
    _write(tmp_path, "- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_empty_token_becomes_none():
    config = Configuration(url="http://localhost:1337", token="  ")
    assert config.token is None


def test_empty_api_prefix_is_allowed():
    config = Configuration.model_validate({"url": "http://localhost:1337", "apiPrefix": "/"})
    assert config.api_prefix == ""
