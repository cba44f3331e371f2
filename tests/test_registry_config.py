"""
Generator registry, configuration loading and the convenience entry points.
"""
import json

import pytest

from component_props.codegen import format_nodes, quick_format
from component_props.codegen.core.config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
    read_settings,
)
from component_props.codegen.core.generator import GenerationResult, generate_code
from component_props.codegen.core.templates import TemplateEngine, TemplateError, create_template_engine
from component_props.codegen.languages.react import ReactGenerator
from component_props.codegen.languages.vue import VueGenerator
from component_props.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_supported_languages,
)


# ─── registry ───────────────────────────────────────────────────────────────

def test_builtin_targets_and_aliases():
    assert list_supported_languages() == ["react", "vue"]
    assert is_language_supported("TSX")
    assert isinstance(get_generator("jsx"), ReactGenerator)
    assert isinstance(get_generator("vue"), VueGenerator)


def test_unknown_target_raises():
    with pytest.raises(RegistryError, match="Available: react, vue"):
        get_generator("svelte")


def test_language_info():
    info = get_language_info("tsx")
    assert info["name"] == "react"
    assert info["aliases"] == ["jsx", "tsx"]
    assert info["named_slots"] is False
    assert get_language_info("vue")["named_slots"] is True


def test_register_rejects_non_generators_and_alias_conflicts():
    registry = GeneratorRegistry()
    with pytest.raises(RegistryError):
        registry.register("text", str)

    registry.register("react", ReactGenerator, aliases=["jsx"])
    with pytest.raises(RegistryError, match="already points"):
        registry.register("vue", VueGenerator, aliases=["jsx"])

    registry.unregister("react")
    assert not registry.is_supported("jsx")


def test_generator_config_from_dict_and_file(tmp_path):
    generator = get_generator("vue", {"options_api": True, "theme": "dark"})
    assert generator.config.options_api is True
    assert generator.config.custom == {"theme": "dark"}

    path = tmp_path / "props.json"
    path.write_text(json.dumps({"slot_tag": "strong"}), encoding="utf-8")
    assert get_generator("react", path).config.slot_tag == "strong"


# ─── config ─────────────────────────────────────────────────────────────────

def test_load_config_merges_file_then_overrides(tmp_path):
    path = tmp_path / "props.json"
    path.write_text(json.dumps({"show_defaults": True, "add_comments": False}), encoding="utf-8")

    config = load_config("react", {"add_comments": True}, path)
    assert config.show_defaults is True
    assert config.add_comments is True
    assert config.instance_settings() == [("showDefaults", True), ("explicitBoolean", False)]


def test_config_file_errors(tmp_path):
    manager = ConfigManager()
    with pytest.raises(ConfigError, match="not found"):
        manager.get_config("react", config_file=tmp_path / "missing.json")

    yaml_path = tmp_path / "props.yaml"
    yaml_path.write_text("a: 1", encoding="utf-8")
    with pytest.raises(ConfigError, match="must be JSON"):
        manager.get_config("react", config_file=yaml_path)

    list_path = tmp_path / "list.json"
    list_path.write_text("[]", encoding="utf-8")
    with pytest.raises(ConfigError, match="JSON object"):
        manager.get_config("react", config_file=list_path)


def test_save_config_round_trips(tmp_path):
    manager = ConfigManager()
    config = GeneratorConfig(explicit_boolean=True, custom={"theme": "dark"})
    path = tmp_path / "saved.json"
    manager.save_config(config, path)

    loaded = manager.get_config(config_file=path)
    assert loaded == config


def test_validate_config():
    manager = ConfigManager()
    warnings = manager.validate_config(GeneratorConfig(slot_tag="not a tag", options_api=True), "react")
    assert any("slot_tag" in warning for warning in warnings)
    assert any("options_api" in warning for warning in warnings)
    assert manager.validate_config(GeneratorConfig(), "vue") == []


def test_read_settings_is_positional_with_defaults():
    defaults = [("showDefaults", False), ("explicitBoolean", True)]
    assert read_settings(None, defaults) == [False, True]
    assert read_settings([("anything", 1)], defaults) == [True, True]
    assert read_settings([("a", False), ("b", False)], defaults) == [False, False]


# ─── templates ──────────────────────────────────────────────────────────────

def test_template_engine_does_not_escape_markup(tmp_path):
    (tmp_path / "element.j2").write_text("<{{ name }} {{ attrs }} label={{ label | json }} />", encoding="utf-8")
    engine = create_template_engine(tmp_path)
    rendered = engine.render_template("element.j2", {"name": "Icon", "attrs": 'size="<b>"', "label": "Hi"})
    assert rendered == '<Icon size="<b>" label="Hi" />'


def test_template_engine_wraps_errors(tmp_path):
    (tmp_path / "strict.j2").write_text("{{ missing }}", encoding="utf-8")
    engine = create_template_engine(tmp_path)
    with pytest.raises(TemplateError, match="strict.j2"):
        engine.render_template("strict.j2", {})
    with pytest.raises(TemplateError, match="absent.j2"):
        engine.render_template("absent.j2", {})

    with pytest.raises(TemplateError):
        TemplateEngine().render_template("element.j2", {})


# ─── convenience API ────────────────────────────────────────────────────────

def test_format_nodes_from_raw_document(document):
    result = format_nodes(document, "react", node_ids=["3:1"])
    assert result.success
    assert result.metadata["component_count"] == 1
    assert result.result.items[0].code[0].lines == ['<Button disabled hasIcon size="large">Save</Button>']


def test_quick_format_accepts_json_text(document):
    data = quick_format(json.dumps(document), "vue", options_api=True)
    assert data["label"] == "Vue"
    assert data["items"][1]["settings"] == [["optionsApi", True]]


def test_generate_code_reports_failures(button_model):
    class BrokenGenerator(ReactGenerator):
        def format_definitions(self, model, settings=None):
            raise RuntimeError("boom")

    result = generate_code(BrokenGenerator(), button_model)
    assert isinstance(result, GenerationResult)
    assert not result.success
    assert "boom" in result.error_message
    assert isinstance(result.exception, RuntimeError)
