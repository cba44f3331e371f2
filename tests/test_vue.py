"""
Vue target: template instances with named slots, composition and options API definitions.
"""
import pytest

from component_props.codegen.core.adapter import build_model
from component_props.codegen.languages.vue import (
    OPTIONS_API_IMPORT,
    VueGenerator,
    create_options_api_generator,
    create_vue_generator,
)
from component_props.nodes import NodeIndex


@pytest.fixture
def vue(index):
    return create_vue_generator(lookup=index.resolve)


def instance_code(generator, model, settings=None):
    lines = generator.format_instances(model, settings).code[0].lines
    assert len(lines) == 1
    return lines[0]


# ─── instances ──────────────────────────────────────────────────────────────

def test_single_slot_is_default_slot_content(vue, button_model):
    assert instance_code(vue, button_model) == '<Button disabled hasIcon size="large">Save</Button>'


def test_explicit_boolean_binds_values(vue, button_model):
    code = instance_code(vue, button_model, [("showDefaults", True), ("explicitBoolean", True)])
    assert code == "\n".join(
        [
            '<Button :disabled="true" :hasIcon="true" size="large">',
            "  <template v-slot:icon>",
            "    <IconStar />",
            "  </template>",
            "  Save",
            "</Button>",
        ]
    )


def test_many_slots_become_named_templates(vue, card_model):
    assert instance_code(vue, card_model) == "\n".join(
        [
            "<Card>",
            "  <template v-slot:body>",
            "    <span>World</span>",
            "  </template>",
            "  <template v-slot:title>",
            "    <span>Hello</span>",
            "  </template>",
            "</Card>",
        ]
    )


def test_default_valued_slot_still_counts(vue, index):
    index.resolve("5:1").component_properties["Body#4:3"]["value"] = "Body"
    model = build_model(index.relevant_nodes(["5:1"]))
    assert instance_code(vue, model) == "\n".join(
        [
            "<Card>",
            "  <template v-slot:title>",
            "    <span>Hello</span>",
            "  </template>",
            "</Card>",
        ]
    )


def test_components_are_joined_by_blank_lines(vue, index):
    model = build_model(index.relevant_nodes(["2:1", "1:1"]))
    assert instance_code(vue, model) == "<IconStar />\n\n<Button />"


def test_attribute_quotes_are_escaped():
    index = NodeIndex.from_data(
        [
            {
                "id": "1:1",
                "name": "tag",
                "type": "COMPONENT",
                "componentPropertyDefinitions": {
                    "Text#1:2": {"type": "TEXT", "defaultValue": ""},
                    "Icon#1:3": {"type": "INSTANCE_SWAP", "defaultValue": "9:9"},
                    "Count": {"type": "VARIANT", "defaultValue": "1", "variantOptions": ["1", "2"]},
                },
            },
            {
                "id": "3:1",
                "type": "INSTANCE",
                "mainComponent": "1:1",
                "componentProperties": {
                    "Text#1:2": {"type": "TEXT", "value": 'Say "hi"'},
                    "Icon#1:3": {"type": "INSTANCE_SWAP", "value": "8:8"},
                    "Count": {"type": "VARIANT", "value": "2"},
                },
            },
        ]
    )
    model = build_model(index.relevant_nodes(["3:1"]))
    code = instance_code(VueGenerator(lookup=index.resolve), model)
    assert code == '<Tag :count="2" icon="8:8" text="Say &quot;hi&quot;" />'


def test_swap_hidden_by_its_visibility_toggle_is_dropped(swap_index):
    index = swap_index(show=False)
    model = build_model(index.relevant_nodes(["3:1"]))
    vue = create_vue_generator(lookup=index.resolve)

    assert instance_code(vue, model) == "<Btn />"
    assert instance_code(vue, model, [("showDefaults", False), ("explicitBoolean", True)]) == (
        '<Btn :show="false" />'
    )


def test_bound_swap_becomes_named_slot(swap_index):
    index = swap_index(show=True)
    model = build_model(index.relevant_nodes(["3:1"]))
    assert instance_code(create_vue_generator(lookup=index.resolve), model) == "\n".join(
        [
            "<Btn>",
            "  <template v-slot:icon>",
            "    <Heart />",
            "  </template>",
            "</Btn>",
        ]
    )


def test_unresolved_bound_swap_stays_an_attribute(swap_index):
    index = swap_index(show=True, icon="9:9")
    model = build_model(index.relevant_nodes(["3:1"]))
    assert instance_code(create_vue_generator(lookup=index.resolve), model) == '<Btn icon="9:9" />'


# ─── definitions ────────────────────────────────────────────────────────────

def test_composition_api_setup(vue, button_model):
    item = vue.format_definitions(button_model)
    assert item.settings == [("optionsApi", False)]
    assert item.settings_key == "vueDefinition"
    assert item.code[0].language == "tsx"
    assert item.code[0].lines == [
        "\n".join(
            [
                "/**",
                " * Button.vue setup",
                " */",
                "",
                "type ButtonPropsSize = 'small' | 'large';",
                "",
                "interface ButtonProps { disabled?: boolean; hasIcon?: boolean; icon?: Component;"
                " label?: string; size?: ButtonPropsSize; }",
                "",
                "const props = withDefaults(defineProps<ButtonProps>(), {",
                "  disabled: false,",
                "  hasIcon: false,",
                "  icon: <IconStar />,",
                '  label: "Click",',
                '  size: "small",',
                "})",
            ]
        )
    ]


def test_options_api_setting(vue, button_model):
    item = vue.format_definitions(button_model, [("optionsApi", True)])
    lines = item.code[0].lines

    assert item.settings == [("optionsApi", True)]
    assert lines[0] == OPTIONS_API_IMPORT
    assert lines[1] == "\n".join(
        [
            "/**",
            " * Button Component",
            " */",
            "",
            "type ButtonSize = 'small' | 'large';",
            "",
            "defineComponent({",
            '  name: "Button",',
            "  props: {",
            "    disabled: {",
            "      type: Boolean,",
            "      default: false,",
            "    },",
            "    hasIcon: {",
            "      type: Boolean,",
            "      default: false,",
            "    },",
            "    icon: {",
            "      type: Object,",
            '      default: "IconStar",',
            "    },",
            "    label: {",
            "      type: String,",
            '      default: "Click",',
            "    },",
            "    size: {",
            "      type: String as PropType<ButtonSize>,",
            '      default: "small",',
            "    },",
            "  },",
            "})",
        ]
    )


def test_options_api_from_config(index, button_model):
    generator = create_options_api_generator(lookup=index.resolve)
    assert generator.format_definitions(button_model).code[0].lines[0] == OPTIONS_API_IMPORT


def test_optional_defaults_are_left_out():
    index = NodeIndex.from_data(
        {
            "id": "1:1",
            "name": "badge",
            "type": "COMPONENT",
            "componentPropertyDefinitions": {
                "Tone": {"type": "VARIANT", "defaultValue": "undefined", "variantOptions": ["undefined", "warm"]},
                "Icon#1:2": {"type": "INSTANCE_SWAP", "defaultValue": "7:7"},
                "Pinned": {"type": "VARIANT", "defaultValue": "true", "variantOptions": ["true"]},
            },
        }
    )
    model = build_model(index.relevant_nodes())
    generator = create_vue_generator({"add_comments": False}, lookup=index.resolve)

    setup = generator.format_definitions(model).code[0].lines[0]
    assert "tone?: BadgePropsTone;" in setup
    assert "pinned?: true;" in setup
    assert "  tone" not in setup
    assert '  icon: "7:7",' in setup
    assert "  pinned: true," in setup

    options = generator.format_definitions(model, [("optionsApi", True)]).code[0].lines[1]
    assert "    tone: {\n      type: String as PropType<BadgeTone>,\n    }," in options
    assert '    icon: {\n      type: String,\n      default: "7:7",\n    },' in options
    assert "    pinned: {\n      type: Boolean,\n      default: true,\n    }," in options


def test_format_uses_both_setting_lists(vue, button_model):
    result = vue.format(button_model, [("showDefaults", False), ("explicitBoolean", True)], [("optionsApi", True)])
    instances, definitions = result.items
    assert result.label == "Vue"
    assert instances.code[0].language == "vue"
    assert ":disabled=" in instances.code[0].lines[0]
    assert definitions.code[0].lines[0] == OPTIONS_API_IMPORT
