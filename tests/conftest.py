"""
Shared design-document fixtures.

A small document with an icon component, a button variant group (one text
slot, a visibility toggle and an icon swap), a card with two text slots and
instances of both.
"""
import copy

import pytest

from component_props.codegen.core.adapter import build_model
from component_props.nodes import NodeIndex


ICON = {"id": "2:1", "name": "icon / star", "type": "COMPONENT"}

BUTTON_SET = {
    "id": "1:1",
    "name": "button",
    "type": "COMPONENT_SET",
    "componentPropertyDefinitions": {
        "Size": {"type": "VARIANT", "defaultValue": "small", "variantOptions": ["small", "large"]},
        "Disabled": {"type": "VARIANT", "defaultValue": "false", "variantOptions": ["true", "false"]},
        "Label#1:5": {"type": "TEXT", "defaultValue": "Click"},
        "Has Icon#1:6": {"type": "BOOLEAN", "defaultValue": False},
        "Icon#1:7": {"type": "INSTANCE_SWAP", "defaultValue": "2:1"},
    },
    "children": [
        {
            "id": "1:2",
            "name": "Size=small, Disabled=false",
            "type": "COMPONENT",
            "children": [
                {
                    "id": "1:3",
                    "name": "label",
                    "type": "TEXT",
                    "componentPropertyReferences": {"characters": "Label#1:5"},
                },
                {
                    "id": "1:4",
                    "name": "icon",
                    "type": "INSTANCE",
                    "mainComponent": "2:1",
                    "componentPropertyReferences": {
                        "visible": "Has Icon#1:6",
                        "mainComponent": "Icon#1:7",
                    },
                },
            ],
        },
        {"id": "1:8", "name": "Size=large, Disabled=false", "type": "COMPONENT"},
    ],
}

BUTTON_INSTANCE = {
    "id": "3:1",
    "name": "Button",
    "type": "INSTANCE",
    "mainComponent": "1:2",
    "componentProperties": {
        "Size": {"type": "VARIANT", "value": "large"},
        "Disabled": {"type": "VARIANT", "value": "true"},
        "Label#1:5": {"type": "TEXT", "value": "Save"},
        "Has Icon#1:6": {"type": "BOOLEAN", "value": True},
        "Icon#1:7": {"type": "INSTANCE_SWAP", "value": "2:1"},
    },
}

CARD = {
    "id": "4:1",
    "name": "card",
    "type": "COMPONENT",
    "componentPropertyDefinitions": {
        "Title#4:2": {"type": "TEXT", "defaultValue": "Title"},
        "Body#4:3": {"type": "TEXT", "defaultValue": "Body"},
    },
    "children": [
        {"id": "4:4", "name": "title", "type": "TEXT", "componentPropertyReferences": {"characters": "Title#4:2"}},
        {"id": "4:5", "name": "body", "type": "TEXT", "componentPropertyReferences": {"characters": "Body#4:3"}},
    ],
}

CARD_INSTANCE = {
    "id": "5:1",
    "name": "Card",
    "type": "INSTANCE",
    "mainComponent": "4:1",
    "componentProperties": {
        "Title#4:2": {"type": "TEXT", "value": "Hello"},
        "Body#4:3": {"type": "TEXT", "value": "World"},
    },
}


def make_document():
    """Fresh copy of the whole fixture document as a REST-style response."""
    return {
        "document": {
            "id": "0:0",
            "name": "Document",
            "type": "DOCUMENT",
            "children": [
                {
                    "id": "0:1",
                    "name": "Page 1",
                    "type": "CANVAS",
                    "children": copy.deepcopy(
                        [ICON, BUTTON_SET, BUTTON_INSTANCE, CARD, CARD_INSTANCE]
                    ),
                }
            ],
        }
    }


@pytest.fixture
def document():
    return make_document()


@pytest.fixture
def index(document):
    return NodeIndex.from_data(document)


@pytest.fixture
def button_model(index):
    """Model of the single button instance."""
    return build_model(index.relevant_nodes(["3:1"]))


@pytest.fixture
def card_model(index):
    """Model of the single card instance."""
    return build_model(index.relevant_nodes(["5:1"]))


@pytest.fixture
def swap_index():
    """Index factory: a button whose icon swap is shown by a boolean toggle."""

    def build(show, icon="7:1"):
        return NodeIndex.from_data(
            [
                {"id": "7:1", "name": "heart", "type": "COMPONENT"},
                {"id": "7:2", "name": "star", "type": "COMPONENT"},
                {
                    "id": "1:1",
                    "name": "btn",
                    "type": "COMPONENT",
                    "componentPropertyDefinitions": {
                        "Icon#1:3": {"type": "INSTANCE_SWAP", "defaultValue": "7:2"},
                        "Show#1:4": {"type": "BOOLEAN", "defaultValue": True},
                    },
                    "children": [
                        {
                            "id": "1:5",
                            "name": "icon",
                            "type": "INSTANCE",
                            "mainComponent": "7:2",
                            "componentPropertyReferences": {
                                "visible": "Show#1:4",
                                "mainComponent": "Icon#1:3",
                            },
                        }
                    ],
                },
                {
                    "id": "3:1",
                    "name": "Btn",
                    "type": "INSTANCE",
                    "mainComponent": "1:1",
                    "componentProperties": {
                        "Icon#1:3": {"type": "INSTANCE_SWAP", "value": icon},
                        "Show#1:4": {"type": "BOOLEAN", "value": show},
                    },
                },
            ]
        )

    return build
