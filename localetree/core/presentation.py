"""Display attributes for locale tree nodes (label, description, icon, context)."""

from __future__ import annotations

from dataclasses import dataclass

from .nodes import LocaleNode, LocaleRecord, LocaleTree, Node, UnknownNodeError

ICON_MODULE = "module"
ICON_STRING = "string"
EMPTY_PLACEHOLDER = "(empty)"
TRANSLATE_SUFFIX = "-translate"


@dataclass(frozen=True, slots=True)
class ItemPresentation:
    """Everything a host needs to render one tree row."""

    label: str
    description: str
    tooltip: str
    collapsible: bool
    icon: str | None
    context_value: str


def label_for(node: Node, *, flatten: bool) -> str:
    match node:
        case LocaleRecord():
            return node.locale
        case LocaleTree() | LocaleNode():
            return node.keypath if flatten else node.keyname
        case _:
            raise UnknownNodeError(node)


def description_for(node: Node, *, empty_placeholder: str = EMPTY_PLACEHOLDER) -> str:
    match node:
        case LocaleNode():
            return node.value
        case LocaleRecord():
            return node.value or empty_placeholder
        case LocaleTree():
            return ""
        case _:
            raise UnknownNodeError(node)


def is_collapsible(node: Node) -> bool:
    """Groups and keys always show an expander, even with no children."""
    match node:
        case LocaleRecord():
            return False
        case LocaleTree() | LocaleNode():
            return True
        case _:
            raise UnknownNodeError(node)


def icon_for(node: Node) -> str | None:
    match node:
        case LocaleTree():
            return ICON_MODULE
        case LocaleNode():
            return ICON_STRING
        case LocaleRecord():
            return None
        case _:
            raise UnknownNodeError(node)


def is_translatable(node: Node, *, source_language: str) -> bool:
    """Return whether the host should offer translate actions for *node*.

    Records are translatable unless they belong to the source language or
    are shadow placeholders. Keys follow their own `shadow` flag; groups
    never qualify.
    """
    match node:
        case LocaleRecord():
            return node.locale != source_language and not node.shadow
        case LocaleNode():
            return not node.shadow
        case LocaleTree():
            return False
        case _:
            raise UnknownNodeError(node)


def context_value_for(node: Node, *, source_language: str) -> str:
    if is_translatable(node, source_language=source_language):
        return node.type + TRANSLATE_SUFFIX
    return node.type


def present(
    node: Node,
    *,
    flatten: bool,
    source_language: str,
    empty_placeholder: str = EMPTY_PLACEHOLDER,
) -> ItemPresentation:
    """Derive all display attributes of *node* for the given mode."""
    return ItemPresentation(
        label=label_for(node, flatten=flatten),
        description=description_for(node, empty_placeholder=empty_placeholder),
        tooltip=node.keypath,
        collapsible=is_collapsible(node),
        icon=icon_for(node),
        context_value=context_value_for(node, source_language=source_language),
    )


@dataclass(frozen=True, slots=True)
class LocaleTreeItem:
    """A node bound to the flatten mode and source language it was produced under."""

    node: Node
    flatten: bool = False
    source_language: str = "en"
    empty_placeholder: str = EMPTY_PLACEHOLDER

    def presentation(self) -> ItemPresentation:
        return present(
            self.node,
            flatten=self.flatten,
            source_language=self.source_language,
            empty_placeholder=self.empty_placeholder,
        )

    @property
    def keypath(self) -> str:
        return self.node.keypath

    @property
    def label(self) -> str:
        return label_for(self.node, flatten=self.flatten)

    @property
    def description(self) -> str:
        return description_for(self.node, empty_placeholder=self.empty_placeholder)

    @property
    def tooltip(self) -> str:
        return self.node.keypath

    @property
    def collapsible(self) -> bool:
        return is_collapsible(self.node)

    @property
    def icon(self) -> str | None:
        return icon_for(self.node)

    @property
    def context_value(self) -> str:
        return context_value_for(self.node, source_language=self.source_language)
