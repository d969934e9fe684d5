from __future__ import annotations


class SchemaError(Exception):
    """Base class for structural problems in an ATDF document."""


class MissingAttribute(SchemaError):
    def __init__(self, tag: str, attribute: str) -> None:
        super().__init__(f"<{tag}> is missing required attribute '{attribute}'")
        self.tag = tag
        self.attribute = attribute


class MissingChild(SchemaError):
    def __init__(self, parent: str, child: str) -> None:
        super().__init__(f"<{parent}> has no <{child}> child")
        self.parent = parent
        self.child = child


class MissingNamedChild(SchemaError):
    def __init__(self, parent: str, child: str, name: str) -> None:
        super().__init__(f"<{parent}> has no <{child}> named '{name}'")
        self.parent = parent
        self.child = child
        self.name = name


class InvalidValue(SchemaError):
    def __init__(self, tag: str, attribute: str, value: str) -> None:
        super().__init__(f"<{tag}> has invalid {attribute}='{value}'")
        self.tag = tag
        self.attribute = attribute
        self.value = value


class InvalidDocument(SchemaError):
    def __init__(self, tag: str) -> None:
        super().__init__(f"not an ATDF document (root element is <{tag}>)")
        self.tag = tag


class LiteralError(ValueError):
    """An integer literal that does not decode to an unsigned 32-bit value."""

    def __init__(self, literal: str, reason: str = "invalid integer literal") -> None:
        super().__init__(f"{reason}: '{literal}'")
        self.literal = literal
