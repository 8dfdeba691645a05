"""
Dependency injection scaffolding for generated test classes.

Builds the private fields and the setup constructor that instantiate the
class under test. Interface-typed constructor dependencies are replaced by
``Mock<T>`` doubles; every other dependency is constructed directly.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from ....domain.models import (
    Assignment,
    Constructor,
    ExpressionStatement,
    FieldDeclaration,
    IdentifierName,
    MemberAccess,
    ObjectCreation,
    Parameter,
    SourceClass,
    TypeRef,
    UnitConstructor,
)

logger = logging.getLogger(__name__)

# Conventional interface naming (IService, IEnumerable). A naming heuristic,
# not a type-system check: concrete types named like IOStream get mocked too.
INTERFACE_NAME_RE = re.compile(r"I[A-Z]\w*")

MOCK_OBJECT_MEMBER = "Object"


def is_mockable_interface(type_name: str) -> bool:
    """Return True when ``type_name`` follows the ``I<Upper>...`` convention."""
    return INTERFACE_NAME_RE.match(type_name) is not None


def field_name_for(identifier: str) -> str:
    """``param`` -> ``_param``; a verbatim ``@event`` becomes ``_event``."""
    return "_" + identifier.lstrip("@")


def sut_field_name(class_name: str) -> str:
    """``_`` + lower-camel-case class name, e.g. ``OrderService`` -> ``_orderService``."""
    name = class_name.lstrip("@")
    return f"_{name[:1].lower()}{name[1:]}"


def select_biggest_constructor(constructors: list[Constructor]) -> Constructor | None:
    """Pick the constructor with the most parameters; the first one wins ties."""
    biggest: Constructor | None = None
    for constructor in constructors:
        if biggest is None or len(constructor.parameters) > len(biggest.parameters):
            biggest = constructor
    return biggest


@dataclass
class DependencyScaffold:
    """Fields (dependencies first, system under test last) and the setup constructor."""

    fields: list[FieldDeclaration] = field(default_factory=list)
    constructor: UnitConstructor | None = None
    sut_field: str = ""


class DependencyInjectionScaffolder:
    """Builds constructor-dependency scaffolding for one source class."""

    def __init__(self, test_class_suffix: str = "Tests") -> None:
        self._suffix = test_class_suffix

    def scaffold(self, source_class: SourceClass) -> DependencyScaffold:
        fields: list[FieldDeclaration] = []
        statements: list[ExpressionStatement] = []
        arguments = []

        constructor = select_biggest_constructor(source_class.constructors)
        parameters: list[Parameter] = constructor.parameters if constructor else []

        for parameter in parameters:
            name = field_name_for(parameter.name)
            identifier = IdentifierName(name=name)

            if is_mockable_interface(parameter.type_name):
                field_type = TypeRef.mock_of(parameter.type_name)
                arguments.append(MemberAccess(target=identifier, member=MOCK_OBJECT_MEMBER))
            else:
                field_type = TypeRef.plain(parameter.type_name)
                arguments.append(identifier)

            fields.append(FieldDeclaration(name=name, type=field_type))
            statements.append(
                ExpressionStatement(
                    expression=Assignment(
                        target=identifier,
                        value=ObjectCreation(type=field_type),
                    )
                )
            )

        sut_name = sut_field_name(source_class.name)
        sut_type = TypeRef.plain(source_class.name)
        fields.append(FieldDeclaration(name=sut_name, type=sut_type))
        statements.append(
            ExpressionStatement(
                expression=Assignment(
                    target=IdentifierName(name=sut_name),
                    value=ObjectCreation(type=sut_type, arguments=arguments),
                )
            )
        )

        logger.debug(
            "Scaffolded %d dependencies for %s", len(parameters), source_class.name
        )

        return DependencyScaffold(
            fields=fields,
            constructor=UnitConstructor(
                name=f"{source_class.name}{self._suffix}", body=statements
            ),
            sut_field=sut_name,
        )
