"""
C# renderer adapter implementation.

Formats a SynthesizedUnit as C# source laid out like Roslyn's
``NormalizeWhitespace``: four-space indentation, braces on their own lines,
using directives first, a blank line before the namespace and between members
that have bodies. Output depends only on the unit, so rendering the same
unit twice yields identical text.
"""

import logging
import re

from ...domain.models import (
    Assignment,
    AwaitExpression,
    DefaultExpression,
    ExpressionStatement,
    FieldDeclaration,
    IdentifierName,
    Invocation,
    LiteralExpression,
    LocalDeclaration,
    MemberAccess,
    ObjectCreation,
    RenderError,
    SynthesizedUnit,
    TypeRef,
    UnitConstructor,
    UnitMethod,
    UsingDirective,
)

logger = logging.getLogger(__name__)

MOCK_TYPE = "Mock"
NEWLINES = {"lf": "\n", "crlf": "\r\n"}

_IDENTIFIER_RE = re.compile(r"@?[^\W\d]\w*")
_QUALIFIED_NAME_RE = re.compile(r"@?[^\W\d]\w*(\.@?[^\W\d]\w*)*")
_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


class CSharpRenderer:
    """
    Renderer producing C# text from a synthesized unit.

    Implements the RendererPort interface.
    """

    def __init__(self, indent: str = "    ", newline: str = "lf") -> None:
        if newline not in NEWLINES:
            raise ValueError(f"Unknown newline style: {newline}")
        self._indent = indent
        self._newline = NEWLINES[newline]

    def render(self, unit: SynthesizedUnit) -> str:
        """
        Render ``unit`` as C# source text.

        Raises:
            RenderError: If the unit contains identifiers that are not valid C#
        """
        self._check_identifier(unit.class_name, "class name")
        self._check_qualified_name(unit.namespace, "namespace")

        # Global usings must precede all other usings in a compilation unit
        usings = sorted(unit.usings, key=lambda u: not u.is_global)
        lines: list[str] = [self._using(u) for u in usings]
        if lines:
            lines.append("")
        lines.append(f"namespace {unit.namespace}")
        lines.append("{")
        lines.extend(self._indented(self._class(unit), 1))
        lines.append("}")

        text = self._newline.join(lines) + self._newline
        logger.debug("Rendered %s (%d lines)", unit.class_name, len(lines))
        return text

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _using(self, directive: UsingDirective) -> str:
        parts = []
        if directive.is_global:
            parts.append("global")
        parts.append("using")
        if directive.is_static:
            parts.append("static")
        if directive.alias:
            parts.append(f"{directive.alias} =")
        parts.append(directive.name)
        return " ".join(parts) + ";"

    def _class(self, unit: SynthesizedUnit) -> list[str]:
        members: list[list[str]] = []
        if unit.fields:
            members.append([self._field(f) for f in unit.fields])
        members.append(self._constructor(unit.constructor))
        members.extend(self._method(m) for m in unit.methods)

        body: list[str] = []
        for index, member in enumerate(members):
            if index:
                body.append("")
            body.extend(member)

        return [f"public class {unit.class_name}", "{", *self._indented(body, 1), "}"]

    def _field(self, field: FieldDeclaration) -> str:
        self._check_identifier(field.name, "field name")
        return f"private {self._type(field.type)} {field.name};"

    def _constructor(self, constructor: UnitConstructor) -> list[str]:
        self._check_identifier(constructor.name, "constructor name")
        return [
            f"public {constructor.name}()",
            *self._block(constructor.body),
        ]

    def _method(self, method: UnitMethod) -> list[str]:
        self._check_identifier(method.name, "method name")
        signature = "public async Task" if method.is_async else "public void"
        return [
            f"[{method.attribute}]",
            f"{signature} {method.name}()",
            *self._block(method.body),
        ]

    def _block(self, statements) -> list[str]:
        return ["{", *self._indented([self._statement(s) for s in statements], 1), "}"]

    def _indented(self, lines: list[str], depth: int) -> list[str]:
        prefix = self._indent * depth
        return [f"{prefix}{line}" if line else "" for line in lines]

    # ------------------------------------------------------------------
    # Statements and expressions
    # ------------------------------------------------------------------

    def _statement(self, statement) -> str:
        if isinstance(statement, LocalDeclaration):
            self._check_identifier(statement.name, "local name")
            return (
                f"{self._type(statement.type)} {statement.name} = "
                f"{self._expression(statement.initializer)};"
            )
        if isinstance(statement, ExpressionStatement):
            return f"{self._expression(statement.expression)};"
        raise RenderError(f"Unsupported statement: {type(statement).__name__}")

    def _expression(self, expression) -> str:
        if isinstance(expression, IdentifierName):
            return expression.name
        if isinstance(expression, LiteralExpression):
            return self._literal(expression.value)
        if isinstance(expression, DefaultExpression):
            return f"default({self._type(expression.type)})"
        if isinstance(expression, MemberAccess):
            return f"{self._expression(expression.target)}.{expression.member}"
        if isinstance(expression, Invocation):
            return f"{self._expression(expression.callee)}({self._arguments(expression.arguments)})"
        if isinstance(expression, ObjectCreation):
            return f"new {self._type(expression.type)}({self._arguments(expression.arguments)})"
        if isinstance(expression, AwaitExpression):
            return f"await {self._expression(expression.operand)}"
        if isinstance(expression, Assignment):
            return f"{self._expression(expression.target)} = {self._expression(expression.value)}"
        raise RenderError(f"Unsupported expression: {type(expression).__name__}")

    def _arguments(self, arguments) -> str:
        return ", ".join(self._expression(a) for a in arguments)

    @staticmethod
    def _type(type_ref: TypeRef) -> str:
        if not type_ref.name.strip():
            raise RenderError("Empty type name")
        return f"{MOCK_TYPE}<{type_ref.name}>" if type_ref.is_mock else type_ref.name

    @staticmethod
    def _literal(value: bool | str) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        escaped = "".join(_STRING_ESCAPES.get(char, char) for char in value)
        return f'"{escaped}"'

    @staticmethod
    def _check_identifier(name: str, what: str) -> None:
        if not _IDENTIFIER_RE.fullmatch(name):
            raise RenderError(f"Invalid {what}: {name!r}")

    @staticmethod
    def _check_qualified_name(name: str, what: str) -> None:
        if not _QUALIFIED_NAME_RE.fullmatch(name):
            raise RenderError(f"Invalid {what}: {name!r}")
