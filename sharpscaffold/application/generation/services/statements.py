"""
Arrange/act/assert synthesis for one generated test method.

Every value is a ``default(T)`` placeholder. Methods without a result get an
assertion that always fails, so the generated test stays red until someone
writes a real expectation.
"""

from __future__ import annotations

from dataclasses import dataclass

from ....domain.models import (
    AwaitExpression,
    DefaultExpression,
    ExpressionStatement,
    IdentifierName,
    Invocation,
    LiteralExpression,
    LocalDeclaration,
    MemberAccess,
    Method,
    ReturnKind,
    TypeRef,
    UnitMethod,
)

ACTUAL_NAME = "actual"
EXPECTED_NAME = "expected"
PLACEHOLDER_MESSAGE = "error"
TEST_ATTRIBUTE = "Fact"


@dataclass(frozen=True)
class MethodShape:
    """How a source method's result is treated by the generated test."""

    is_async: bool
    has_return: bool
    result_type: str | None
    awaitable: bool = False


def classify_method(method: Method) -> MethodShape:
    """
    Decide whether a method produces a result worth asserting on.

    ``void`` never does; neither does an async method returning a bare
    ``Task``. An async ``Task<T>`` yields ``T``; anything else (including a
    non-async method that returns a Task) yields its declared type.
    An ``async void`` method cannot be awaited, so its call stays bare.
    """
    return_type = method.return_type
    if return_type.kind == ReturnKind.VOID:
        return MethodShape(method.is_async, False, None)
    if method.is_async and return_type.kind == ReturnKind.TASK:
        return MethodShape(True, False, None, awaitable=True)
    if method.is_async and return_type.kind == ReturnKind.TASK_OF:
        return MethodShape(True, True, return_type.wrapped, awaitable=True)
    return MethodShape(
        method.is_async, True, return_type.type_name, awaitable=method.is_async
    )


class StatementSynthesizer:
    """Builds the body of one test method against the system-under-test field."""

    def __init__(self, sut_field: str) -> None:
        self._sut_field = sut_field

    def arrange(self, method: Method) -> list[LocalDeclaration]:
        return [
            LocalDeclaration(
                type=TypeRef.plain(parameter.type_name),
                name=parameter.name,
                initializer=DefaultExpression(type=TypeRef.plain(parameter.type_name)),
            )
            for parameter in method.parameters
        ]

    def act(self, method: Method, shape: MethodShape):
        call = Invocation(
            callee=MemberAccess(
                target=IdentifierName(name=self._sut_field), member=method.name
            ),
            arguments=[IdentifierName(name=p.name) for p in method.parameters],
        )
        expression = AwaitExpression(operand=call) if shape.awaitable else call

        if not shape.has_return:
            return ExpressionStatement(expression=expression)

        return LocalDeclaration(
            type=TypeRef.plain(shape.result_type),
            name=ACTUAL_NAME,
            initializer=expression,
        )

    def assert_(self, shape: MethodShape) -> list:
        if not shape.has_return:
            return [
                ExpressionStatement(
                    expression=_assert_call(
                        "True",
                        LiteralExpression(value=False),
                        LiteralExpression(value=PLACEHOLDER_MESSAGE),
                    )
                )
            ]

        result_type = TypeRef.plain(shape.result_type)
        return [
            LocalDeclaration(
                type=result_type,
                name=EXPECTED_NAME,
                initializer=DefaultExpression(type=result_type),
            ),
            ExpressionStatement(
                expression=_assert_call(
                    "Equal",
                    IdentifierName(name=EXPECTED_NAME),
                    IdentifierName(name=ACTUAL_NAME),
                )
            ),
        ]

    def synthesize(self, method: Method, test_name: str) -> UnitMethod:
        """Build the complete ``[Fact]`` test method for ``method``."""
        shape = classify_method(method)
        body = [*self.arrange(method), self.act(method, shape), *self.assert_(shape)]
        return UnitMethod(
            name=test_name,
            is_async=method.is_async,
            attribute=TEST_ATTRIBUTE,
            body=body,
        )


def _assert_call(member: str, *arguments) -> Invocation:
    return Invocation(
        callee=MemberAccess(target=IdentifierName(name="Assert"), member=member),
        arguments=list(arguments),
    )
