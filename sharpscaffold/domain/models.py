"""
Domain models for the sharpscaffold system.

This module contains the core domain models using Pydantic for validation
and serialization. Two families live here: the read-only structural model of
a parsed C# source file, and the write-once model of a synthesized test unit
that the renderer turns back into text.
"""

import re
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

_GENERIC_TYPE_RE = re.compile(r"^(?P<head>[\w.]+)\s*<(?P<args>.+)>$", re.DOTALL)
_TASK_TYPE_NAMES = {
    "Task",
    "ValueTask",
    "System.Threading.Tasks.Task",
    "System.Threading.Tasks.ValueTask",
}


class ScaffoldError(Exception):
    """Base exception for sharpscaffold domain errors."""

    pass


class FileReadError(ScaffoldError):
    """Raised when an input path is missing or cannot be read."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ParseError(ScaffoldError):
    """Raised when source text is not valid C#."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class RenderError(ScaffoldError):
    """Raised when a test unit cannot be rendered to text."""

    pass


class WriteError(ScaffoldError):
    """Raised when a generated unit cannot be persisted."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class PipelineError(ScaffoldError):
    """Aggregates every error recorded during one pipeline run."""

    def __init__(self, errors: list[Exception]) -> None:
        self.errors = list(errors)
        details = "; ".join(f"{type(e).__name__}: {e}" for e in self.errors)
        super().__init__(f"{len(self.errors)} error(s) during generation: {details}")


# ---------------------------------------------------------------------------
# Source model
# ---------------------------------------------------------------------------


class Visibility(str, Enum):
    """Declared accessibility of a member."""

    PUBLIC = "public"
    PROTECTED = "protected"
    INTERNAL = "internal"
    PRIVATE = "private"


class ReturnKind(str, Enum):
    """Shape of a method's declared return type."""

    VOID = "void"
    TASK = "task"
    TASK_OF = "task_of"
    VALUE = "value"


def split_type_arguments(text: str) -> list[str]:
    """Split a generic argument list on top-level commas."""
    args: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char in "<([":
            depth += 1
        elif char in ">)]":
            depth -= 1
        if char == "," and depth == 0:
            args.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    tail = "".join(current).strip()
    if tail:
        args.append(tail)
    return args


class ReturnType(BaseModel):
    """
    Descriptor of a method's declared return type.

    ``type_name`` always holds the declared text; ``wrapped`` holds the result
    type of a parametrized ``Task<T>``/``ValueTask<T>``.
    """

    model_config = ConfigDict(frozen=True)

    kind: ReturnKind
    type_name: str
    wrapped: str | None = None

    @classmethod
    def from_type_name(cls, type_name: str) -> "ReturnType":
        """Classify a return type from its source text."""
        text = " ".join(type_name.split())
        if text == "void":
            return cls(kind=ReturnKind.VOID, type_name=text)
        if text in _TASK_TYPE_NAMES:
            return cls(kind=ReturnKind.TASK, type_name=text)

        match = _GENERIC_TYPE_RE.match(text)
        if match and match.group("head") in _TASK_TYPE_NAMES:
            args = split_type_arguments(match.group("args"))
            if len(args) == 1:
                return cls(kind=ReturnKind.TASK_OF, type_name=text, wrapped=args[0])

        return cls(kind=ReturnKind.VALUE, type_name=text)


class Parameter(BaseModel):
    """A single constructor or method parameter."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Parameter identifier")
    type_name: str = Field(..., description="Declared type, as written in source")


class Constructor(BaseModel):
    """A constructor declaration."""

    model_config = ConfigDict(frozen=True)

    parameters: list[Parameter] = Field(default_factory=list)
    visibility: Visibility = Visibility.PRIVATE


class Method(BaseModel):
    """A method declaration."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    parameters: list[Parameter] = Field(default_factory=list)
    return_type: ReturnType
    is_async: bool = False
    visibility: Visibility = Visibility.PRIVATE
    is_static: bool = False

    @property
    def is_scaffoldable(self) -> bool:
        """Only public instance methods get a generated test."""
        return self.visibility == Visibility.PUBLIC and not self.is_static


class UsingDirective(BaseModel):
    """A ``using`` directive; ``name`` is the qualified name used for dedup."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    alias: str | None = None
    is_static: bool = False
    is_global: bool = False


class SourceClass(BaseModel):
    """Structural view of one class declaration."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    namespace: str | None = None
    constructors: list[Constructor] = Field(default_factory=list)
    methods: list[Method] = Field(default_factory=list)


class SourceFile(BaseModel):
    """Structural view of one parsed source file."""

    model_config = ConfigDict(frozen=True)

    namespace: str | None = None
    usings: list[UsingDirective] = Field(default_factory=list)
    classes: list[SourceClass] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Synthesized unit model
# ---------------------------------------------------------------------------


class TypeRef(BaseModel):
    """A type as used in generated code: plain ``T`` or ``Mock<T>``."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    is_mock: bool = False

    @classmethod
    def plain(cls, name: str) -> "TypeRef":
        return cls(name=name)

    @classmethod
    def mock_of(cls, name: str) -> "TypeRef":
        return cls(name=name, is_mock=True)


class IdentifierName(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["identifier"] = "identifier"
    name: str = Field(..., min_length=1)


class LiteralExpression(BaseModel):
    """A ``bool`` or ``string`` literal."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["literal"] = "literal"
    value: bool | str


class DefaultExpression(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["default"] = "default"
    type: TypeRef


class MemberAccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["member_access"] = "member_access"
    target: "Expression"
    member: str = Field(..., min_length=1)


class Invocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["invocation"] = "invocation"
    callee: "Expression"
    arguments: list["Expression"] = Field(default_factory=list)


class ObjectCreation(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["object_creation"] = "object_creation"
    type: TypeRef
    arguments: list["Expression"] = Field(default_factory=list)


class AwaitExpression(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["await"] = "await"
    operand: "Expression"


class Assignment(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["assignment"] = "assignment"
    target: "Expression"
    value: "Expression"


Expression = Annotated[
    Union[
        IdentifierName,
        LiteralExpression,
        DefaultExpression,
        MemberAccess,
        Invocation,
        ObjectCreation,
        AwaitExpression,
        Assignment,
    ],
    Field(discriminator="kind"),
]


class LocalDeclaration(BaseModel):
    """``T name = initializer;``"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["local_declaration"] = "local_declaration"
    type: TypeRef
    name: str = Field(..., min_length=1)
    initializer: Expression


class ExpressionStatement(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["expression_statement"] = "expression_statement"
    expression: Expression


Statement = Annotated[
    Union[LocalDeclaration, ExpressionStatement],
    Field(discriminator="kind"),
]


class FieldDeclaration(BaseModel):
    """A private field of the generated test class."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    type: TypeRef


class UnitConstructor(BaseModel):
    """The generated public parameterless constructor."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    body: list[Statement] = Field(default_factory=list)


class UnitMethod(BaseModel):
    """One generated test method."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    is_async: bool = False
    attribute: str = "Fact"
    body: list[Statement] = Field(default_factory=list)


class SynthesizedUnit(BaseModel):
    """
    Represents the synthesized test class for one source class.

    Built once by the unit synthesizer and consumed only by a renderer.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str = Field(..., min_length=1)
    usings: list[UsingDirective] = Field(default_factory=list)
    class_name: str = Field(..., min_length=1)
    fields: list[FieldDeclaration] = Field(default_factory=list)
    constructor: UnitConstructor
    methods: list[UnitMethod] = Field(default_factory=list)

    @field_validator("methods")
    @classmethod
    def validate_unique_method_names(cls, v: list[UnitMethod]) -> list[UnitMethod]:
        """Validate that no two test methods share a name."""
        names = [m.name for m in v]
        if len(names) != len(set(names)):
            raise ValueError("Test method names must be unique within a unit")
        return v


class GenerationReport(BaseModel):
    """Summary returned by a successful pipeline run."""

    model_config = ConfigDict(frozen=True)

    files_read: int = Field(0, ge=0)
    units_generated: int = Field(0, ge=0)
    written_files: list[str] = Field(default_factory=list)
    dry_run: bool = False


for _model in (MemberAccess, Invocation, ObjectCreation, AwaitExpression, Assignment,
               LocalDeclaration, ExpressionStatement, UnitConstructor, UnitMethod, SynthesizedUnit):
    _model.model_rebuild()
