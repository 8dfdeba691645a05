"""
C# parser adapter implementation.

This module provides an adapter that parses C# source text with
tree-sitter-c-sharp and extracts the structural model the synthesizer needs:
namespaces, using directives, classes, constructors, methods and parameters.
Type names are kept as the text written in source.
"""

import logging
import threading
from collections.abc import Iterator

import tree_sitter_c_sharp
from tree_sitter import Language, Node, Parser

from ...domain.models import (
    Constructor,
    Method,
    Parameter,
    ParseError,
    ReturnType,
    SourceClass,
    SourceFile,
    UsingDirective,
    Visibility,
)

logger = logging.getLogger(__name__)

CSHARP_LANGUAGE = Language(tree_sitter_c_sharp.language())

_NAMESPACE_NODES = {"namespace_declaration", "file_scoped_namespace_declaration"}
_PARAMETER_MODIFIERS = {"this", "ref", "out", "in", "params", "scoped", "readonly"}
_VISIBILITY_ORDER = (
    ("public", Visibility.PUBLIC),
    ("protected", Visibility.PROTECTED),
    ("internal", Visibility.INTERNAL),
    ("private", Visibility.PRIVATE),
)


def _normalize(text: str) -> str:
    """Collapse whitespace so multi-line type names compare as written."""
    return " ".join(text.split())


class CSharpParser:
    """
    Adapter for parsing C# source text.

    Implements the ParserPort interface. A tree-sitter Parser is not safe to
    share between threads, so each worker thread gets its own instance.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _parser(self) -> Parser:
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = Parser(CSHARP_LANGUAGE)
            self._local.parser = parser
        return parser

    def _parse_tree(self, text: str, path: str | None) -> tuple[Node, bytes]:
        source = text.encode("utf-8")
        try:
            tree = self._parser().parse(source)
        except Exception as e:
            raise ParseError(f"Failed to parse {path or '<text>'}: {e}", path=path) from e

        root = tree.root_node
        if root.has_error:
            line = self._first_error_line(root)
            location = f" near line {line}" if line else ""
            raise ParseError(
                f"Invalid C# syntax in {path or '<text>'}{location}", path=path
            )
        return root, source

    def parse(self, text: str, path: str | None = None) -> SourceFile:
        """
        Parse C# source text into a SourceFile.

        Args:
            text: C# source code
            path: Optional originating path, used in error messages

        Returns:
            SourceFile with the first namespace, every using directive and all
            class declarations (nested ones included) in document order

        Raises:
            ParseError: If the text is not valid C#
        """
        root, source = self._parse_tree(text, path)

        usings = [
            self._using_directive(node, source)
            for node in self._walk(root)
            if node.type == "using_directive"
        ]
        file_namespace = next(
            (
                self._namespace_name(node, source)
                for node in self._walk(root)
                if node.type in _NAMESPACE_NODES
            ),
            None,
        )
        classes = list(self._collect_classes(root, source, None))

        logger.debug(
            "Parsed %s: %d class(es), %d using(s)",
            path or "<text>",
            len(classes),
            len(usings),
        )
        return SourceFile(namespace=file_namespace, usings=usings, classes=classes)

    def first_class_name(self, text: str) -> str:
        """Return the identifier of the first class declared in ``text``."""
        root, source = self._parse_tree(text, None)
        for node in self._walk(root):
            if node.type == "class_declaration":
                name = node.child_by_field_name("name")
                if name is not None:
                    return self._text(name, source)
        raise ParseError("No class declaration found in generated unit")

    # ------------------------------------------------------------------
    # Tree walking
    # ------------------------------------------------------------------

    @staticmethod
    def _text(node: Node, source: bytes) -> str:
        return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def _walk(node: Node) -> Iterator[Node]:
        """Pre-order traversal of the descendants of ``node``."""
        stack = list(reversed(node.children))
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    @staticmethod
    def _first_error_line(root: Node) -> int | None:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node.start_point[0] + 1
            stack.extend(reversed(node.children))
        return None

    def _namespace_name(self, node: Node, source: bytes) -> str:
        name = node.child_by_field_name("name")
        return "".join(self._text(name, source).split()) if name is not None else ""

    def _collect_classes(
        self, node: Node, source: bytes, namespace: str | None
    ) -> Iterator[SourceClass]:
        file_scoped: str | None = None
        for child in node.children:
            if child.type == "file_scoped_namespace_declaration":
                # Members follow as siblings in newer grammars, as children in older ones.
                file_scoped = self._qualify(namespace, self._namespace_name(child, source))
                yield from self._collect_classes(child, source, file_scoped)
                continue

            current = file_scoped or namespace
            if child.type == "namespace_declaration":
                inner = self._qualify(current, self._namespace_name(child, source))
                yield from self._collect_classes(child, source, inner)
            elif child.type == "class_declaration":
                yield self._source_class(child, source, current)
                yield from self._collect_classes(child, source, current)
            elif child.type == "declaration_list":
                # Namespace and class bodies; member bodies are never entered
                yield from self._collect_classes(child, source, current)

    @staticmethod
    def _qualify(outer: str | None, inner: str) -> str | None:
        if not inner:
            return outer
        return f"{outer}.{inner}" if outer else inner

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _using_directive(self, node: Node, source: bytes) -> UsingDirective:
        text = _normalize(self._text(node, source)).rstrip(";").strip()
        is_global = text.startswith("global ")
        if is_global:
            text = text[len("global ") :].strip()
        text = text[len("using") :].strip()
        is_static = text.startswith("static ")
        if is_static:
            text = text[len("static ") :].strip()

        alias = None
        if "=" in text:
            alias, text = (part.strip() for part in text.split("=", 1))
        return UsingDirective(
            name=text, alias=alias, is_static=is_static, is_global=is_global
        )

    def _source_class(self, node: Node, source: bytes, namespace: str | None) -> SourceClass:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            raise ParseError("Class declaration without a name")

        constructors: list[Constructor] = []
        methods: list[Method] = []
        # Only declared constructors count; a primary constructor parameter list is ignored
        body = node.child_by_field_name("body")
        members = body.named_children if body is not None else []
        for member in members:
            if member.type == "constructor_declaration":
                constructors.append(self._constructor(member, source))
            elif member.type == "method_declaration":
                methods.append(self._method(member, source))

        return SourceClass(
            name=self._text(name_node, source),
            namespace=namespace,
            constructors=constructors,
            methods=methods,
        )

    def _modifiers(self, node: Node, source: bytes) -> set[str]:
        return {
            self._text(child, source).strip()
            for child in node.children
            if child.type == "modifier"
        }

    @staticmethod
    def _visibility(modifiers: set[str]) -> Visibility:
        for keyword, visibility in _VISIBILITY_ORDER:
            if keyword in modifiers:
                return visibility
        return Visibility.PRIVATE

    def _constructor(self, node: Node, source: bytes) -> Constructor:
        modifiers = self._modifiers(node, source)
        return Constructor(
            parameters=self._parameters(node, source),
            visibility=self._visibility(modifiers),
        )

    def _method(self, node: Node, source: bytes) -> Method:
        modifiers = self._modifiers(node, source)
        name_node = node.child_by_field_name("name")
        returns = node.child_by_field_name("returns") or node.child_by_field_name("type")
        if name_node is None or returns is None:
            raise ParseError(f"Malformed method declaration: {self._text(node, source)[:80]}")

        return Method(
            name=self._text(name_node, source),
            parameters=self._parameters(node, source),
            return_type=ReturnType.from_type_name(self._text(returns, source)),
            is_async="async" in modifiers,
            visibility=self._visibility(modifiers),
            is_static="static" in modifiers,
        )

    def _parameters(self, node: Node, source: bytes) -> list[Parameter]:
        parameter_list = node.child_by_field_name("parameters")
        if parameter_list is None:
            return []
        return [
            self._parameter(child, source)
            for child in parameter_list.named_children
            if child.type == "parameter"
        ]

    def _parameter(self, node: Node, source: bytes) -> Parameter:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            raise ParseError(f"Parameter without a name: {self._text(node, source)}")

        type_node = node.child_by_field_name("type")
        if type_node is not None:
            type_name = _normalize(self._text(type_node, source))
        else:
            type_name = self._leading_type_text(node, name_node, source)
        return Parameter(name=self._text(name_node, source), type_name=type_name)

    def _leading_type_text(self, node: Node, name_node: Node, source: bytes) -> str:
        """Recover the type from the text before the name when no type field exists."""
        parts = [
            self._text(child, source)
            for child in node.children
            if child.end_byte <= name_node.start_byte and child.type != "attribute_list"
        ]
        words = _normalize(" ".join(parts)).split(" ")
        while words and words[0] in _PARAMETER_MODIFIERS:
            words.pop(0)
        return " ".join(words)
