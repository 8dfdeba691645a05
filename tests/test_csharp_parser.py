"""Tests for the tree-sitter C# parser adapter."""

import pytest

from sharpscaffold.adapters.parsing.csharp_parser import CSharpParser
from sharpscaffold.domain.models import ParseError, ReturnKind, Visibility


class TestCSharpParser:
    """Test structural extraction from C# source."""

    def setup_method(self):
        self.parser = CSharpParser()

    def test_parses_test_class1(self, test_class1_source, test_class1_model):
        """Test that the fixture parses into the hand-built model."""
        source_file = self.parser.parse(test_class1_source, "TestClass1.cs")

        assert source_file == test_class1_model

    def test_parses_constructors(self, fixtures_dir):
        text = (fixtures_dir / "TestClass2.cs").read_text(encoding="utf-8")

        source_class = self.parser.parse(text).classes[0]

        assert source_class.name == "TestClass2"
        assert [
            [(p.type_name, p.name) for p in c.parameters] for c in source_class.constructors
        ] == [
            [("IEnumerable", "param1")],
            [("IEnumerable", "param1"), ("ICollection", "param2")],
        ]
        assert source_class.constructors[0].visibility == Visibility.PUBLIC

    def test_multiple_classes_and_modifiers(self, fixtures_dir):
        text = (fixtures_dir / "TwoClasses.cs").read_text(encoding="utf-8")

        source_file = self.parser.parse(text)

        assert source_file.namespace == "Shop.Orders"
        assert [c.name for c in source_file.classes] == ["OrderService", "Clock"]
        methods = {m.name + str(len(m.parameters)): m for m in source_file.classes[0].methods}
        assert methods["Audit0"].visibility == Visibility.PRIVATE
        assert methods["Create0"].is_static is True
        assert methods["Find1"].return_type.kind == ReturnKind.VALUE

    def test_generic_types_kept_as_written(self):
        text = """
namespace App
{
    public class Repo
    {
        public async Task<Dictionary<string, List<int>>> Load(IDictionary<string, int> map, int[] ids, int? limit)
        {
            return null;
        }
    }
}
"""
        method = self.parser.parse(text).classes[0].methods[0]

        assert method.is_async is True
        assert method.return_type.kind == ReturnKind.TASK_OF
        assert method.return_type.wrapped == "Dictionary<string, List<int>>"
        assert [(p.type_name, p.name) for p in method.parameters] == [
            ("IDictionary<string, int>", "map"),
            ("int[]", "ids"),
            ("int?", "limit"),
        ]

    def test_file_scoped_namespace_and_no_namespace(self):
        scoped = self.parser.parse("namespace App.Core;\n\npublic class A { }\n")
        bare = self.parser.parse("public class B { }\n")

        assert scoped.namespace == "App.Core"
        assert scoped.classes[0].namespace == "App.Core"
        assert bare.namespace is None
        assert bare.classes[0].namespace is None

    def test_nested_namespaces_and_classes(self):
        text = """
namespace Outer
{
    namespace Inner
    {
        public class Host
        {
            public class Nested { }
        }
    }
}
"""
        source_file = self.parser.parse(text)

        assert source_file.namespace == "Outer"
        assert [(c.name, c.namespace) for c in source_file.classes] == [
            ("Host", "Outer.Inner"),
            ("Nested", "Outer.Inner"),
        ]

    def test_using_forms(self):
        text = """
global using App.Core;
using static System.Math;
using Json = System.Text.Json;

namespace App
{
    using System.Linq;

    public class A { }
}
"""
        usings = self.parser.parse(text).usings

        assert [(u.name, u.alias, u.is_static, u.is_global) for u in usings] == [
            ("App.Core", None, False, True),
            ("System.Math", None, True, False),
            ("System.Text.Json", "Json", False, False),
            ("System.Linq", None, False, False),
        ]

    def test_deeply_nested_expression_body(self):
        """Test that long expressions inside members do not exhaust the stack."""
        concatenation = " + ".join(['"x"'] * 3000)
        text = (
            "namespace Deep\n{\n    public class Long\n    {\n"
            f"        public string Build() => {concatenation};\n"
            "    }\n}\n"
        )

        source_file = self.parser.parse(text, "Long.cs")

        assert [c.name for c in source_file.classes] == ["Long"]
        assert source_file.classes[0].methods[0].name == "Build"
        assert self.parser.first_class_name(text) == "Long"

    def test_verbatim_parameter_names(self):
        text = "public class Ev { public Ev(IBus @event) { } public void On(int @class) { } }"

        source_class = self.parser.parse(text).classes[0]

        assert source_class.constructors[0].parameters[0].name == "@event"
        assert source_class.methods[0].parameters[0].name == "@class"

    def test_primary_constructor_is_not_scaffolded(self):
        text = "public class P(IRepo repo) { public void Run() { } }"

        source_class = self.parser.parse(text).classes[0]

        assert source_class.name == "P"
        assert source_class.constructors == []
        assert [m.name for m in source_class.methods] == ["Run"]

    def test_invalid_syntax_raises(self):
        with pytest.raises(ParseError, match="Invalid C# syntax in Broken.cs"):
            self.parser.parse("public class { void (", "Broken.cs")

    def test_first_class_name(self):
        text = "namespace N.Tests\n{\n    public class FooTests\n    {\n    }\n}\n"
        assert self.parser.first_class_name(text) == "FooTests"

    def test_first_class_name_without_class(self):
        with pytest.raises(ParseError, match="No class declaration"):
            self.parser.first_class_name("namespace N { }")
