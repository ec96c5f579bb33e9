from cmakefinch.nodes import (
    Block,
    CommandCall,
    CPMAddPackage,
    CPMFindPackage,
    CPMSourceType,
    CPMVersion,
    IfStatement,
    ForEachStatement,
    LoopType,
    StringLiteral,
    Variable,
)
from cmakefinch.source_buffer import SourceLocation


def test_equality_ignores_location():
    a = StringLiteral("x", location=SourceLocation("a.txt", 3, 4, 10))
    b = StringLiteral("x", location=SourceLocation("b.txt", 1, 1, 0))
    assert a == b
    assert a.location != b.location


def test_equality_compares_fields():
    assert StringLiteral("x", True) != StringLiteral("x", False)
    assert Variable("A") != Variable("B")


def test_default_location_is_start_of_unnamed_file():
    node = Variable("X")
    assert node.location == SourceLocation("", 1, 1, 0)


def test_add_package_defaults():
    pkg = CPMAddPackage("fmt")
    assert pkg.source_type is CPMSourceType.NONE
    assert pkg.source == ""
    assert pkg.version is None
    assert pkg.options == {}


def test_add_package_set_source():
    pkg = CPMAddPackage("fmt")
    pkg.set_source(CPMSourceType.GITHUB, "fmtlib/fmt")
    assert pkg.source_type is CPMSourceType.GITHUB
    assert pkg.source == "fmtlib/fmt"
    pkg.set_source(CPMSourceType.URL, "archive.zip")
    assert pkg.source_type is CPMSourceType.URL
    assert pkg.source == "archive.zip"


def test_add_option_keeps_order_and_overwrites():
    pkg = CPMAddPackage("lib")
    pkg.add_option("B", "1")
    pkg.add_option("A", "2")
    pkg.add_option("B", "3")
    assert list(pkg.options.items()) == [("B", "3"), ("A", "2")]


def test_version_assignment():
    pkg = CPMAddPackage("lib")
    pkg.version = CPMVersion("1.2.3", exact=True)
    assert pkg.version.version == "1.2.3"
    assert pkg.version.exact is True
    assert pkg.version.git_tag is None


def test_find_package_components():
    pkg = CPMFindPackage("Boost")
    pkg.add_component("system")
    pkg.add_component("filesystem")
    assert pkg.components == ["system", "filesystem"]


def test_mutable_defaults_are_not_shared():
    first = CPMFindPackage("a")
    second = CPMFindPackage("b")
    first.add_component("c")
    assert second.components == []
    assert Block().statements is not Block().statements


def test_structural_nodes():
    call = CommandCall("project", [StringLiteral("demo")])
    stmt = IfStatement(Variable("X"), [call])
    assert stmt.then_block[0].name == "project"
    assert stmt.else_block == []
    loop = ForEachStatement(["v"])
    assert loop.loop_type is LoopType.IN_ITEMS
    assert loop.items == [] and loop.body == []