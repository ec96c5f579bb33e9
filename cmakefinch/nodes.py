"""Syntax tree nodes for CMake scripts and CPM.cmake package commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from cmakefinch.source_buffer import SourceLocation


@dataclass
class Node:
    """Base of every syntax tree node.

    The location is keyword-only and ignored by equality, so trees compare
    by structure alone.
    """

    location: SourceLocation = field(
        default_factory=SourceLocation, kw_only=True, compare=False
    )


@dataclass
class StringLiteral(Node):
    value: str
    quoted: bool = False


@dataclass
class Identifier(Node):
    name: str


@dataclass
class Variable(Node):
    name: str


@dataclass
class BooleanLiteral(Node):
    value: bool
    text: str


@dataclass
class NumberLiteral(Node):
    text: str
    value: Union[int, float]


@dataclass
class ListExpression(Node):
    elements: list[Node] = field(default_factory=list)


@dataclass
class BracketExpression(Node):
    content: Node
    is_bracket: bool = True


@dataclass
class CommandCall(Node):
    name: str
    arguments: list[Node] = field(default_factory=list)


@dataclass
class Block(Node):
    statements: list[Node] = field(default_factory=list)


@dataclass
class IfStatement(Node):
    condition: Node
    then_block: list[Node] = field(default_factory=list)
    else_block: list[Node] = field(default_factory=list)


class LoopType(Enum):
    IN_ITEMS = "IN ITEMS"
    IN_LISTS = "IN LISTS"
    RANGE = "RANGE"
    ZIP_LISTS = "IN ZIP_LISTS"


@dataclass
class ForEachStatement(Node):
    variables: list[str] = field(default_factory=list)
    loop_type: LoopType = LoopType.IN_ITEMS
    items: list[Node] = field(default_factory=list)
    body: list[Node] = field(default_factory=list)


@dataclass
class File(Node):
    filename: str
    statements: list[Node] = field(default_factory=list)


class CPMSourceType(Enum):
    NONE = "none"
    GITHUB = "github"
    GIT_URL = "git"
    URL = "url"


@dataclass
class CPMVersion:
    """A requested package version; exact for '@x', a minimum otherwise."""

    version: str = ""
    exact: bool = False
    git_tag: Optional[str] = None


@dataclass
class CPMAddPackage(Node):
    name: str
    source_type: CPMSourceType = CPMSourceType.NONE
    source: str = ""
    version: Optional[CPMVersion] = None
    options: dict[str, str] = field(default_factory=dict)

    def set_source(self, source_type: CPMSourceType, value: str) -> None:
        """Record where the package comes from."""
        self.source_type = source_type
        self.source = value

    def add_option(self, key: str, value: str) -> None:
        """Add a cache option passed to the package; a repeated key is overwritten."""
        self.options[key] = value


@dataclass
class CPMFindPackage(Node):
    name: str
    version: str = ""
    github_repository: str = ""
    git_tag: str = ""
    components: list[str] = field(default_factory=list)

    def add_component(self, component: str) -> None:
        self.components.append(component)


@dataclass
class CPMUsePackageLock(Node):
    path: str


@dataclass
class CPMDeclarePackage(Node):
    name: str
    version: str = ""
    github_repository: str = ""
    git_repository: str = ""