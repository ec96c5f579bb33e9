"""Recognition of CPM.cmake package commands in parsed argument lists."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from cmakefinch.lexer import ErrorCategory, ParseError
from cmakefinch.nodes import (
    CPMAddPackage,
    CPMDeclarePackage,
    CPMFindPackage,
    CPMSourceType,
    CPMUsePackageLock,
    CPMVersion,
    Identifier,
    Node,
    StringLiteral,
)
from cmakefinch.source_buffer import SourceLocation

_GITHUB_SHORTHAND = re.compile(r"(?:gh:)?([^/@#]+)/([^/@#]+)(?:[@#](.+))?")
_VERSION_EXACT = re.compile(r"@(.+)")
_VERSION_MIN = re.compile(r">=(.+)")

_ADD_PACKAGE_KEYWORDS = frozenset({"DOWNLOAD_ONLY", "EXCLUDE_FROM_ALL", "SYSTEM", "NO_CACHE"})
_FIND_PACKAGE_KEYWORDS = frozenset({"REQUIRED", "QUIET", "OPTIONAL"})
_SHA1_LENGTH = 40


def _text(node: Optional[Node]) -> Optional[str]:
    if isinstance(node, StringLiteral):
        return node.value
    if isinstance(node, Identifier):
        return node.name
    return None


def string_value(node: Optional[Node]) -> str:
    """Return the text of a string literal or identifier; raise ParseError otherwise."""
    if node is None:
        raise ParseError("Null node")
    text = _text(node)
    if text is None:
        raise ParseError("Expected string literal or identifier")
    return text


def is_github_shorthand(text: str) -> bool:
    """True for ``owner/repo``, optionally prefixed ``gh:`` and suffixed ``@ref`` or ``#ref``."""
    return _GITHUB_SHORTHAND.fullmatch(text) is not None


def parse_github_shorthand(shorthand: str) -> tuple[str, str]:
    """Split a shorthand into ``("owner/repo", version)``; version may be empty."""
    match = _GITHUB_SHORTHAND.fullmatch(shorthand)
    if match is None:
        raise ParseError(f"Invalid CPM shorthand syntax: {shorthand}")
    owner, repo, version = match.group(1), match.group(2), match.group(3) or ""
    return f"{owner}/{repo}", version


def parse_version_string(version_str: str) -> CPMVersion:
    """Interpret ``@x`` as exact, ``>=x`` as a minimum, anything else as plain.

    A plain version that looks like a git reference (contains '/' or '-', or
    is as long as a SHA-1 hash) is also recorded as the git tag.
    """
    match = _VERSION_EXACT.fullmatch(version_str)
    if match is not None:
        return CPMVersion(match.group(1), exact=True)
    match = _VERSION_MIN.fullmatch(version_str)
    if match is not None:
        return CPMVersion(match.group(1), exact=False)
    version = CPMVersion(version_str, exact=False)
    if "/" in version_str or "-" in version_str or len(version_str) == _SHA1_LENGTH:
        version.git_tag = version_str
    return version


def _find_argument(args: Sequence[Node], name: str) -> Optional[int]:
    """Index of the first argument whose text equals ``name``."""
    return next((index for index, arg in enumerate(args) if _text(arg) == name), None)


def _value_after_name(args: Sequence[Node]) -> Optional[str]:
    """Text of the argument following the first ``NAME`` keyword, if any."""
    index = _find_argument(args, "NAME")
    if index is None or index + 1 >= len(args):
        return None
    return _text(args[index + 1])


class CPMParser:
    """Builds CPM package nodes from the arguments of a CPM command."""

    def parse_command(self, command_name: str, args: Sequence[Node]) -> Node:
        """Parse a CPM command; raise ParseError if it is unknown or malformed."""
        handlers = {
            "CPMAddPackage": self._parse_add_package,
            "CPMFindPackage": self._parse_find_package,
            "CPMUsePackageLock": self._parse_use_package_lock,
            "CPMDeclarePackage": self._parse_declare_package,
        }
        handler = handlers.get(command_name)
        if handler is None:
            raise ParseError(
                f"Unknown CPM command: {command_name}", ErrorCategory.UNKNOWN_COMMAND
            )
        return handler(list(args))

    # CPMAddPackage

    def _parse_add_package(self, args: list[Node]) -> CPMAddPackage:
        if not args:
            raise ParseError("CPMAddPackage requires arguments")
        if len(args) == 1:
            text = _text(args[0])
            if text is not None and is_github_shorthand(text):
                return self._parse_add_package_shorthand(text)
        return self._parse_add_package_full(args)

    @staticmethod
    def _parse_add_package_shorthand(shorthand: str) -> CPMAddPackage:
        repo_spec, version_str = parse_github_shorthand(shorthand)
        owner, slash, repo = repo_spec.partition("/")
        if not slash:
            raise ParseError("Invalid GitHub repository format")
        package = CPMAddPackage(repo, location=SourceLocation())
        package.set_source(CPMSourceType.GITHUB, repo_spec)
        if version_str:
            package.version = parse_version_string(version_str)
        return package

    def _parse_add_package_full(self, args: list[Node]) -> CPMAddPackage:
        location = args[0].location
        package: Optional[CPMAddPackage] = None
        position = 0

        if _find_argument(args, "NAME") is not None:
            name = _value_after_name(args)
            if name is not None:
                package = CPMAddPackage(name, location=location)
        else:
            name = _text(args[0])
            if name:
                package = CPMAddPackage(name, location=location)
                position = 1

        if package is None:
            raise ParseError("CPMAddPackage requires NAME")

        sources = {
            "GITHUB_REPOSITORY": CPMSourceType.GITHUB,
            "GIT_REPOSITORY": CPMSourceType.GIT_URL,
            "URL": CPMSourceType.URL,
        }
        while position < len(args):
            key = _text(args[position])
            has_next = position + 1 < len(args)
            following = _text(args[position + 1]) if has_next else None

            if key in sources and following is not None:
                package.set_source(sources[key], following)
                position += 1
            elif key == "VERSION" and following is not None:
                package.version = parse_version_string(following)
                position += 1
            elif key == "GIT_TAG" and following is not None:
                package.version = CPMVersion(following, exact=False, git_tag=following)
                position += 1
            elif key == "OPTIONS":
                position += 1
                options: list[Node] = []
                while position < len(args):
                    if _text(args[position]) in _ADD_PACKAGE_KEYWORDS:
                        position -= 1
                        break
                    options.append(args[position])
                    position += 1
                self._parse_options(package, options)
            position += 1

        return package

    @staticmethod
    def _parse_options(package: CPMAddPackage, options: list[Node]) -> None:
        """Read ``"KEY VALUE"``, ``"KEY:TYPE VALUE"`` or a key followed by its value."""
        position = 0
        while position < len(options):
            option = _text(options[position])
            if option is not None:
                key, space, value = option.partition(" ")
                if space:
                    package.add_option(key.partition(":")[0], value)
                elif position + 1 < len(options):
                    following = _text(options[position + 1])
                    if following is not None:
                        package.add_option(option, following)
                        position += 1
            position += 1

    # CPMFindPackage

    @staticmethod
    def _parse_find_package(args: list[Node]) -> CPMFindPackage:
        if not args:
            raise ParseError("CPMFindPackage requires arguments")

        name = _text(args[0])
        if name is None:
            name = _value_after_name(args)
        if not name:
            raise ParseError("CPMFindPackage requires package name")

        package = CPMFindPackage(name, location=args[0].location)
        position = 1
        while position < len(args):
            key = _text(args[position])
            has_next = position + 1 < len(args)
            following = _text(args[position + 1]) if has_next else None

            if key == "VERSION" and following is not None:
                package.version = following
                position += 1
            elif key == "GITHUB_REPOSITORY" and following is not None:
                package.github_repository = following
                position += 1
            elif key == "GIT_TAG" and following is not None:
                package.git_tag = following
                position += 1
            elif key == "COMPONENTS":
                position += 1
                while position < len(args):
                    component = _text(args[position])
                    if component is None:
                        break
                    if component in _FIND_PACKAGE_KEYWORDS:
                        position -= 1
                        break
                    package.add_component(component)
                    position += 1
            position += 1

        return package

    # CPMUsePackageLock

    @staticmethod
    def _parse_use_package_lock(args: list[Node]) -> CPMUsePackageLock:
        if not args:
            raise ParseError("CPMUsePackageLock requires a file path")
        path = _text(args[0])
        if not path:
            raise ParseError("CPMUsePackageLock requires a valid file path")
        return CPMUsePackageLock(path, location=args[0].location)

    # CPMDeclarePackage

    @staticmethod
    def _parse_declare_package(args: list[Node]) -> CPMDeclarePackage:
        if not args:
            raise ParseError("CPMDeclarePackage requires arguments")

        name = _value_after_name(args)
        if not name:
            raise ParseError("CPMDeclarePackage requires NAME")

        package = CPMDeclarePackage(name, location=args[0].location)
        fields = {
            "VERSION": "version",
            "GITHUB_REPOSITORY": "github_repository",
            "GIT_REPOSITORY": "git_repository",
        }
        position = 0
        while position < len(args):
            key = _text(args[position])
            has_next = position + 1 < len(args)
            following = _text(args[position + 1]) if has_next else None
            if key in fields and following is not None:
                setattr(package, fields[key], following)
                position += 1
            position += 1

        return package