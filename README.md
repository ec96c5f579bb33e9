# cmakefinch

Building blocks for reading CMake build scripts:

- a lexer that turns `CMakeLists.txt` text into tokens (`cmakefinch.lexer`),
- a source buffer that maps offsets to lines and columns (`cmakefinch.source_buffer`),
- syntax tree node classes for CMake statements and CPM.cmake packages (`cmakefinch.nodes`),
- recognition of the CPM.cmake commands `CPMAddPackage`, `CPMFindPackage`,
  `CPMDeclarePackage` and `CPMUsePackageLock` (`cmakefinch.cpm_parser`).

The package needs only the Python standard library. It runs on Python 3.10 and later.

## Installation

```
pip install cmakefinch
```

## Tokens

`Lexer` takes source text, or a `SourceBuffer`, and a file name. Iterating over
it yields `Token` objects. The last one has type `TokenType.EOF`. Each token
carries its `type`, its decoded `value`, its `location` and its raw `text`.

```python
from cmakefinch.lexer import Lexer

for token in Lexer('set(NAME "value" ${OTHER})', "CMakeLists.txt"):
    print(token)
```

This prints:

```
Identifier(set)
LeftParen
Identifier(NAME)
String("value")
Variable(${OTHER})
RightParen
Eof
```

The lexer skips horizontal whitespace, line continuations and `#` line comments.
Newlines come out as `Newline` tokens. It recognises quoted strings and their
escapes, `${...}` variable references (including `ENV{...}` and `CACHE{...}`),
`$<...>` generator expressions, numbers, `[[...]]` / `[=[...]=]` bracket
arguments and `#[[...]]` bracket comments.

`next_token()` returns one token at a time. `peek_token(ahead)` looks ahead
without consuming anything. `tokens.type_name(token_type)` gives a readable
name such as `"string literal"`.

Bad input raises `cmakefinch.lexer.ParseError`. The error has a `message`, a
`category` (an `ErrorCategory`) and a `location`:

```python
from cmakefinch.lexer import ErrorCategory, Lexer, ParseError

try:
    Lexer('"abc', "CMakeLists.txt").next_token()
except ParseError as error:
    assert error.category is ErrorCategory.UNTERMINATED_STRING
    print(error)   # CMakeLists.txt:1:1: Unterminated string
```

## Source locations

```python
from cmakefinch.source_buffer import SourceBuffer

buffer = SourceBuffer("a\nbc\r\n", "CMakeLists.txt")
buffer.line_column_at(3)      # (2, 2)
buffer.line_content(2)        # "bc"
str(buffer.location_at(3))    # "CMakeLists.txt:2:2"
```

## CPM.cmake commands

`CPMParser.parse_command(name, args)` takes a command name and a list of
argument nodes from `cmakefinch.nodes`. It returns a `CPMAddPackage`,
`CPMFindPackage`, `CPMDeclarePackage` or `CPMUsePackageLock` node. An unknown
command or a malformed argument list raises `ParseError`.

```python
from cmakefinch.cpm_parser import CPMParser
from cmakefinch.nodes import Identifier, StringLiteral

parser = CPMParser()

package = parser.parse_command("CPMAddPackage", [StringLiteral("gh:fmtlib/fmt#10.2.1")])
package.name          # "fmt"
package.source        # "fmtlib/fmt"
package.version       # CPMVersion(version="10.2.1", exact=False, git_tag=None)

package = parser.parse_command(
    "CPMAddPackage",
    [
        Identifier("NAME"), StringLiteral("json"),
        Identifier("GITHUB_REPOSITORY"), StringLiteral("nlohmann/json"),
        Identifier("VERSION"), StringLiteral("3.11.3"),
        Identifier("OPTIONS"), StringLiteral("JSON_BuildTests OFF"),
    ],
)
package.options       # {"JSON_BuildTests": "OFF"}
```

The helpers also work on their own:

```python
from cmakefinch.cpm_parser import is_github_shorthand, parse_github_shorthand, parse_version_string

is_github_shorthand("gh:nlohmann/json@3.11.3")     # True
parse_github_shorthand("gh:nlohmann/json@3.11.3")  # ("nlohmann/json", "3.11.3")
parse_version_string(">=1.2")                      # CPMVersion(version="1.2", exact=False, git_tag=None)
parse_version_string("@2.0")                       # CPMVersion(version="2.0", exact=True, git_tag=None)
```

`string_value(node)` returns the text of a `StringLiteral` or `Identifier`
node. For any other node it raises `ParseError`.

## What the package does not do

The package has no parser that turns a whole script into a tree of statements.
The node classes (`CommandCall`, `IfStatement`, `ForEachStatement`, `File` and
the rest) are there to be built and compared. Nothing here builds them from
source text. To use `CPMParser`, build the argument nodes yourself. The package
also has no command-line tool, and it does not evaluate scripts or generate
build files.