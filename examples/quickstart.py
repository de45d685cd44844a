"""Quickstart - building and running small grammars.

Demonstrates:

1. Composing combinators into a grammar
2. Reading tokens and errors as values
3. Reporting a failure with source context
4. The bundled calculator grammar
5. The bundled SSQL query grammar

Python 3.13+.
"""

from __future__ import annotations

from typing import Any

from pcengine import Alt, Ignore, List, Produce, Regex, Seq, Text, Token, run
from pcengine.grammars import evaluate, parse_expression, parse_query


def _dump(token: Token[Any], depth: int = 0) -> None:
    """Print a token tree, one node per line."""
    pad = "  " * depth
    match token.value:
        case dict() as fields:
            print(f"{pad}{token.type} [{token.index}, {token.end})")
            for name, child in fields.items():
                if isinstance(child, Token):
                    print(f"{pad}  {name}:")
                    _dump(child, depth + 2)
                elif isinstance(child, tuple):
                    print(f"{pad}  {name}:")
                    for item in child:
                        _dump(item, depth + 2)
                else:
                    print(f"{pad}  {name}: {child!r}")
        case tuple() as children:
            print(f"{pad}{token.type} [{token.index}, {token.end})")
            for child in children:
                _dump(child, depth + 1)
        case Token() as child:
            print(f"{pad}{token.type} [{token.index}, {token.end})")
            _dump(child, depth + 1)
        case value:
            print(f"{pad}{token.type} [{token.index}, {token.end}) = {value!r}")


def example_1_composition() -> None:
    """Build a key=value list grammar from the core combinators."""
    print("=" * 60)
    print("Example 1: Composing Combinators")
    print("=" * 60)

    key = Produce(Regex(r"[a-z]+"), "key", lambda t: t.value[0])
    number = Produce(Regex(r"\d+"), "number", lambda t: int(t.value[0]))
    boolean = Produce(
        Alt(Text("true"), Text("false")), "boolean", lambda t: t.value == "true"
    )
    pair = Produce(
        Seq([key, Ignore(Regex(r"\s*=\s*")), Alt(number, boolean)]),
        "pair",
        lambda t: (t.value[0].value, t.value[1].value),
    )
    settings = Produce(
        List(pair, Regex(r"\s*;\s*")),
        "settings",
        lambda t: dict(p.value for p in t.value),
    )

    token = run(settings, "retries = 3; verbose = true; timeout=30").unwrap()
    print(f"Parsed: {token.value}")
    print()


def example_2_errors_as_values() -> None:
    """Failures are returned, not raised."""
    print("=" * 60)
    print("Example 2: Errors as Values")
    print("=" * 60)

    keyword = Alt(Text("SELECT"), Text("INSERT"), Text("DELETE"))
    result = keyword("UPDATE t", 0)

    if result.is_err:
        error = result.unwrap_err()
        print(f"Failed at offset {error.index} [{error.code.name}]")
        print(error.message)
        print(f"Expected one of: {', '.join(error.expected)}")
    print()


def example_3_context() -> None:
    """Render a failure against the source it came from."""
    print("=" * 60)
    print("Example 3: Error Context")
    print("=" * 60)

    source = "SELECT movie.name\nFROM movie JION director"
    error = parse_query(source).unwrap_err()
    print(error.format_with_context(source))
    print()


def example_4_calculator() -> None:
    """Parse and evaluate an arithmetic expression."""
    print("=" * 60)
    print("Example 4: Calculator")
    print("=" * 60)

    source = "y = 2 + x * x * (a - 5) / 3 % 15"
    env = {"x": 3, "a": 8}
    tree = parse_expression(source).unwrap()
    _dump(tree)
    print(f"{source}  =>  {evaluate(tree, env)}  (env: {env})")
    print()


def example_5_ssql() -> None:
    """Parse a SELECT statement with JOIN and WHERE."""
    print("=" * 60)
    print("Example 5: SSQL Query")
    print("=" * 60)

    source = """
SELECT movie.name
FROM movie JOIN director ON movie.director_id = director.id
WHERE director.name = 'Jame''s Cameron'
"""
    _dump(parse_query(source).unwrap())
    print()


def main() -> None:
    """Run all quickstart examples."""
    example_1_composition()
    example_2_errors_as_values()
    example_3_context()
    example_4_calculator()
    example_5_ssql()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
