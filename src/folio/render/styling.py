"""Inline ``style`` attribute editing."""

from __future__ import annotations

from bs4 import Tag


def split_declarations(value: str) -> list[str]:
    """Split on ``;`` outside parentheses and quotes, so ``url(data:...;base64,...)`` stays whole."""

    chunks: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None

    for char in value:
        if quote is not None:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")" and depth:
            depth -= 1
        elif char == ";" and depth == 0:
            chunks.append("".join(current))
            current = []
            continue
        current.append(char)

    chunks.append("".join(current))
    return chunks


def parse_style(value: str | None) -> dict[str, str]:
    declarations: dict[str, str] = {}
    for chunk in split_declarations(value or ""):
        name, separator, declared = chunk.partition(":")
        if not separator:
            continue
        name = name.strip().lower()
        if name:
            declarations[name] = declared.strip()
    return declarations


def format_style(declarations: dict[str, str]) -> str:
    return "; ".join(f"{name}: {value}" for name, value in declarations.items())


def set_style(tag: Tag, **properties: str) -> None:
    """Set properties (underscores become hyphens), keeping other declarations."""

    declarations = parse_style(tag.get("style"))
    for name, value in properties.items():
        declarations[name.replace("_", "-")] = value
    tag["style"] = format_style(declarations)
