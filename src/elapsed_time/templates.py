"""Message template parsing and rendering.

Templates use named holes such as ``"Imported {Count} rows from {Source}"``.
Holes may carry a format specifier (``{Elapsed:0.0}``), an alignment
(``{Name,-10}``) and a capture hint (``{@Payload}``, ``{$Payload}``), which is
accepted and ignored. ``{{`` and ``}}`` produce literal braces.

Named holes are bound to arguments positionally, one argument per hole
occurrence; a template made only of numeric holes (``{0}``, ``{1}``) binds by
index instead.
"""

import numbers
import re
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from typing import Any

# "0", "0.0", "00.000": .NET-style custom numeric formats
_FIXED_POINT_FORMAT = re.compile(r"^(0+)(?:\.(0+))?$")
_HOLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$|^[0-9]+$")


@dataclass(frozen=True, slots=True)
class TextToken:
    text: str


@dataclass(frozen=True, slots=True)
class PropertyToken:
    name: str
    raw: str
    format: str | None = None
    alignment: int | None = None

    @property
    def is_positional(self) -> bool:
        return self.name.isdigit()


Token = TextToken | PropertyToken


@dataclass(slots=True)
class RenderedMessage:
    """Result of rendering a template against its arguments.

    Attributes:
        text: The message with every bound hole substituted.
        properties: Hole name to raw (unformatted) value, in template order.
        extra_args: Arguments left over after binding.
    """

    text: str
    properties: dict[str, Any] = field(default_factory=dict)
    extra_args: tuple[Any, ...] = ()


def _parse_hole(content: str, raw: str) -> PropertyToken | None:
    body = content
    fmt = None
    alignment = None

    if ":" in body:
        body, fmt = body.split(":", 1)
    if "," in body:
        body, align_text = body.split(",", 1)
        try:
            alignment = int(align_text.strip())
        except ValueError:
            return None

    if body[:1] in ("@", "$"):
        body = body[1:]
    if not _HOLE_NAME.match(body):
        return None
    return PropertyToken(name=body, raw=raw, format=fmt or None, alignment=alignment)


@lru_cache(maxsize=1024)
def parse(template: str) -> tuple[Token, ...]:
    """Split a template into text and property tokens.

    Malformed holes (unbalanced braces, invalid names) are kept as text.
    """
    tokens: list[Token] = []
    text: list[str] = []
    i = 0
    length = len(template)

    while i < length:
        ch = template[i]
        if ch == "{":
            if template.startswith("{{", i):
                text.append("{")
                i += 2
                continue
            end = template.find("}", i + 1)
            if end == -1:
                text.append(template[i:])
                break
            raw = template[i : end + 1]
            token = _parse_hole(template[i + 1 : end], raw)
            if token is None:
                text.append(raw)
            else:
                if text:
                    tokens.append(TextToken("".join(text)))
                    text = []
                tokens.append(token)
            i = end + 1
        elif ch == "}" and template.startswith("}}", i):
            text.append("}")
            i += 2
        else:
            text.append(ch)
            i += 1

    if text:
        tokens.append(TextToken("".join(text)))
    return tuple(tokens)


def format_value(value: Any, fmt: str | None) -> str:
    """Format a single property value using a hole's format specifier."""
    if fmt is None:
        return str(value)

    fixed = _FIXED_POINT_FORMAT.match(fmt)
    if fixed:
        if isinstance(value, bool) or not isinstance(value, numbers.Real | Decimal):
            return str(value)
        if not isinstance(value, int | float | Decimal):
            value = float(value)
        decimals = len(fixed.group(2) or "")
        width = len(fixed.group(1)) + (decimals + 1 if decimals else 0)
        return f"{value:0{width}.{decimals}f}"

    try:
        return format(value, fmt)
    except (TypeError, ValueError):
        return str(value)


def _align(text: str, alignment: int | None) -> str:
    if alignment is None:
        return text
    if alignment < 0:
        return text.ljust(-alignment)
    return text.rjust(alignment)


_UNBOUND = object()


def bind(
    tokens: tuple[Token, ...], args: tuple[Any, ...]
) -> tuple[list[Any], dict[str, Any], tuple[Any, ...]]:
    """Bind arguments to the template's holes.

    Every named hole takes the next argument, so a repeated name consumes one
    argument per occurrence. The latest occurrence owns the property name;
    earlier values are kept as ``Name_1``, ``Name_2`` and so on.

    Returns:
        Tuple of (value per hole, properties, extra_args). Holes left without
        an argument get ``_UNBOUND``.
    """
    holes = [t for t in tokens if isinstance(t, PropertyToken)]
    values: list[Any] = []
    properties: dict[str, Any] = {}

    if holes and all(h.is_positional for h in holes):
        used: set[int] = set()
        for hole in holes:
            index = int(hole.name)
            if index < len(args):
                values.append(args[index])
                properties[hole.name] = args[index]
                used.add(index)
            else:
                values.append(_UNBOUND)
        extra = tuple(arg for i, arg in enumerate(args) if i not in used)
        return values, properties, extra

    seen: dict[str, int] = {}
    for position, hole in enumerate(holes):
        if position >= len(args):
            values.append(_UNBOUND)
            continue
        value = args[position]
        values.append(value)
        count = seen.get(hole.name, 0)
        if count:
            properties[f"{hole.name}_{count}"] = properties.pop(hole.name)
        seen[hole.name] = count + 1
        properties[hole.name] = value
    return values, properties, tuple(args[len(holes) :])


def render(template: str, args: tuple[Any, ...] | list[Any] = ()) -> RenderedMessage:
    """Render a template, returning the text and the bound properties."""
    tokens = parse(template)
    values, properties, extra = bind(tokens, tuple(args))

    parts = []
    bound = iter(values)
    for token in tokens:
        if isinstance(token, TextToken):
            parts.append(token.text)
            continue
        value = next(bound)
        if value is _UNBOUND:
            parts.append(token.raw)
        else:
            parts.append(_align(format_value(value, token.format), token.alignment))

    return RenderedMessage(text="".join(parts), properties=properties, extra_args=extra)
