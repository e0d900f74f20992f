"""
Mermaid diagram blocks.

Diagrams are drawn in the browser by Mermaid; at build time the source is
checked for the mistakes that make Mermaid give up on the whole block
(unknown diagram type, bad flowchart direction, unbalanced brackets or
blocks). Malformed source degrades to a plain-text echo of the block.
"""

from __future__ import annotations

from html import escape
import re

from .blocks import DIAGRAM, BlockResult, Degraded, Rendered

DIAGRAM_TYPES = frozenset(
    {
        "graph",
        "flowchart",
        "sequenceDiagram",
        "classDiagram",
        "classDiagram-v2",
        "stateDiagram",
        "stateDiagram-v2",
        "erDiagram",
        "journey",
        "gantt",
        "pie",
        "gitGraph",
        "mindmap",
        "timeline",
        "quadrantChart",
        "requirementDiagram",
        "C4Context",
        "C4Container",
        "C4Component",
        "C4Dynamic",
        "C4Deployment",
        "sankey-beta",
        "xychart-beta",
        "block-beta",
        "packet-beta",
        "architecture-beta",
    }
)
FLOWCHART_TYPES = frozenset({"graph", "flowchart"})
FLOWCHART_DIRECTIONS = frozenset({"TB", "TD", "BT", "RL", "LR"})
SEQUENCE_BLOCKS = frozenset({"loop", "alt", "opt", "par", "critical", "break", "rect", "box"})

_KEYWORD_RE = re.compile(r"^([A-Za-z0-9-]+)")
_PAIRS = {")": "(", "]": "[", "}": "{"}


def render_diagram(source: str, language: str = "mermaid") -> BlockResult:
    """Render a diagram block, degrading to its source when malformed."""
    problem = find_diagram_error(source)
    if problem is not None:
        return Degraded(DIAGRAM, language, source, problem)
    return Rendered(DIAGRAM, language, f'<pre class="mermaid">{escape(source.strip())}</pre>')


def find_diagram_error(source: str) -> str | None:
    """Return a description of the first problem found, or None if the source looks valid."""
    lines = _meaningful_lines(source)
    if not lines:
        return "empty diagram"

    header = lines[0]
    match = _KEYWORD_RE.match(header)
    keyword = match.group(1) if match else ""
    if keyword not in DIAGRAM_TYPES:
        return f"unknown diagram type '{header.split()[0] if header.split() else header}'"

    if keyword in FLOWCHART_TYPES:
        parts = header.rstrip(";").split()
        if len(parts) > 1 and parts[1] not in FLOWCHART_DIRECTIONS:
            return f"invalid flowchart direction '{parts[1]}'"
        return _check_brackets(lines[1:]) or _check_blocks(lines[1:], {"subgraph"})
    if keyword == "sequenceDiagram":
        return _check_blocks(lines[1:], SEQUENCE_BLOCKS)
    return None


def _meaningful_lines(source: str) -> list[str]:
    lines = [line.strip() for line in source.splitlines()]
    # Optional "---" config block ahead of the diagram header.
    if lines and lines[0] == "---":
        try:
            close = lines.index("---", 1)
        except ValueError:
            return []
        lines = lines[close + 1:]
    return [line for line in lines if line and not line.startswith("%%")]


def _check_brackets(lines: list[str]) -> str | None:
    for number, line in enumerate(lines, start=2):
        stack: list[str] = []
        in_quote = False
        previous = ""
        for char in line:
            if char == '"':
                in_quote = not in_quote
            elif in_quote:
                pass
            elif char in "([{":
                stack.append(char)
            elif char in ")]}":
                if not stack or stack[-1] != _PAIRS[char]:
                    return f"unbalanced '{char}' on line {number}"
                stack.pop()
            elif char == ">" and not stack and (previous.isalnum() or previous == "_"):
                # Asymmetric node shape: id>label]
                stack.append("[")
            previous = char
        if in_quote:
            return f"unterminated string on line {number}"
        if stack:
            return f"unclosed '{stack[-1]}' on line {number}"
    return None


def _check_blocks(lines: list[str], openers: frozenset[str] | set[str]) -> str | None:
    depth = 0
    for number, line in enumerate(lines, start=2):
        word = line.split()[0].rstrip(";")
        if word in openers:
            depth += 1
        elif word == "end":
            if depth == 0:
                return f"'end' without an open block on line {number}"
            depth -= 1
    if depth:
        return f"{depth} block(s) not closed with 'end'"
    return None
