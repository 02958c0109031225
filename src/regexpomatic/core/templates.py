# src/regexpomatic/core/templates.py
"""Template field extraction utilities.

Finds which tags a tag template reads, by walking the Jinja2 AST for
accesses through the ``tags`` namespace:

    from regexpomatic.core.templates import extract_jinja2_fields

    extract_jinja2_fields("{{ tags.feature_name }}/{{ tags['host-id'] }}")
    # Returns: frozenset({"feature_name", "host-id"})

The compiler uses this to report templates that read another template's
name: those see the tag value from before any template ran, never the
sibling's rendered output.

Limitations:
- Cannot analyze conditional access (extracts all branches)
- Cannot analyze dynamic keys (tags[variable] is ignored)
- Cannot analyze macro internals from imports
"""

from __future__ import annotations

from jinja2 import Environment
from jinja2.nodes import Call, Const, Getattr, Getitem, Name, Node

__all__ = [
    "extract_jinja2_fields",
]


def extract_jinja2_fields(
    template_string: str,
    namespace: str = "tags",
) -> frozenset[str]:
    """Extract field names accessed via namespace.field or namespace["field"].

    Args:
        template_string: Jinja2 template to parse
        namespace: Variable name to search for (default: "tags")

    Returns:
        Frozenset of field names found (may include conditionally-used fields)

    Raises:
        jinja2.TemplateSyntaxError: If template is malformed

    Examples:
        >>> extract_jinja2_fields("{{ tags.name }}")
        frozenset({'name'})

        >>> extract_jinja2_fields('{{ tags.get("level") }}')
        frozenset({'level'})

        >>> extract_jinja2_fields("{% if tags.a %}{{ tags.b }}{% endif %}")
        frozenset({'a', 'b'})

        >>> extract_jinja2_fields("{{ data }}")
        frozenset()
    """
    env = Environment()
    ast = env.parse(template_string)
    fields: set[str] = set()
    _walk_ast(ast, namespace, fields)
    return frozenset(fields)


def _walk_ast(node: Node, namespace: str, fields: set[str]) -> None:
    """Recursively walk AST to find namespace attribute/item accesses.

    Args:
        node: Current AST node
        namespace: Variable name to search for
        fields: Set to accumulate found field names (mutated)
    """
    # tags.get("field")
    if (
        isinstance(node, Call)
        and isinstance(node.node, Getattr)
        and isinstance(node.node.node, Name)
        and node.node.node.name == namespace
        and node.node.attr == "get"
        and len(node.args) >= 1
        and isinstance(node.args[0], Const)
        and isinstance(node.args[0].value, str)
    ):
        fields.add(node.args[0].value)

    # tags.field (but not the tags.get method itself)
    if isinstance(node, Getattr) and isinstance(node.node, Name) and node.node.name == namespace and node.attr != "get":
        fields.add(node.attr)

    # tags["field"]
    if (
        isinstance(node, Getitem)
        and isinstance(node.node, Name)
        and node.node.name == namespace
        and isinstance(node.arg, Const)
        and isinstance(node.arg.value, str)
    ):
        fields.add(node.arg.value)

    for child in node.iter_child_nodes():
        _walk_ast(child, namespace, fields)
