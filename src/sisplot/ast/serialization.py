"""Plain-data views of a parsed sisplot program.

``--dump-ast`` prints a program as JSON or YAML. Each node becomes a
mapping holding its class name under ``_type``, its source position under
``_position`` (optional) and one entry per field. Call arguments and loop
bodies are written as lists and read back as tuples, so a loaded tree
compares equal to the parsed one.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from .builder import Position
from .nodes import (
    ASTNode,
    Variable,
    Constant,
    Add,
    Subtract,
    Multiply,
    Divide,
    Call,
    Assignment,
    VoidCall,
    Loop,
    ErrorStatement,
)

NODE_TYPES: dict[str, type[ASTNode]] = {
    cls.__name__: cls
    for cls in (
        Variable, Constant, Add, Subtract, Multiply, Divide, Call,
        Assignment, VoidCall, Loop, ErrorStatement,
    )
}

# Position given to nodes loaded without one.
UNKNOWN_POSITION = Position(origin="<unknown>", line=0, column=0)


def _node_fields(node_class):
    return [f.name for f in dataclasses.fields(node_class) if f.name != "position"]


def _dump(value, include_position):
    if isinstance(value, ASTNode):
        data: dict[str, Any] = {"_type": type(value).__name__}
        if include_position:
            pos = value.position
            data["_position"] = {"origin": pos.origin, "line": pos.line, "column": pos.column}
        for name in _node_fields(type(value)):
            data[name] = _dump(getattr(value, name), include_position)
        return data
    if isinstance(value, (list, tuple)):
        return [_dump(item, include_position) for item in value]
    return value


def _load_node(data: dict[str, Any]) -> ASTNode:
    if "_type" not in data:
        raise ValueError("Missing '_type' field in node data")
    node_class = NODE_TYPES.get(data["_type"])
    if node_class is None:
        raise ValueError(f"Unknown node type: {data['_type']}")

    pos = data.get("_position")
    kwargs: dict[str, Any] = {
        "position": Position(**pos) if pos else UNKNOWN_POSITION,
    }
    for name in _node_fields(node_class):
        if name in data:
            kwargs[name] = _load(data[name])
    if node_class is Constant:
        # JSON and YAML both write 2.0 back as the int 2
        kwargs["value"] = float(kwargs["value"])
    return node_class(**kwargs)


def _load(value):
    if isinstance(value, dict):
        return _load_node(value)
    if isinstance(value, list):
        return tuple(_load(item) for item in value)
    return value


def ast_to_dict(ast, include_position=True):
    """Convert a node, or a list of statements, to plain dicts and lists."""
    if ast is None:
        return None
    return _dump(ast, include_position)


def ast_from_dict(data):
    """Rebuild what :func:`ast_to_dict` produced.

    A top-level list comes back as a list of statements.

    Raises:
        ValueError: If a mapping has no ``_type`` or names an unknown node.
    """
    if data is None:
        return None
    if isinstance(data, list):
        return [_load(item) for item in data]
    return _load_node(data)


def ast_to_json(ast, include_position=True, indent: int | None = 2) -> str:
    # Greek variable names are written as is.
    return json.dumps(ast_to_dict(ast, include_position), indent=indent, ensure_ascii=False)


def ast_from_json(text: str):
    return ast_from_dict(json.loads(text))


def _yaml():
    try:
        import yaml
    except ImportError:
        raise ImportError(
            "PyYAML is required for YAML output. "
            "Install it with: pip install sisplot[yaml]"
        )
    return yaml


def ast_to_yaml(ast, include_position=True) -> str:
    """Dump a tree as YAML. Requires the ``yaml`` extra."""
    return _yaml().safe_dump(
        ast_to_dict(ast, include_position),
        default_flow_style=False, sort_keys=False, allow_unicode=True,
    )


def ast_from_yaml(text: str):
    """Load a tree written by :func:`ast_to_yaml`. Requires the ``yaml`` extra."""
    return ast_from_dict(_yaml().safe_load(text))


# vim: set ts=4 sw=4 expandtab:
