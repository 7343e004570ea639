"""
Replace $ref pointers in JSON schema / OpenAPI documents with their targets.

$ref is treated as a reference wherever it appears, without checking whether
the surrounding document allows one there.
"""
import logging
from typing import Any, Set, TypeVar
from urllib.parse import unquote

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SchemaReferenceError(Exception):
    """Raised when a $ref is external or points at a missing path."""
    pass


def is_ref(node: Any) -> bool:
    return isinstance(node, dict) and "$ref" in node


def _decode_segment(segment: str) -> str:
    # JSON Pointer escapes, applied after URI fragment decoding
    return unquote(segment).replace("~1", "/").replace("~0", "~")


def resolve_pointer(root: Any, ref: str) -> Any:
    """Return the node an internal ref like '#/components/schemas/Pet' points at."""
    if not isinstance(ref, str) or not ref.startswith("#"):
        raise SchemaReferenceError(f"Cannot resolve external reference {ref}")

    target = root
    for raw_segment in (s for s in ref[1:].split("/") if s):
        segment = _decode_segment(raw_segment)
        if isinstance(target, dict) and segment in target:
            target = target[segment]
        elif isinstance(target, list) and segment.isdigit() and int(segment) < len(target):
            target = target[int(segment)]
        else:
            raise SchemaReferenceError(
                f"Could not follow ref {ref}, failed at {segment}"
            )
    return target


def follow_refs(root: Any, node: Any) -> Any:
    """Follow a chain of refs until reaching a node that isn't one."""
    seen: Set[str] = set()
    while is_ref(node):
        ref = node["$ref"]
        if ref in seen:
            raise SchemaReferenceError(f"Circular reference chain at {ref}")
        seen.add(ref)
        node = resolve_pointer(root, ref)
    return node


def dereference(root: T) -> T:
    """
    Remove $refs from the given document, replacing each with its target.

    Mutates the input and returns it. Targets are shared rather than copied,
    so a schema that refers to itself becomes a cyclic structure instead of
    recursing forever.

    Raises:
        SchemaReferenceError: for external refs or paths that don't exist.
    """
    resolved_root = follow_refs(root, root)
    visited: Set[int] = set()
    replaced = 0

    stack = [resolved_root] if isinstance(resolved_root, (dict, list)) else []
    while stack:
        node = stack.pop()
        if id(node) in visited:
            continue
        visited.add(id(node))

        keys = list(node.keys()) if isinstance(node, dict) else range(len(node))
        for key in keys:
            child = node[key]
            target = follow_refs(root, child)
            if target is not child:
                node[key] = target
                replaced += 1
            if isinstance(target, (dict, list)):
                stack.append(target)

    logger.debug(f"Dereferenced {replaced} $ref pointers")
    return resolved_root
