"""
Prop type normalization.

Component manifests carry prop type information in one of two upstream
docgen shapes:

- react-docgen: the type lives under ``tsType`` (or ``type`` for PropTypes
  components) as a tree of named descriptors with ``elements``, ``signature``,
  ``raw`` and ``value`` fields.
- react-docgen-typescript: the type lives under ``type`` as
  ``{name, raw?, value?}``.

Both shapes keep ``description``, ``required`` and ``defaultValue`` on the
prop itself. parse_props() accepts either and returns ParsedProp entries, so
formatters never see the upstream shape. It never raises: anything missing
or malformed becomes None.
"""

import json
from typing import Any, Dict, Optional

from storydocs.schemas import ParsedProp


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _serialize_elements(descriptor: Dict[str, Any]) -> list:
    return [serialize_type(el) or "unknown" for el in _as_list(descriptor.get("elements"))]


def _serialize_signature(descriptor: Dict[str, Any]) -> str:
    signature = _as_dict(descriptor.get("signature"))

    if descriptor.get("type") == "function":
        args = []
        for arg in _as_list(signature.get("arguments")):
            arg = _as_dict(arg)
            arg_type = serialize_type(arg.get("type")) or "any"
            args.append(f"{arg.get('name') or 'arg'}: {arg_type}")
        ret = serialize_type(signature.get("return")) or "void"
        return f"({', '.join(args)}) => {ret}"

    if descriptor.get("type") == "object":
        props = []
        for prop in _as_list(signature.get("properties")):
            prop = _as_dict(prop)
            value = _as_dict(prop.get("value"))
            optional = "" if value.get("required") else "?"
            prop_type = serialize_type(value) or "any"
            props.append(f"{prop.get('key') or 'unknown'}{optional}: {prop_type}")
        return "{ " + "; ".join(props) + " }"

    return "unknown"


def serialize_type(descriptor: Any) -> Optional[str]:
    """
    Serialize a type descriptor into a TypeScript-like string.

    A non-empty ``raw`` string always wins; otherwise the string is rebuilt
    from the descriptor's children.

    Args:
        descriptor: Upstream type descriptor (any shape)

    Returns:
        Type string, or None when the descriptor carries no usable type
    """
    if not isinstance(descriptor, dict):
        return None

    raw = descriptor.get("raw")
    if isinstance(raw, str) and raw.strip():
        return raw

    name = descriptor.get("name")
    if not isinstance(name, str) or not name:
        return None

    if "elements" in descriptor:
        if name == "union":
            return " | ".join(_serialize_elements(descriptor))
        if name == "intersection":
            return " & ".join(_serialize_elements(descriptor))
        if name == "Array":
            elements = _as_list(descriptor.get("elements"))
            inner = (serialize_type(elements[0]) if elements else None) or "unknown"
            return f"{inner}[]"
        if name == "tuple":
            return f"[{', '.join(_serialize_elements(descriptor))}]"

    if name == "literal" and "value" in descriptor:
        value = descriptor["value"]
        return value if isinstance(value, str) else json.dumps(value)

    if name == "signature" and "signature" in descriptor:
        return _serialize_signature(descriptor)

    # react-docgen-typescript enums without raw: [{value: '"a"'}, {value: '"b"'}]
    if name == "enum" and isinstance(descriptor.get("value"), list):
        values = [
            str(item["value"])
            for item in descriptor["value"]
            if isinstance(item, dict) and "value" in item
        ]
        if values:
            return " | ".join(values)

    # Generic like Item<TMeta>
    inner = _serialize_elements(descriptor)
    if inner:
        return f"{name}<{', '.join(inner)}>"

    return name


def _default_value(prop: Dict[str, Any]) -> Optional[str]:
    default = prop.get("defaultValue")
    if isinstance(default, dict):
        default = default.get("value")
    if default is None:
        return None
    if isinstance(default, str):
        return default
    return json.dumps(default)


def _props_map(tree: Any) -> Dict[str, Any]:
    tree = _as_dict(tree)
    if isinstance(tree.get("props"), dict):
        return tree["props"]
    return tree


def parse_props(tree: Any) -> Dict[str, ParsedProp]:
    """
    Normalize an upstream prop tree into ParsedProp entries keyed by prop name.

    Args:
        tree: ``{"props": {...}}`` or a bare ``{propName: descriptor}`` mapping,
            in either upstream docgen shape

    Returns:
        Parsed props in upstream order (empty when nothing usable was found)
    """
    parsed = {}
    for prop_name, prop in _props_map(tree).items():
        if not isinstance(prop, dict):
            parsed[prop_name] = ParsedProp()
            continue

        description = prop.get("description")
        required = prop.get("required")
        parsed[prop_name] = ParsedProp(
            description=description if isinstance(description, str) else None,
            type=serialize_type(prop.get("tsType") or prop.get("type")),
            default_value=_default_value(prop),
            required=required if isinstance(required, bool) else None,
        )
    return parsed
