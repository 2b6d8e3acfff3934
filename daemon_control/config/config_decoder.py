"""
Decoding of watched configuration files into host-owned target objects.

The document is decoded into a scratch mapping and every value is checked
against the target before anything is written, so a failed reload leaves
the previous values in place.
"""
import json
import dataclasses
import typing
from typing import Any, Dict, Tuple

import yaml

from daemon_control.exceptions import ConfigDecodeError

YAML_SUFFIXES = ('.yaml', '.yml')

# Annotations we can check cheaply; anything else is accepted as decoded
_CHECKED_TYPES = (str, int, float, bool, list, dict)


def decode_config(raw: bytes, path: str) -> Dict[str, Any]:
    """
    Decode raw file contents into a mapping.

    Args:
        raw: File contents
        path: Path of the file, used to pick the format and in errors

    Returns:
        Decoded mapping

    Raises:
        ConfigDecodeError: If the contents are malformed or not a mapping
    """
    try:
        if path.lower().endswith(YAML_SUFFIXES):
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigDecodeError(path, str(e)) from e

    if not isinstance(data, dict):
        raise ConfigDecodeError(path, f"expected an object, got {type(data).__name__}")
    return data


def apply_config(target: Any, data: Dict[str, Any], path: str = "<config>") -> None:
    """
    Copy decoded values onto the target.

    Keys are matched against the target's fields exactly first, then
    case-insensitively. Unknown keys are ignored.

    Args:
        target: A dict, a dataclass instance or a plain object
        data: Decoded mapping
        path: Path of the file, used in errors

    Raises:
        ConfigDecodeError: If a value does not fit its field; the target is
            not modified in that case
    """
    if isinstance(target, dict):
        target.update(data)
        return

    updates = _resolve_updates(target, data, path)
    for attr, value in updates.items():
        setattr(target, attr, value)


def _field_names(target: Any, path: str) -> Tuple[str, ...]:
    if dataclasses.is_dataclass(target):
        return tuple(f.name for f in dataclasses.fields(target))
    if not hasattr(target, "__dict__"):
        raise ConfigDecodeError(path, f"cannot write config into a {type(target).__name__}")
    return tuple(name for name in vars(target) if not name.startswith('_'))


def _field_types(target: Any) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(type(target))
    except (NameError, TypeError):
        return {}


def _resolve_updates(target: Any, data: Dict[str, Any], path: str) -> Dict[str, Any]:
    names = _field_names(target, path)
    by_lower = {name.lower(): name for name in names}
    types = _field_types(target)

    updates = {}
    for key, value in data.items():
        attr = key if key in names else by_lower.get(str(key).lower())
        if attr is None:
            continue
        expected = types.get(attr)
        if not _matches(expected, value):
            raise ConfigDecodeError(
                path, f"field {key!r} expects {expected.__name__}, got {type(value).__name__}"
            )
        updates[attr] = value
    return updates


def _matches(expected: Any, value: Any) -> bool:
    if expected not in _CHECKED_TYPES or value is None:
        return True
    if expected is bool:
        return isinstance(value, bool)
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if expected is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, expected)
