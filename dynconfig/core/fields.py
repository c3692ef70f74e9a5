"""Field helpers for configuration dataclasses.

Configuration objects are plain ``@dataclass`` instances owned by the caller.
Binding information lives in the field metadata:

    env       name of the environment variable (without prefix)
    default   declared default, applied by the environment reader only when
              the field still holds its zero value
    required  fail when no value can be found
    key       document key used by the file adaptors

Example:
    >>> @dataclass
    ... class Config:
    ...     host: str = env_field("HOST", default="127.0.0.1")
    ...     port: int = env_field("PORT", default=80)
    >>> Config()
    Config(host=None, port=0)
"""

import dataclasses
import typing
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple

from .exceptions import ConfigTypeError

NO_DEFAULT = object()

_TRUE_VALUES = {"1", "t", "true", "y", "yes", "on"}
_FALSE_VALUES = {"0", "f", "false", "n", "no", "off", ""}


def env_field(
    env: Optional[str] = None,
    default: Any = NO_DEFAULT,
    *,
    required: bool = False,
    key: Optional[str] = None,
    zero: Any = NO_DEFAULT,
    **kwargs,
) -> Any:
    """Declare a dataclass field bound to an environment variable.

    The dataclass default is the zero value of the declared default's type
    (``0`` for int, ``False`` for bool, an empty list for lists, ``None``
    otherwise) so that a freshly built object starts out empty, the way
    readers expect it. A string default is parsed into the field type by the
    environment reader, so its zero is ``None``. Pass ``zero`` to choose it
    explicitly, e.g. ``zero=""``.

    Args:
        env: Variable name without prefix; defaults to the upper-cased field name
        default: Declared default literal (typed value or string)
        required: Raise when no value is available
        key: Document key for file adaptors; defaults to the field name
        zero: Explicit zero value for the dataclass default
        **kwargs: Passed through to ``dataclasses.field``

    Returns:
        A ``dataclasses.Field``
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    if env is not None:
        metadata["env"] = env
    if default is not NO_DEFAULT:
        metadata["default"] = default
    if required:
        metadata["required"] = True
    if key is not None:
        metadata["key"] = key

    if zero is NO_DEFAULT:
        zero = _zero_for(default)

    if isinstance(zero, (list, dict, set)):
        factory = type(zero)
        return dataclasses.field(default_factory=factory, metadata=metadata, **kwargs)
    return dataclasses.field(default=zero, metadata=metadata, **kwargs)


def _zero_for(default: Any) -> Any:
    if default is NO_DEFAULT or default is None:
        return None
    if isinstance(default, str):
        return None
    if isinstance(default, bool):
        return False
    if isinstance(default, (int, float, list, dict, set, tuple)):
        return type(default)()
    return None


def is_zero(value: Any) -> bool:
    """Return True if value is the zero value of its type."""
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    if isinstance(value, (str, bytes, list, tuple, dict, set)):
        return len(value) == 0
    return False


def require_dataclass(config: Any) -> None:
    if not dataclasses.is_dataclass(config) or isinstance(config, type):
        raise ConfigTypeError(
            f"configuration must be a dataclass instance, got {type(config).__name__}"
        )


def iter_fields(config: Any) -> Iterator[Tuple[dataclasses.Field, Any]]:
    """Yield (field, resolved type) pairs for an init-able dataclass instance."""
    hints = typing.get_type_hints(type(config))
    for f in dataclasses.fields(config):
        yield f, hints.get(f.name, Any)


def field_key(f: dataclasses.Field) -> str:
    return f.metadata.get("key", f.name)


def unwrap_optional(tp: Any) -> Any:
    """Return T for Optional[T], otherwise tp unchanged."""
    if typing.get_origin(tp) is typing.Union:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def is_dataclass_type(tp: Any) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def parse_value(raw: str, tp: Any) -> Any:
    """Parse a string into the given type.

    Raises:
        ValueError: If the string cannot be parsed
    """
    tp = unwrap_optional(tp)
    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if tp is Any or tp is str:
        return raw
    if tp is bool:
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(f"invalid boolean value {raw!r}")
    if tp is int:
        return int(raw.strip())
    if tp is float:
        return float(raw.strip())
    if tp is Path:
        return Path(raw)

    if tp in (list, tuple, set) or origin in (list, tuple, set):
        item_type = args[0] if args else str
        items = [parse_value(part.strip(), item_type) for part in raw.split(",") if part.strip()]
        container = origin or tp
        return container(items)

    if tp is dict or origin is dict:
        key_type, value_type = args if len(args) == 2 else (str, str)
        result: Dict[Any, Any] = {}
        for pair in raw.split(","):
            if not pair.strip():
                continue
            if ":" not in pair:
                raise ValueError(f"invalid map item {pair!r}")
            k, v = pair.split(":", 1)
            result[parse_value(k.strip(), key_type)] = parse_value(v.strip(), value_type)
        return result

    if isinstance(tp, type):
        return tp(raw)
    return raw


def check_scalar(value: Any, tp: Any) -> bool:
    """Check a decoded document value against a scalar field type.

    Only str, int, float and bool are checked; anything else is accepted.
    Numbers and booleans are accepted for str fields as their text.
    """
    tp = unwrap_optional(tp)
    if value is None:
        return True
    if tp is bool:
        return isinstance(value, bool)
    if tp is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if tp is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if tp is str:
        return isinstance(value, (str, int, float))
    return True


def to_document(config: Any) -> Any:
    """Convert a configuration object into plain data keyed by document keys."""
    if dataclasses.is_dataclass(config) and not isinstance(config, type):
        return {field_key(f): to_document(getattr(config, f.name)) for f in dataclasses.fields(config)}
    if isinstance(config, dict):
        return {k: to_document(v) for k, v in config.items()}
    if isinstance(config, (list, tuple, set)):
        return [to_document(v) for v in config]
    if isinstance(config, Path):
        return str(config)
    return config


__all__ = [
    'NO_DEFAULT',
    'env_field',
    'is_zero',
    'require_dataclass',
    'iter_fields',
    'field_key',
    'unwrap_optional',
    'is_dataclass_type',
    'parse_value',
    'check_scalar',
    'to_document',
]
