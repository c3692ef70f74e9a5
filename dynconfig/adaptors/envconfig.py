"""Environment variable reader.

Binds dataclass fields to ``<PREFIX>_<KEY>`` variables. ``KEY`` is the
field's ``env`` metadata or its upper-cased name. Nested dataclasses are
bound with ``<PREFIX>_<KEY>`` as their own prefix.
"""

import copy
import logging
import os
from typing import Any, Mapping, Optional, Tuple

from ..core.contracts import ConfigReader
from ..core.exceptions import MalformedSourceError, MissingRequiredError
from ..core.fields import (
    NO_DEFAULT,
    is_dataclass_type,
    is_zero,
    iter_fields,
    parse_value,
    require_dataclass,
    unwrap_optional,
)

logger = logging.getLogger(__name__)


class EnvConfigAdaptor(ConfigReader):
    """Reads configuration from environment variables.

    A set variable always wins. When a variable is not set, the declared
    default is applied only if the field still holds its zero value, so
    values put there by the caller or by an earlier reader survive.
    """

    def __init__(self, prefix: str, environ: Optional[Mapping[str, str]] = None):
        """Initialize adaptor.

        Args:
            prefix: Variable prefix, e.g. ``MY_APP`` for ``MY_APP_PORT``
            environ: Mapping to read from instead of ``os.environ``
        """
        self.prefix = prefix
        self._environ = environ

    def read(self, config: Any) -> None:
        require_dataclass(config)
        self._process(self.prefix, config)

    def key_for(self, prefix: str, name: str) -> str:
        key = f"{prefix}_{name}" if prefix else name
        return key.upper()

    def _lookup(self, key: str, alt: Optional[str]) -> Tuple[Optional[str], bool]:
        environ = self._environ if self._environ is not None else os.environ
        if key in environ:
            return environ[key], True
        if alt and alt in environ:
            return environ[alt], True
        return None, False

    def _process(self, prefix: str, obj: Any) -> None:
        for f, tp in iter_fields(obj):
            tag = f.metadata.get("env")
            key = self.key_for(prefix, tag or f.name)
            inner = unwrap_optional(tp)

            if is_dataclass_type(inner):
                nested = getattr(obj, f.name)
                if nested is None:
                    nested = inner()
                    setattr(obj, f.name, nested)
                self._process(key, nested)
                continue

            raw, found = self._lookup(key, tag.upper() if tag else None)
            if not found:
                current = getattr(obj, f.name)
                if not is_zero(current):
                    continue

                default = f.metadata.get("default", NO_DEFAULT)
                if default is NO_DEFAULT or default is None:
                    if f.metadata.get("required"):
                        raise MissingRequiredError(f"required key {key} missing value")
                    continue
                if not isinstance(default, str):
                    setattr(obj, f.name, copy.copy(default))
                    continue
                raw = default

            try:
                value = parse_value(raw, tp)
            except (TypeError, ValueError) as e:
                raise MalformedSourceError(f"assigning {key} to {f.name}: {e}") from e

            setattr(obj, f.name, value)
            logger.debug(f"Bound {f.name} from {key if found else 'default'}")


__all__ = ['EnvConfigAdaptor']
