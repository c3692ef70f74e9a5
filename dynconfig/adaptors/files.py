"""File adaptors: read and write configuration as YAML or JSON documents."""

import json
import logging
from abc import abstractmethod
from pathlib import Path
from typing import Any, Dict, TextIO, Union

import yaml

from ..core.contracts import ConfigReader, ConfigWriter
from ..core.exceptions import (
    ConfigTypeError,
    MalformedSourceError,
    SinkWriteError,
    SourceUnavailableError,
)
from ..core.fields import (
    check_scalar,
    field_key,
    is_dataclass_type,
    iter_fields,
    to_document,
    unwrap_optional,
)

logger = logging.getLogger(__name__)


def apply_document(config: Any, data: Dict[str, Any]) -> None:
    """Assign the keys present in data onto config.

    Keys without a matching field are ignored; fields without a matching key
    are left untouched.

    Raises:
        MalformedSourceError: If a value does not fit its field type
        ConfigTypeError: If config is neither a dataclass nor a dict
    """
    if isinstance(config, dict):
        config.update(data)
        return

    if not hasattr(config, "__dataclass_fields__") or isinstance(config, type):
        raise ConfigTypeError(
            f"configuration must be a dataclass instance or dict, got {type(config).__name__}"
        )

    for f, tp in iter_fields(config):
        key = field_key(f)
        if key not in data:
            continue
        value = data[key]
        inner = unwrap_optional(tp)

        if is_dataclass_type(inner) and isinstance(value, dict):
            nested = getattr(config, f.name)
            if nested is None:
                nested = inner()
                setattr(config, f.name, nested)
            apply_document(nested, value)
            continue

        if not check_scalar(value, tp):
            raise MalformedSourceError(
                f"cannot unmarshal {type(value).__name__} {value!r} into field {f.name}"
            )
        if inner is float and isinstance(value, int):
            value = float(value)
        elif inner is Path and isinstance(value, str):
            value = Path(value)
        elif inner is str and isinstance(value, bool):
            value = "true" if value else "false"
        elif inner is str and isinstance(value, (int, float)):
            value = str(value)
        setattr(config, f.name, value)


class FileAdaptor(ConfigReader, ConfigWriter):
    """Reads a document into the configuration object and writes it back.

    A missing or empty file reads as nothing; an unreadable or malformed one
    is an error. Writing truncates the file and creates it (and its parent
    directory) when absent.
    """

    format_name = "document"

    def __init__(self, path: Union[str, Path]):
        self.file_path = Path(path)

    def read(self, config: Any) -> None:
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                text = f.read()
        except FileNotFoundError:
            logger.debug(f"Config file not found, nothing to read: {self.file_path}")
            return
        except OSError as e:
            raise SourceUnavailableError(f"cannot read file: {e}") from e
        except UnicodeDecodeError as e:
            raise MalformedSourceError(f"cannot decode {self.file_path}: {e}") from e

        if not text.strip():
            return

        try:
            data = self._decode(text)
        except ValueError as e:
            raise MalformedSourceError(f"invalid {self.format_name} in {self.file_path}: {e}") from e

        if data is None:
            return
        if not isinstance(data, dict):
            raise MalformedSourceError(
                f"{self.file_path} must contain a mapping, got {type(data).__name__}"
            )
        apply_document(config, data)

    def write(self, config: Any) -> None:
        data = to_document(config)
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file_path, 'w', encoding='utf-8') as f:
                self._encode(data, f)
        except (OSError, TypeError, ValueError) as e:
            raise SinkWriteError(f"cannot write config file: {e}") from e

    @abstractmethod
    def _decode(self, text: str) -> Any:
        """Parse text; raise ValueError on malformed input."""

    @abstractmethod
    def _encode(self, data: Any, stream: TextIO) -> None:
        """Serialize data to stream."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.file_path)!r})"


class YAMLFileAdaptor(FileAdaptor):
    """YAML file reader and writer."""

    format_name = "YAML"

    def _decode(self, text: str) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(str(e)) from e

    def _encode(self, data: Any, stream: TextIO) -> None:
        try:
            yaml.safe_dump(data, stream, default_flow_style=False, sort_keys=False)
        except yaml.YAMLError as e:
            raise ValueError(str(e)) from e


class JSONFileAdaptor(FileAdaptor):
    """JSON file reader and writer."""

    format_name = "JSON"

    def _decode(self, text: str) -> Any:
        return json.loads(text)

    def _encode(self, data: Any, stream: TextIO) -> None:
        json.dump(data, stream, indent=2)
        stream.write("\n")


__all__ = ['FileAdaptor', 'YAMLFileAdaptor', 'JSONFileAdaptor', 'apply_document']
