"""
Log Records

Immutable records emitted by LoggingInterceptor, serialized to JSON before
they reach a LoggerServiceBase backend.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel


@dataclass(frozen=True)
class LogParameter:
    name: str
    value: Any
    type: str


@dataclass(frozen=True)
class LogRecord:
    method_name: str
    parameters: Tuple[LogParameter, ...] = field(default_factory=tuple)
    user: str = "?"
    exception_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "method_name": self.method_name,
            "parameters": [
                {"name": p.name, "value": _parameter_value(p), "type": p.type}
                for p in self.parameters
            ],
            "user": self.user,
        }
        if self.exception_message is not None:
            data["exception_message"] = self.exception_message
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


REDACTED = "***"


def _redact(data: Any) -> Any:
    if isinstance(data, dict):
        return {
            key: REDACTED if _is_secret(key) else _redact(item)
            for key, item in data.items()
        }
    if isinstance(data, list):
        return [_redact(item) for item in data]
    return data


def _is_secret(name: Any) -> bool:
    return "password" in str(name).lower()


def _parameter_value(parameter: LogParameter) -> Any:
    if _is_secret(parameter.name):
        return REDACTED
    return _plain(parameter.value)


def _plain(value: Any) -> Any:
    """Convert pydantic models (request DTOs) into JSON-friendly dicts, masking passwords."""
    if isinstance(value, BaseModel):
        return _redact(value.model_dump(mode="json"))
    if isinstance(value, dict):
        return _redact(value)
    return value
