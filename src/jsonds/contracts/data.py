"""Data contracts shared by the selector, merger, loop and collaborators."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from pydantic import BaseModel, Field

# A decoded JSON value. Merge and evaluation code matches on these shapes
# rather than casting.
JsonValue = Union[
    str, int, float, bool, None, list["JsonValue"], dict[str, "JsonValue"]
]

Record = dict[str, Any]

FILES_PARAM = "files"
DIRS_PARAM = "directories"
FILE_ENCODING_PARAM = "fileEncoding"
SCRIPT_TYPE_PARAM = "script_type"

# Keys the connector interprets itself; never copied into emitted records.
RECOGNIZED_PARAMS = frozenset({FILES_PARAM, DIRS_PARAM, FILE_ENCODING_PARAM, SCRIPT_TYPE_PARAM})

DEFAULT_FILE_ENCODING = "utf-8"
DEFAULT_SCRIPT_TYPE = "python"
DEFAULT_FILE_SUFFIXES: tuple[str, ...] = (".json", ".jsonl")


@dataclass(frozen=True)
class DataStoreParams:
    """Ordered, read-only string parameters supplied by the caller.

    Recognized keys are files, directories, fileEncoding and script_type.
    Every other key passes through untouched into the merge context.
    """

    values: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, values: Mapping[str, Any] | None = None) -> "DataStoreParams":
        """Create params, converting non-string values (e.g. from YAML) to str."""
        converted = {
            str(k): v if isinstance(v, str) else str(v)
            for k, v in (values or {}).items()
            if v is not None
        }
        return cls(values=MappingProxyType(converted))

    def get_as_string(self, key: str, default: str | None = None) -> str | None:
        """Get a parameter, falling back to default when absent."""
        return self.values.get(key, default)

    def as_dict(self) -> dict[str, str]:
        """Return a fresh, mutable copy preserving insertion order."""
        return dict(self.values)

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __len__(self) -> int:
        return len(self.values)


class DataConfig(BaseModel):
    """Identifies the data-config a run belongs to.

    Passed through to the failure recorder so failures can be traced
    back to the configuration that produced them.
    """

    model_config = {"frozen": True}

    id: str = Field(default="default", description="Data config identifier")
    name: str = Field(default="json", description="Human-readable name")
    handler_name: str = Field(default="JsonDataStore")


@dataclass
class StatsKey:
    """Correlation key for one record's stats and failure entries.

    id is "<absolute path>@<1-based line number>". url is attached at most
    once, when the merged record carries a string url field.
    """

    id: str
    url: str | None = None

    @classmethod
    def for_line(cls, path: str, line_number: int) -> "StatsKey":
        return cls(id=f"{path}@{line_number}")
