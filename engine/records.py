"""
Validated package records and build diagnostics, normalizing raw package descriptors (lists or manifest-style name/version mappings) before they reach the graph builder.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from engine.enums import DiagnosticKind
from engine.exceptions import MalformedRecord


class PackageRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = Field(min_length=1)
    directory: str = ""
    dependencies: Tuple[str, ...] = ()
    dev_dependencies: Tuple[str, ...] = Field(default=(), alias="devDependencies")

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("directory", mode="before")
    @classmethod
    def _default_directory(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("dependencies", "dev_dependencies", mode="before")
    @classmethod
    def _dependency_names(cls, value: Any) -> Any:
        if value is None:
            return ()
        # package.json style {"name": "^1.0.0"}
        if isinstance(value, Mapping):
            value = list(value.keys())
        if isinstance(value, (str, bytes)):
            raise ValueError("expected a list of dependency names, got a single string")
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError(f"expected a list of dependency names, got {type(value).__name__}")
        names = set()
        for item in value:
            if not isinstance(item, str):
                raise ValueError(f"dependency name must be a string, got {type(item).__name__}")
            item = item.strip()
            if item:
                names.add(item)
        return tuple(sorted(names))

    def declares(self, name: str) -> bool:
        return name in self.dependencies or name in self.dev_dependencies


class Diagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    package: Optional[str] = None
    message: str


def _summarize(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def raw_name(raw: Any) -> Optional[str]:
    if isinstance(raw, PackageRecord):
        return raw.name
    if isinstance(raw, Mapping):
        name = raw.get("name")
        if isinstance(name, str) and name.strip():
            return name.strip()
    return None


def parse_record(raw: Any) -> PackageRecord:
    if isinstance(raw, PackageRecord):
        return raw
    if not isinstance(raw, Mapping):
        raise MalformedRecord(f"expected a mapping, got {type(raw).__name__}", raw)
    try:
        return PackageRecord.model_validate(dict(raw))
    except ValidationError as exc:
        raise MalformedRecord(_summarize(exc), raw) from exc
