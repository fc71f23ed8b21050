"""
Enumerations for Diagnostic Kinds and Duplicate Name Policies

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum

from config import DUPLICATE_POLICY_ERROR, DUPLICATE_POLICY_LAST_WINS


class DiagnosticKind(str, Enum):
    self_dependency = "self_dependency"
    malformed_record = "malformed_record"
    unreadable_record = "unreadable_record"
    duplicate_identity = "duplicate_identity"


class DuplicatePolicy(str, Enum):
    error = DUPLICATE_POLICY_ERROR
    last_wins = DUPLICATE_POLICY_LAST_WINS

    @classmethod
    def from_setting(cls, value: str | DuplicatePolicy | None) -> DuplicatePolicy:
        if value is None:
            from config import settings

            value = settings.duplicate_policy
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"unknown duplicate policy {value!r}; expected one of {[p.value for p in cls]}"
            ) from None
