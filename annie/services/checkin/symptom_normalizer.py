"""
Symptom mapping normalization and validation.

Stored check-ins carry their symptoms either as a plain mapping or as an
ordered list of ``(name, record)`` pairs. Everything read from the store is
converted here into one canonical insertion-ordered ``dict`` of
``SymptomRecord`` so that downstream code never branches on representation.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, Optional, Tuple, Union

Number = Union[int, float]


@dataclass
class SymptomRecord:
    """Canonical symptom entry. ``severity`` is None when it failed to coerce."""
    severity: Optional[Number]
    location: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def coerce_severity(value: Any) -> Optional[Number]:
    """
    Numerically coerce a stored severity value.

    Args:
        value: Raw severity (int, float or numeric string)

    Returns:
        The number (integral floats collapse to int), or None if it
        does not parse as a finite number
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        # float() would accept digit-group underscores such as "1_0"
        if not value or "_" in value:
            return None
        try:
            value = float(value)
        except ValueError:
            return None

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value) if value.is_integer() else value

    return None


def _iter_symptom_items(raw: Any) -> Iterable[Tuple[Any, Any]]:
    if isinstance(raw, Mapping):
        return raw.items()

    if isinstance(raw, (list, tuple)):
        return (
            item for item in raw
            if isinstance(item, (list, tuple)) and len(item) == 2
        )

    return ()


def normalize_symptoms(raw: Any) -> Dict[str, SymptomRecord]:
    """
    Convert a stored symptom mapping into the canonical form.

    Entries without a ``severity`` key, or whose record is not a mapping,
    are dropped. Enumeration order of the input is preserved.

    Args:
        raw: Mapping, list of (name, record) pairs, or None

    Returns:
        Ordered dict of symptom name -> SymptomRecord
    """
    symptoms: Dict[str, SymptomRecord] = {}

    for name, record in _iter_symptom_items(raw):
        if not isinstance(name, str):
            continue
        if isinstance(record, SymptomRecord):
            symptoms[name] = record
            continue
        if not isinstance(record, Mapping) or "severity" not in record:
            continue

        symptoms[name] = SymptomRecord(
            severity=coerce_severity(record["severity"]),
            location=record.get("location"),
            notes=record.get("notes"),
        )

    return symptoms


def normalize_checkin(checkin: Dict[str, Any]) -> Dict[str, Any]:
    """Return a shallow copy of a stored check-in with canonical symptoms."""
    normalized = dict(checkin)
    structured = dict(checkin.get("structured") or {})
    structured["symptoms"] = normalize_symptoms(structured.get("symptoms"))
    normalized["structured"] = structured
    return normalized


def symptom_severities(symptoms: Dict[str, SymptomRecord]) -> Dict[str, Number]:
    """Symptom name -> severity for every entry whose severity coerced."""
    return {
        name: record.severity
        for name, record in symptoms.items()
        if record.severity is not None
    }


class SymptomValidator:
    """
    Validates manually entered structured check-in data before it is stored.
    """

    MIN_SEVERITY = 1
    MAX_SEVERITY = 10

    MAX_NOTES_LENGTH = 5000

    @classmethod
    def validate(cls, structured: Any) -> Tuple[bool, Optional[str]]:
        """
        Validate a structured check-in payload.

        Args:
            structured: dict with symptoms, activities, triggers, notes

        Returns:
            tuple of (is_valid, error_message)
        """
        if not isinstance(structured, Mapping):
            return False, "Structured check-in data is required"

        symptoms = structured.get("symptoms", {})
        if not isinstance(symptoms, Mapping):
            return False, "Field 'symptoms' must be an object"

        for name, value in symptoms.items():
            is_valid, error = cls.validate_symptom(name, value)
            if not is_valid:
                return False, error

        for field_name in ("activities", "triggers"):
            values = structured.get(field_name, [])
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                return False, f"Field '{field_name}' must be a list of strings"

        return cls.validate_notes(structured.get("notes", ""))

    @classmethod
    def validate_symptom(cls, name: Any, value: Any) -> Tuple[bool, Optional[str]]:
        """Validate one symptom entry."""
        if not isinstance(name, str) or not name.strip():
            return False, "Symptom names must be non-empty strings"

        if not isinstance(value, Mapping) or "severity" not in value:
            return False, f"Symptom '{name}' requires a severity"

        severity = value["severity"]
        if isinstance(severity, bool) or not isinstance(severity, (int, float)):
            return False, f"Severity for '{name}' must be a number"

        if isinstance(severity, float) and not severity.is_integer():
            return False, f"Severity for '{name}' must be a whole number"

        if severity < cls.MIN_SEVERITY or severity > cls.MAX_SEVERITY:
            return False, (
                f"Severity for '{name}' must be between "
                f"{cls.MIN_SEVERITY} and {cls.MAX_SEVERITY}"
            )

        for optional in ("location", "notes"):
            if value.get(optional) is not None and not isinstance(value[optional], str):
                return False, f"Field '{optional}' for '{name}' must be a string"

        return True, None

    @classmethod
    def validate_notes(cls, notes: Any) -> Tuple[bool, Optional[str]]:
        """
        Validate the free-text notes field.

        Rules:
            - Must be a string (empty allowed)
            - Max 5000 characters after trimming
        """
        if notes is None:
            return True, None

        if not isinstance(notes, str):
            return False, "Notes must be a string"

        if len(notes.strip()) > cls.MAX_NOTES_LENGTH:
            return False, f"Notes cannot exceed {cls.MAX_NOTES_LENGTH} characters"

        return True, None
