"""
Codeloom Backend - PHI-Safe Logging
====================================

What:  Removes protected health information (PHI) from values before they
       are written to logs.
How:   `scrub_for_logging()` walks dicts and lists and drops PHI keys;
       `PHIScrubbingFilter` applies it to the arguments of every log record.
Who:   The filter is installed on the root handlers by main.setup_logging().

Key matching ignores case and underscores, so noteText, note_text and
NOTETEXT are all treated as the same key.
"""

import logging
from typing import Any, Dict

PHI_FIELDS = frozenset(
    {
        "note",
        "notetext",
        "text",
        "body",
        "patientname",
        "patientid",
        "patientpseudoid",
        "dob",
        "dateofbirth",
        "mrn",
        "medicalrecordnumber",
        "ssn",
        "socialsecuritynumber",
        "email",
        "phone",
        "address",
    }
)

# Metadata kept when an "encounter" object shows up in a log payload
ENCOUNTER_SAFE_FIELDS = (
    "id",
    "practice_id",
    "provider_id",
    "status",
    "created_at",
    "updated_at",
)


def _normalize(key: Any) -> str:
    return str(key).lower().replace("_", "")


def _safe_encounter(encounter: Dict[Any, Any]) -> Dict[str, Any]:
    by_normalized = {_normalize(key): value for key, value in encounter.items()}
    return {field: by_normalized.get(_normalize(field)) for field in ENCOUNTER_SAFE_FIELDS}


def scrub_for_logging(value: Any) -> Any:
    """
    Return a copy of `value` with PHI removed.

    Scalars are returned unchanged; dicts lose PHI keys; lists and tuples
    are scrubbed element by element.
    """
    if isinstance(value, dict):
        scrubbed: Dict[Any, Any] = {}
        for key, item in value.items():
            normalized = _normalize(key)
            if normalized in PHI_FIELDS:
                continue
            if normalized == "encounter" and isinstance(item, dict):
                scrubbed[key] = _safe_encounter(item)
                continue
            scrubbed[key] = scrub_for_logging(item)
        return scrubbed
    if isinstance(value, list):
        return [scrub_for_logging(item) for item in value]
    if isinstance(value, tuple):
        return tuple(scrub_for_logging(item) for item in value)
    return value


class PHIScrubbingFilter(logging.Filter):
    """
    Logging filter that scrubs mapping and sequence arguments of a record.

    The message template itself is left alone; PHI must only ever travel
    in structured arguments, e.g.
        logger.info("Encounter saved: %s", {"encounter": enc})
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, dict):
            record.args = scrub_for_logging(record.args)
        elif isinstance(record.args, tuple):
            record.args = tuple(scrub_for_logging(arg) for arg in record.args)
        return True
