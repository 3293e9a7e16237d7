"""
Codeloom Backend - PHI Scrubbing Tests
=======================================

What we test:
    ✅ PHI keys are removed regardless of case or underscores
    ✅ Nested dicts and lists are scrubbed, the input is not mutated
    ✅ Encounter payloads are reduced to their safe metadata
    ✅ The logging filter scrubs record arguments before formatting
"""

import logging

from codeloom.utils.phi import PHIScrubbingFilter, scrub_for_logging


class TestScrubForLogging:

    def test_removes_phi_keys(self):
        payload = {"practice_id": "p-1", "noteText": "chest pain", "patient_name": "Jane", "MRN": "42"}
        assert scrub_for_logging(payload) == {"practice_id": "p-1"}

    def test_nested_structures(self):
        payload = {"items": [{"email": "a@b.c", "status": "ok"}, ("x", {"ssn": "000"})]}
        assert scrub_for_logging(payload) == {"items": [{"status": "ok"}, ("x", {})]}

    def test_input_not_mutated(self):
        payload = {"dob": "1970-01-01", "id": 1}
        scrub_for_logging(payload)
        assert payload == {"dob": "1970-01-01", "id": 1}

    def test_encounter_reduced_to_safe_fields(self):
        payload = {
            "encounter": {
                "id": "e-1",
                "practiceId": "p-1",
                "status": "draft",
                "note_text": "patient reports...",
                "patientPseudoId": "x9",
            }
        }
        assert scrub_for_logging(payload) == {
            "encounter": {
                "id": "e-1",
                "practice_id": "p-1",
                "provider_id": None,
                "status": "draft",
                "created_at": None,
                "updated_at": None,
            }
        }

    def test_scalars_unchanged(self):
        assert scrub_for_logging("plain message") == "plain message"
        assert scrub_for_logging(None) is None


class TestPHIScrubbingFilter:

    def _record(self, args):
        return logging.LogRecord(
            name="codeloom.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="payload: %s",
            args=args,
            exc_info=None,
        )

    def test_tuple_args_scrubbed(self):
        record = self._record(({"phone": "555", "status": "ok"},))

        assert PHIScrubbingFilter().filter(record) is True
        assert record.getMessage() == "payload: {'status': 'ok'}"

    def test_plain_args_untouched(self):
        record = self._record(("p-1",))
        PHIScrubbingFilter().filter(record)
        assert record.getMessage() == "payload: p-1"
