import unittest

from fastapi import HTTPException

from explainer.services.explain.error_policy import (
    build_error_detail,
    build_http_error_payload,
    build_unexpected_error_detail,
    to_http_exception,
)
from explainer.services.explain.errors import ConfigError, UpstreamFailure, ValidationError


class ExplainErrorPolicyTests(unittest.TestCase):
    def test_validation_error_maps_to_400_payload(self) -> None:
        exc = to_http_exception(ValidationError("Missing or empty 'message' in request body"))

        self.assertEqual(exc.status_code, 400)
        self.assertEqual(build_http_error_payload(exc), {"error": "Missing or empty 'message' in request body"})

    def test_config_error_has_no_details(self) -> None:
        detail = build_error_detail(ConfigError("Server misconfiguration: missing GROQ_API_KEY"))

        self.assertEqual(detail, {"error": "Server misconfiguration: missing GROQ_API_KEY"})

    def test_upstream_failure_reports_details(self) -> None:
        exc = to_http_exception(UpstreamFailure("ai_primary_failed:timed out"))

        self.assertEqual(exc.status_code, 500)
        self.assertEqual(exc.detail, {"error": "Server error", "details": "ai_primary_failed:timed out"})

    def test_unexpected_detail_is_compacted_and_bounded(self) -> None:
        detail = build_unexpected_error_detail(RuntimeError("line one\n   line two " + "x" * 400))

        self.assertEqual(detail["error"], "Server error")
        self.assertTrue(detail["details"].startswith("line one line two"))
        self.assertLessEqual(len(detail["details"]), 300)

    def test_empty_exception_falls_back_to_type_name(self) -> None:
        self.assertEqual(build_unexpected_error_detail(RuntimeError())["details"], "RuntimeError")

    def test_framework_string_detail_is_wrapped(self) -> None:
        payload = build_http_error_payload(HTTPException(status_code=405, detail="Method Not Allowed"))

        self.assertEqual(payload, {"error": "Method Not Allowed"})


if __name__ == "__main__":
    unittest.main()
