"""Unit tests for telemetry helpers."""
from __future__ import annotations

import io
import unittest

from core.telemetry import NullTelemetry, StdoutTelemetry
from tests.log_utils import log_test_case


class TelemetryTests(unittest.TestCase):
    def test_null_telemetry_is_noop(self) -> None:
        telemetry = NullTelemetry()

        self.assertIsNone(telemetry.heartbeat("deck", 1.0))
        self.assertIsNone(telemetry.event("deck", "info", "msg"))

    def test_stdout_telemetry_writes_to_stream(self) -> None:
        buffer = io.StringIO()
        telemetry = StdoutTelemetry(stream=buffer)

        telemetry.heartbeat("deck", 1.2, "collection.anki2")
        telemetry.event("deck", "warn", "something", {"rows": 1})

        output = buffer.getvalue().splitlines()
        self.assertIn("[heartbeat] deck +1.2s (collection.anki2)", output)
        self.assertIn("[warn] deck something data={'rows': 1}", output)

        log_test_case(
            "telemetry:stream_output",
            purpose="StdoutTelemetry prints human-readable heartbeat and event lines",
            inputs={"op_id": "deck"},
            output=output,
            status="pass",
        )


if __name__ == "__main__":
    unittest.main()
