import unittest

from newsdesk.core.telemetry import Telemetry


class TelemetryTests(unittest.TestCase):
    def test_track_records_success_and_duration(self):
        telemetry = Telemetry(service_name="test")
        with telemetry.track("repo.topic", "list"):
            pass
        self.assertEqual(telemetry.count("repo.topic", "list", "success"), 1)
        snapshot = telemetry.snapshot()
        self.assertEqual(snapshot["service"], "test")
        self.assertEqual(snapshot["durations"][0]["component"], "repo.topic")

    def test_track_records_error_and_reraises(self):
        telemetry = Telemetry()
        with self.assertRaises(RuntimeError):
            with telemetry.track("repo.news", "create"):
                raise RuntimeError("boom")
        self.assertEqual(telemetry.count("repo.news", "create", "error"), 1)
        self.assertEqual(telemetry.count("repo.news", "create", "success"), 0)

    def test_disabled_telemetry_records_nothing(self):
        telemetry = Telemetry(enabled=False)
        with telemetry.track("repo.news", "get"):
            pass
        telemetry.record("http", "GET /health", "2xx", 1.5)
        snapshot = telemetry.snapshot()
        self.assertFalse(snapshot["enabled"])
        self.assertEqual(snapshot["calls"], [])
        self.assertEqual(telemetry.count("http", "GET /health"), 0)

    def test_instances_are_isolated(self):
        first, second = Telemetry(), Telemetry()
        first.record("http", "GET /", "2xx")
        self.assertEqual(second.count("http", "GET /"), 0)
