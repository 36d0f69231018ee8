"""
Tests for the HTTP routes.
"""

import unittest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fastapi.testclient import TestClient

from app import app
from core.constants import MS_PER_HOUR

H = MS_PER_HOUR

WORK_SETTINGS = {
    "standardDayHours": 8,
    "nightTimeStartHour": 22,
    "nightTimeEndHour": 6,
    "treatHolidayAsOvertime": True,
    "shifts": [{"id": "morning", "name": "Mattina", "startHour": 8, "endHour": 14}],
}


def day_entries():
    return [
        {"id": "e1", "timestamp": "2024-03-13T09:00:00", "type": "in"},
        {"id": "e2", "timestamp": "2024-03-13T19:00:00", "type": "out"},
    ]


class TestDaySummaryRoute(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    def test_day_summary(self):
        response = self.client.post("/api/day-summary", json={
            "day": "2024-03-13",
            "entries": day_entries(),
            "workSettings": WORK_SETTINGS,
        })

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["summary"]["standardWorkMs"], 8 * H)
        self.assertEqual(body["summary"]["overtimeDiurnalMs"], 2 * H)
        self.assertEqual(body["intervals"][0]["closingEntryId"], "e2")
        self.assertEqual(body["formatted"]["durations"]["standardWorkMs"], "08:00:00")
        self.assertEqual(body["formatted"]["hours"]["overtimeDiurnalHours"], "02:00")
        self.assertEqual(body["formatted"]["day"], "13/03/2024")

    def test_manual_entries_and_shift(self):
        response = self.client.post("/api/day-summary", json={
            "day": "2024-03-13",
            "entries": day_entries(),
            "workSettings": WORK_SETTINGS,
            "dayInfo": {"shift": "morning"},
            "manualOvertimeEntries": [
                {"id": "m1", "durationMs": H, "type": "code-2041", "usedEntryIds": []},
            ],
        })

        self.assertEqual(response.status_code, 200)
        summary = response.json()["summary"]
        self.assertEqual(summary["overtimeDiurnalMs"], 5 * H)
        self.assertEqual(summary["excessHoursMs"], H)
        self.assertEqual(summary["totalWorkMs"], 11 * H)

    def test_default_settings(self):
        """Without workSettings the configured six hour day applies."""
        response = self.client.post("/api/day-summary", json={
            "day": "2024-03-13",
            "entries": day_entries(),
        })

        self.assertEqual(response.status_code, 200)
        summary = response.json()["summary"]
        self.assertEqual(summary["standardWorkMs"], 6 * H)
        self.assertEqual(summary["overtimeDiurnalMs"], 4 * H)

    def test_empty_day(self):
        response = self.client.post("/api/day-summary", json={"day": "2024-03-13"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["summary"]["totalWorkMs"], 0)
        self.assertEqual(response.json()["intervals"], [])

    def test_leave_label(self):
        response = self.client.post("/api/day-summary", json={
            "day": "2024-03-13",
            "entries": day_entries(),
            "dayInfo": {"leave": {"type": "vacation", "hours": 2}},
        })

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["formatted"]["leave"], "Ferie")
        self.assertEqual(response.json()["summary"]["standardWorkMs"], 4 * H)

    def test_leave_label_unknown_code(self):
        response = self.client.post("/api/day-summary", json={
            "day": "2024-03-13",
            "dayInfo": {"leave": {"type": "code-999"}},
        })

        self.assertEqual(response.json()["formatted"]["leave"], "Unknown (999)")

    def test_no_leave_label(self):
        response = self.client.post("/api/day-summary", json={"day": "2024-03-13", "entries": day_entries()})

        self.assertIsNone(response.json()["formatted"]["leave"])

    def test_utc_punches_across_dst_change(self):
        """One real hour of work spanning the autumn clock change stays one hour."""
        response = self.client.post("/api/day-summary", json={
            "day": "2026-10-25",
            "entries": [
                {"id": "e1", "timestamp": "2026-10-25T00:30:00Z", "type": "in"},
                {"id": "e2", "timestamp": "2026-10-25T01:30:00Z", "type": "out"},
            ],
        })

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["summary"]["totalWorkMs"], H)

    def test_invalid_entry_type(self):
        entries = day_entries()
        entries[0]["type"] = "pause"
        response = self.client.post("/api/day-summary", json={"day": "2024-03-13", "entries": entries})

        self.assertEqual(response.status_code, 422)

    def test_duplicate_entry_ids(self):
        entries = day_entries()
        entries[1]["id"] = "e1"
        response = self.client.post("/api/day-summary", json={"day": "2024-03-13", "entries": entries})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["details"]["duplicate_ids"], ["e1"])


class TestShiftRoutes(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.json()["status"], "ok")

    def test_list_shifts(self):
        response = self.client.get("/api/shifts")

        self.assertEqual(response.status_code, 200)
        ids = [s["id"] for s in response.json()]
        self.assertIn("morning", ids)
        self.assertIn("rest", ids)

    def test_shift_detail(self):
        response = self.client.get("/api/shifts/night")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["endHour"], 3)
        self.assertEqual(response.json()["borderColor"], "border-purple-400")

    def test_unknown_shift(self):
        response = self.client.get("/api/shifts/ghost")

        self.assertEqual(response.status_code, 404)
        self.assertIn("error_id", response.json())


if __name__ == '__main__':
    unittest.main()
