from __future__ import annotations

import threading
import time
import unittest

from app import create_app
from scheduling.store import MemoryBackend


class InterviewRoutesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.app = create_app(backend=MemoryBackend(), slot_minutes=30)
        self.client = self.app.test_client()

    def schedule(self, **overrides):
        body = {
            "candidate": "Ada",
            "interviewer": "Grace",
            "start": "2025-03-10T10:00:00Z",
            "end": "2025-03-10T10:30:00Z",
            "type": "Technical",
        }
        body.update(overrides)
        return self.client.post("/api/interviews", json=body)

    def test_schedule_and_list(self) -> None:
        resp = self.schedule()
        self.assertEqual(resp.status_code, 201)
        created = resp.get_json()["interview"]
        self.assertEqual(created["type"], "Technical")

        listed = self.client.get("/api/interviews").get_json()["interviews"]
        self.assertEqual([i["id"] for i in listed], [created["id"]])

    def test_schedule_without_end_books_a_slot(self) -> None:
        body = self.schedule(end=None).get_json()["interview"]
        self.assertEqual(body["start"], "2025-03-10T10:00:00Z")
        self.assertEqual(body["end"], "2025-03-10T10:30:00Z")

    def test_conflict_returns_409_with_colliding_record(self) -> None:
        first = self.schedule().get_json()["interview"]
        resp = self.schedule(candidate="Alan", start="2025-03-10T10:15:00Z", end="2025-03-10T10:45:00Z")
        self.assertEqual(resp.status_code, 409)
        payload = resp.get_json()
        self.assertEqual(payload["error"], "scheduling_conflict")
        self.assertEqual(payload["conflict"]["id"], first["id"])

    def test_invalid_input_returns_400(self) -> None:
        resp = self.schedule(type="Lunch")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()["error"], "invalid_interview")

        resp = self.client.post("/api/interviews", data="nope", content_type="text/plain")
        self.assertEqual(resp.status_code, 400)

    def test_get_edit_move_delete(self) -> None:
        created = self.schedule().get_json()["interview"]
        url = f"/api/interviews/{created['id']}"

        self.assertEqual(self.client.get(url).get_json()["interview"], created)

        edited = self.client.put(url, json={**created, "candidate": "Ada Lovelace"}).get_json()
        self.assertEqual(edited["interview"]["candidate"], "Ada Lovelace")

        moved = self.client.patch(
            f"{url}/time",
            json={"start": "2025-03-10T10:05:00Z", "end": "2025-03-10T10:35:00Z"},
        )
        self.assertEqual(moved.status_code, 200)
        self.assertEqual(moved.get_json()["interview"]["start"], "2025-03-10T10:05:00Z")

        remaining = self.client.delete(url).get_json()["interviews"]
        self.assertEqual(remaining, [])
        self.assertEqual(self.client.get(url).status_code, 404)

    def test_unknown_ids_are_no_ops(self) -> None:
        self.schedule()
        resp = self.client.put("/api/interviews/99", json={"candidate": "x"})
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(resp.get_json()["interview"])
        self.assertEqual(len(resp.get_json()["interviews"]), 1)

        resp = self.client.delete("/api/interviews/99")
        self.assertEqual(len(resp.get_json()["interviews"]), 1)

    def test_naive_timestamps_are_rejected(self) -> None:
        resp = self.schedule(start="2025-03-10T10:00", end="2025-03-10T10:30")
        self.assertEqual(resp.status_code, 400)
        details = resp.get_json()["details"]
        self.assertEqual(len(details), 2)
        self.assertIn("UTC offset", details[0])
        self.assertEqual(self.client.get("/api/interviews").get_json()["interviews"], [])

    def test_offset_timestamps_are_stored_as_utc(self) -> None:
        body = self.schedule(start="2025-03-10T12:00:00+02:00", end=None).get_json()["interview"]
        self.assertEqual(body["start"], "2025-03-10T10:00:00Z")


class SlowBackend(MemoryBackend):
    def set(self, key, value):
        time.sleep(0.1)
        super().set(key, value)


class ConcurrentRequestsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.app = create_app(backend=SlowBackend(), slot_minutes=30)

    def post_concurrently(self, bodies):
        codes = []

        def post(body):
            resp = self.app.test_client().post("/api/interviews", json=body)
            codes.append(resp.status_code)

        threads = [threading.Thread(target=post, args=(body,)) for body in bodies]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        stored = self.app.test_client().get("/api/interviews").get_json()["interviews"]
        return sorted(codes), stored

    def test_same_slot_is_booked_once(self) -> None:
        body = {"candidate": "Ada", "interviewer": "Grace", "start": "2025-03-10T10:00:00Z", "type": "HR"}
        codes, stored = self.post_concurrently([body, {**body, "candidate": "Alan"}])
        self.assertEqual(codes, [201, 409])
        self.assertEqual(len(stored), 1)

    def test_parallel_bookings_are_all_kept(self) -> None:
        bodies = [
            {"candidate": f"C{i}", "interviewer": f"I{i}", "start": "2025-03-10T10:00:00Z", "type": "HR"}
            for i in range(4)
        ]
        codes, stored = self.post_concurrently(bodies)
        self.assertEqual(codes, [201] * 4)
        self.assertEqual(len(stored), 4)
        self.assertEqual(len({i["id"] for i in stored}), 4)


if __name__ == "__main__":
    unittest.main()
