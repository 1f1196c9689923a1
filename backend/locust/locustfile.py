"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags contention  # Many participants, one calendar
  locust -f locustfile.py --tags read        # Schedule and balance views
  locust -f locustfile.py --tags edge        # Test bad input
  locust -f locustfile.py                    # All tests
"""

import itertools
import random
from locust import HttpUser, task, between, tag, events

TRAINER_ID = 10
ADMIN_IDS = [1, 2, 3]
SLOTS_PER_DAY = 48

# Shared state
_participant_ids = itertools.count(1000)
SETUP_DONE = False


def caller(identity):
    return {"X-Caller-Identity": identity}


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "="*60)
    print(f"SETUP: admins {ADMIN_IDS}, trainer {TRAINER_ID} with {SLOTS_PER_DAY} slots")
    print("="*60)


def ensure_setup(client):
    """Register the fee-receiving admins and the contested trainer once."""
    global SETUP_DONE
    if SETUP_DONE:
        return
    for admin_id in ADMIN_IDS:
        client.post("/api/v1/admins/",
            json={"id": admin_id, "name": f"Admin {admin_id}", "age": 40},
            headers=caller(f"load-admin-{admin_id}"))
    client.post("/api/v1/trainers/",
        json={"id": TRAINER_ID, "name": "Load Trainer", "age": 35, "gender": "female"},
        headers=caller("load-trainer"))
    SETUP_DONE = True


def register_participant(client):
    participant_id = next(_participant_ids)
    identity = f"load-participant-{participant_id}"
    resp = client.post("/api/v1/participants/",
        json={
            "id": participant_id,
            "name": f"Participant {participant_id}",
            "age": random.randint(18, 70),
            "gender": random.choice(["female", "male", "other"]),
            "district": random.choice(["Riverside", "Hillside", "Old Town"]),
            "training_interest": random.randint(0, 2),
            "has_completed_training": False,
        },
        headers=caller(identity))
    if resp.status_code == 201:
        return participant_id, identity
    return None, None


class ContentionUser(HttpUser):
    """
    TEST 1: Contention - many participants -> 48 slots of one trainer

    Run: locust -f locustfile.py --tags contention -u 200 -r 50 --run-time 30s

    After test, verify:
      GET /api/v1/trainers/10/schedule lists no booked slot
      sum(GET /api/v1/admins/balances) == number of 201 responses
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        ensure_setup(self.client)
        self.participant_id, self.identity = register_participant(self.client)

    @tag("contention")
    @task
    def book_contested_slot(self):
        """Everyone fights for the same calendar."""
        if not self.participant_id:
            return

        with self.client.post("/api/v1/bookings/",
            json={
                "trainer_id": TRAINER_ID,
                "participant_id": self.participant_id,
                "slot_index": random.randrange(SLOTS_PER_DAY),
            },
            headers=caller(self.identity),
            name="/api/v1/bookings/",
            catch_response=True
        ) as resp:
            if resp.status_code == 201:
                resp.success()
            elif resp.status_code in (402, 409):
                resp.success()  # Expected: slot taken or balance spent
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class ReadUser(HttpUser):
    """
    TEST 2: Read throughput - views queue behind the ledger lock

    Run: locust -f locustfile.py --tags read -u 100 -r 20 --run-time 60s
    """
    wait_time = between(0.1, 0.5)

    def on_start(self):
        ensure_setup(self.client)

    @tag("read")
    @task(10)
    def trainer_schedule(self):
        self.client.get(f"/api/v1/trainers/{TRAINER_ID}/schedule",
            name="/api/v1/trainers/{id}/schedule")

    @tag("read")
    @task(3)
    def admin_balances(self):
        self.client.get("/api/v1/admins/balances")

    @tag("read")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        ensure_setup(self.client)
        self.participant_id, self.identity = register_participant(self.client)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def unknown_trainer(self):
        with self.client.post("/api/v1/bookings/",
            json={"trainer_id": 999999, "participant_id": self.participant_id or 1, "slot_index": 0},
            headers=caller(self.identity or "nobody"),
            catch_response=True
        ) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def slot_out_of_range(self):
        with self.client.post("/api/v1/bookings/",
            json={"trainer_id": TRAINER_ID, "participant_id": self.participant_id or 1, "slot_index": 48},
            headers=caller(self.identity or "nobody"),
            catch_response=True
        ) as resp:
            self._expect(resp, [400, 402, 403, 404])

    @tag("edge")
    @task
    def book_for_someone_else(self):
        with self.client.post("/api/v1/bookings/",
            json={"trainer_id": TRAINER_ID, "participant_id": self.participant_id or 1, "slot_index": 0},
            headers=caller("load-intruder"),
            catch_response=True
        ) as resp:
            self._expect(resp, [403, 404])

    @tag("edge")
    @task
    def zero_id_registration(self):
        with self.client.post("/api/v1/admins/",
            json={"id": 0, "name": "Zero", "age": 30},
            headers=caller(f"load-zero-{random.randint(0, 10**9)}"),
            catch_response=True
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/v1/bookings/",
            data="not json at all",
            headers=caller(self.identity or "nobody"),
            catch_response=True
        ) as resp:
            self._expect(resp, [400, 422])

    @tag("edge")
    @task
    def missing_identity(self):
        with self.client.post("/api/v1/bookings/",
            json={"trainer_id": TRAINER_ID, "participant_id": 1, "slot_index": 0},
            catch_response=True
        ) as resp:
            self._expect(resp, [401])
