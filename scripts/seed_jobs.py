"""
Seed script: queues a variety of sample car jobs for demo purposes.

Usage:
    python -m scripts.seed_jobs

This queues:
- one job per wash tier
- a job with every add-on
- a job with a duplicated add-on (the worker performs it once)

Run this with the API and worker up, then watch the worker log for
"--> ... performed for customer ...!" lines.
"""

import httpx

BASE_URL = "http://localhost:8000"


def seed():
    client = httpx.Client(base_url=BASE_URL, timeout=10.0)

    jobs = [
        {
            "customer_id": 123456,
            "make": "Toyota",
            "wash_tier": "Basic",
            "addons": ["TireShine"],
        },
        {
            "customer_id": 8675309,
            "make": "Ford",
            "wash_tier": "Awesome",
            "addons": [],
        },
        {
            "customer_id": 424242,
            "make": "Tesla",
            "wash_tier": "ToTheMax",
            "addons": ["TireShine", "InteriorClean", "HandWaxAndShine"],
        },
        {
            "customer_id": 777001,
            "make": "Subaru",
            "wash_tier": "Basic",
            "addons": ["HandWaxAndShine", "HandWaxAndShine", "InteriorClean"],
        },
    ]

    print(f"Queueing {len(jobs)} car jobs on {BASE_URL}...\n")

    for job in jobs:
        resp = client.post("/jobs/", json=job)
        resp.raise_for_status()
        data = resp.json()
        addons = ", ".join(data["addons"]) or "no add-ons"
        print(f"  [{data['wash_tier']}] customer {data['customer_id']} ({addons}), queue={data['queue_length']}")

    print("\nDone! Jobs are now flowing to the worker.")
    print("Queue depth:  curl http://localhost:8000/jobs/queue")


if __name__ == "__main__":
    seed()
