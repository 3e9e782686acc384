#!/usr/bin/env python3
"""
Simple smoke test for a running difftree server.

Usage:
  API_URL (optional, default http://localhost:8080)
  DIFFTREE_API_KEY (optional) exported into env for authenticated endpoints

Run:
  python3 scripts/smoke_test.py
"""

import os
import sys

import httpx

API_URL = os.getenv("API_URL", "http://localhost:8080").rstrip("/")
API_KEY = os.getenv("DIFFTREE_API_KEY", "")
TIMEOUT = 10

SAMPLE_DIFF = (
    "M\t/tank/home/\n"
    "+\t/tank/home/notes.txt\n"
    "-\t/tank/home/old.log\n"
    "R\t/tank/home/draft.md -> /tank/home/final.md\n"
    "+\t/tank/home/scratch\n"
    "-\t/tank/home/scratch\n"
)


def headers_with_auth():
    h = {}
    if API_KEY:
        h["X-API-Key"] = API_KEY
    return h


def fail(msg):
    print("FAIL:", msg)
    sys.exit(2)


def ok(msg):
    print("OK:", msg)


def main():
    client = httpx.Client(timeout=TIMEOUT)
    # 1) health
    try:
        r = client.get(f"{API_URL}/api/v1/health")
    except Exception as e:
        fail(f"health request failed: {e}")
    if r.status_code != 200 or not r.json().get("ok"):
        fail(f"health returned {r.status_code}: {r.text}")
    ok("health OK")

    # 2) upload
    r = client.post(
        f"{API_URL}/api/v1/trees",
        headers=headers_with_auth(),
        files={"file": ("smoke.diff", SAMPLE_DIFF.encode(), "text/plain")},
    )
    if r.status_code != 200:
        fail(f"upload failed: {r.status_code} {r.text}")
    body = r.json()
    tree_id = body.get("id")
    if not tree_id or body["summary"]["record_count"] != 6:
        fail(f"unexpected upload response: {r.text}")
    ok(f"upload OK (id={tree_id})")

    # 3) re-prune without add+del paths
    r = client.get(
        f"{API_URL}/api/v1/trees/{tree_id}",
        headers=headers_with_auth(),
        params={"include_add_del": "false"},
    )
    if r.status_code != 200:
        fail(f"prune failed: {r.status_code} {r.text}")
    home = r.json()["tree"]["children"]["tank"]["children"]["home"]
    if "scratch" in home["children"]:
        fail(f"add+del path survived pruning: {home}")
    ok("prune OK")

    # 4) text rendering
    r = client.get(f"{API_URL}/api/v1/trees/{tree_id}/text", headers=headers_with_auth())
    if r.status_code != 200 or "notes.txt" not in r.text:
        fail(f"text render failed: {r.status_code} {r.text}")
    ok("text render OK")

    # 5) delete cleanup
    r = client.delete(f"{API_URL}/api/v1/trees/{tree_id}", headers=headers_with_auth())
    if r.status_code != 200:
        print("WARN: delete returned unexpected status:", r.status_code, r.text)
    else:
        ok("delete (cleanup) OK")

    print("\nSMOKE TEST PASSED\n")
    client.close()


if __name__ == "__main__":
    main()
