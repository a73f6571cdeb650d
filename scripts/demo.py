from __future__ import annotations

import os
import time
import uuid

import requests
from rich import print

BASE = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")
PASSWORD = "demo-password"

def post(path: str, *, jwt: str | None = None, json: dict | None = None) -> requests.Response:
    headers = {"content-type": "application/json"}
    if jwt:
        headers["authorization"] = f"bearer {jwt}"
    return requests.post(f"{BASE}{path}", headers=headers, json=json, timeout=10)

def put(path: str, *, jwt: str, json: dict) -> requests.Response:
    headers = {"content-type": "application/json", "authorization": f"bearer {jwt}"}
    return requests.put(f"{BASE}{path}", headers=headers, json=json, timeout=10)

def get(path: str, *, jwt: str | None = None) -> requests.Response:
    headers = {}
    if jwt:
        headers["authorization"] = f"bearer {jwt}"
    return requests.get(f"{BASE}{path}", headers=headers, timeout=10)

def register_and_login(email: str, username: str) -> tuple[str, str]:
    r = post("/auth/register", json={"email": email, "username": username, "password": PASSWORD})
    r.raise_for_status()

    r2 = post("/auth/login", json={"email": email, "password": PASSWORD})
    r2.raise_for_status()
    body = r2.json()
    return body["access_token"], body["user_id"]

def wait_ready(timeout_s: float = 30.0) -> None:
    deadline = time.time() + timeout_s
    last_err: Exception | None = None

    while time.time() < deadline:
        try:
            r = get("/ready")
            if r.status_code == 200:
                return
        except requests.RequestException as e:
            last_err = e
        time.sleep(0.5)

    if last_err:
        raise RuntimeError(f"api not ready after {timeout_s}s (last error: {last_err})")
    raise RuntimeError(f"api not ready after {timeout_s}s")

def main() -> None:
    print("[bold]demo: register -> create group -> invite -> register invitee -> accept -> list[/bold]")

    wait_ready()
    print("[green]ready ok[/green]")

    suffix = uuid.uuid4().hex[:8]
    owner_email = f"owner+{suffix}@example.com"
    invitee_email = f"invitee+{suffix}@example.com"

    owner_jwt, _ = register_and_login(owner_email, "owner")
    print("owner authed")

    r = post("/groups", jwt=owner_jwt, json={"name": f"demo group {suffix}"})
    r.raise_for_status()
    group_id = r.json()["id"]
    print("created group:", group_id)

    # invitee has no account yet: pending invite
    r = post(f"/groups/{group_id}/members", jwt=owner_jwt, json={"emails": [invitee_email]})
    r.raise_for_status()
    print("invited:", invitee_email)

    # registering claims the pending invite
    invitee_jwt, invitee_id = register_and_login(invitee_email, "invitee")
    print("invitee authed")

    r = put(f"/groups/{group_id}/members/{invitee_id}", jwt=invitee_jwt, json={"is_accepted": True})
    r.raise_for_status()
    print("invite accepted")

    r = get(f"/groups/{group_id}/members/me", jwt=invitee_jwt)
    r.raise_for_status()
    print("access:", r.json())

    r = get(f"/groups/{group_id}/members", jwt=owner_jwt)
    r.raise_for_status()
    print("listed members:", len(r.json()))
    print("[bold green]demo complete[/bold green]")

if __name__ == "__main__":
    main()
