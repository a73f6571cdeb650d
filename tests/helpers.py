import uuid

PASSWORD = "password123"

def uniq_email(prefix: str) -> str:
    return f"{prefix}+{uuid.uuid4().hex[:10]}@example.com"

def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def register(client, email: str, username: str = "someone"):
    return client.post("/auth/register", json={"email": email, "username": username, "password": PASSWORD})

def login(client, email: str, password: str = PASSWORD):
    return client.post("/auth/login", json={"email": email, "password": password})

def register_and_login(client, email: str) -> tuple[str, str]:
    r = register(client, email, email.split("@")[0])
    assert r.status_code == 201, r.text
    user_id = r.json()["id"]

    r = login(client, email)
    assert r.status_code == 200, r.text
    return r.json()["access_token"], user_id

def invite(client, jwt: str, group_id: str, *emails: str):
    return client.post(f"/groups/{group_id}/members", json={"emails": list(emails)}, headers=auth(jwt))
