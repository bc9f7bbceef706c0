"""Tests for user endpoints."""

from httpx import AsyncClient


async def test_create_user(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/users",
        json={"name": "Tina Teacher", "email": "tina@example.com", "role": "teacher"},
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["id"] > 0
    assert data["role"] == "teacher"
    assert "created_at" in data


async def test_role_defaults_to_student(client: AsyncClient) -> None:
    resp = await client.post("/api/users", json={"name": "Sam", "email": "sam@example.com"})
    assert resp.status_code == 201
    assert resp.json()["role"] == "student"


async def test_duplicate_email(client: AsyncClient) -> None:
    body = {"name": "Sam", "email": "sam@example.com"}
    assert (await client.post("/api/users", json=body)).status_code == 201
    resp = await client.post("/api/users", json=body)
    assert resp.status_code == 409


async def test_invalid_payloads(client: AsyncClient) -> None:
    resp = await client.post("/api/users", json={"name": "Sam", "email": "not-an-email"})
    assert resp.status_code == 422
    resp = await client.post(
        "/api/users", json={"name": "Sam", "email": "sam@example.com", "role": "owner"}
    )
    assert resp.status_code == 422


async def test_get_user(client: AsyncClient) -> None:
    created = (
        await client.post("/api/users", json={"name": "Sam", "email": "sam@example.com"})
    ).json()
    resp = await client.get(f"/api/users/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["email"] == "sam@example.com"

    assert (await client.get("/api/users/999")).status_code == 404


async def test_list_subscriptions(client: AsyncClient) -> None:
    teacher = (
        await client.post(
            "/api/users",
            json={"name": "Tina Teacher", "email": "tina@example.com", "role": "teacher"},
        )
    ).json()
    other = (
        await client.post(
            "/api/users",
            json={"name": "Tom Teacher", "email": "tom@example.com", "role": "teacher"},
        )
    ).json()
    student = (
        await client.post("/api/users", json={"name": "Sam", "email": "sam@example.com"})
    ).json()
    await client.put(
        f"/api/teachers/{teacher['id']}/profile",
        json={"hourly_rate": 40.0, "lesson_durations": [45]},
    )

    resp = await client.get(f"/api/users/{student['id']}/subscriptions")
    assert resp.status_code == 200
    assert resp.json() == []

    await client.post(
        f"/api/teachers/{teacher['id']}/subscribers", json={"student_id": student["id"]}
    )

    resp = await client.get(f"/api/users/{student['id']}/subscriptions")
    data = resp.json()
    assert [t["id"] for t in data] == [teacher["id"]]
    assert data[0]["profile"]["lesson_durations"] == [45]
    assert other["id"] not in [t["id"] for t in data]

    assert (await client.get("/api/users/999/subscriptions")).status_code == 404
