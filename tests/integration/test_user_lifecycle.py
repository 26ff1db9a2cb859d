"""End-to-end walk through the user lifecycle over HTTP."""

from fastapi.testclient import TestClient


def test_create_lookup_conflict_delete(client: TestClient):
    jane = {
        "firstName": "Jane",
        "lastName": "Doe",
        "birthdate": "1999-06-15",
        "email": "jane@x.com",
    }

    # create
    response = client.post("/v1/users", json=jane)
    assert response.status_code == 201
    user_id = response.json()["id"]
    assert response.json() == {**jane, "id": user_id}

    # lookup by email
    response = client.get("/v1/users/email", params={"email": "jane@x.com"})
    assert response.status_code == 200
    assert response.json() == [{"id": user_id, "email": "jane@x.com"}]

    # duplicate
    response = client.post("/v1/users", json={**jane, "firstName": "Other"})
    assert response.status_code == 409
    assert response.text == "Email jane@x.com is already in use."

    # delete
    response = client.delete(f"/v1/users/{user_id}")
    assert response.status_code == 204

    response = client.get(f"/v1/users/{user_id}")
    assert response.status_code == 404


def test_email_freed_after_delete(client: TestClient):
    body = {
        "firstName": "Max",
        "lastName": "Power",
        "birthdate": "1970-01-01",
        "email": "max@x.com",
    }
    first_id = client.post("/v1/users", json=body).json()["id"]
    client.delete(f"/v1/users/{first_id}")

    response = client.post("/v1/users", json=body)

    assert response.status_code == 201
    assert response.json()["id"] != first_id
