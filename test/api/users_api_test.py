import pytest


@pytest.fixture()
def registered(client):
    response = client.post("/register", json={"username": "alice", "email": "alice@example.com",
                                              "password": "s3cret"})
    assert response.status_code == 201
    return response.get_json()


def test_register(registered):
    assert registered == {"id": 1, "username": "alice", "email": "alice@example.com"}


def test_login(client, registered):
    response = client.post("/login", json={"username": "alice", "password": "s3cret"})

    assert response.status_code == 200
    assert response.get_json() == registered


def test_login_failures_look_the_same(client, registered):
    wrong_password = client.post("/login", json={"username": "alice", "password": "nope"})
    unknown_user = client.post("/login", json={"username": "bob", "password": "s3cret"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.get_json() == unknown_user.get_json()


def test_update(client, registered):
    response = client.put("/update", json={"id": 1, "email": "new@example.com", "password": ""})

    assert response.status_code == 200
    assert response.get_json() == {"id": 1, "username": "alice", "email": "new@example.com"}
    assert client.post("/login", json={"username": "alice", "password": "s3cret"}).status_code == 200


def test_update_unknown_user(client):
    assert client.put("/update", json={"id": 5, "email": "x@example.com"}).status_code == 404


def test_delete(client, registered):
    assert client.delete("/delete", json={"id": 1}).status_code == 204
    assert client.delete("/delete", json={"id": 1}).status_code == 404
    assert client.post("/login", json={"username": "alice", "password": "s3cret"}).status_code == 401


@pytest.mark.parametrize("body", [{"id": 0}, {"id": "one"}, {"id": False}])
def test_invalid_id(client, body):
    assert client.delete("/delete", json=body).status_code == 400
    assert client.put("/update", json=body).status_code == 400


def test_malformed_body(client):
    response = client.post("/register", data="not json", content_type="application/json")

    assert response.status_code == 400


@pytest.mark.parametrize("method, path", [
    ("get", "/register"),
    ("get", "/login"),
    ("post", "/update"),
    ("post", "/delete"),
    ("options", "/register"),
    ("options", "/login"),
    ("options", "/update"),
    ("options", "/delete"),
])
def test_each_route_has_one_verb(client, method, path):
    assert getattr(client, method)(path).status_code == 405


def test_missing_id_is_not_found(client, registered):
    assert client.put("/update", json={"email": "x@example.com"}).status_code == 404
    assert client.delete("/delete", json={}).status_code == 404
    assert client.post("/login", json={"username": "alice", "password": "s3cret"}).get_json() == registered
