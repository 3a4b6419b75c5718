from orbit.models.user import User

USER_ID = "11111111-1111-1111-1111-111111111111"



def test_missing_token(client):
    response = client.get("/api/tasks")
    assert response.status_code == 401
    assert response.json()["detail"] == "Missing token"


def test_not_a_bearer_header(client, token_factory):
    response = client.get("/api/tasks", headers={"Authorization": f"Token {token_factory()}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Missing token"


def test_garbage_token(client):
    response = client.get("/api/tasks", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_expired_token(client, token_factory):
    token = token_factory(expires_in=-60)
    response = client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_wrong_audience(client, token_factory):
    token = token_factory(aud="anon")
    response = client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_wrong_issuer(client, token_factory):
    token = token_factory(iss="https://someone-else.supabase.co/auth/v1")
    response = client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_user_provisioned_on_first_call(client, db, auth_headers):
    assert db.query(User).filter(User.id == USER_ID).first() is None

    response = client.get("/api/tasks", headers=auth_headers)
    assert response.status_code == 200

    user = db.query(User).filter(User.id == USER_ID).first()
    assert user is not None
    assert user.email == "test@example.com"

    # deuxième appel : pas de doublon
    client.get("/api/tasks", headers=auth_headers)
    assert db.query(User).count() == 1


def test_health_is_public(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
