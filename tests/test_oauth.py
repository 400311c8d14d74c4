from fastapi.testclient import TestClient

from app.main import app
from app.api.dependencies import get_installation_store, get_token_client
from app.core.errors import TokenExchangeError
from app.schemas.installation import TokenResponse

client = TestClient(app)


class FakeTokenClient:
    def __init__(self, fail=False):
        self.fail = fail
        self.codes = []

    def authorize_url(self):
        return "https://marketplace.test/oauth/chooselocation?client_id=abc"

    async def exchange(self, code):
        self.codes.append(code)
        if self.fail:
            raise TokenExchangeError("Failed to exchange authorization code")
        return TokenResponse(access_token="tok_new", raw={"access_token": "tok_new", "locationId": "loc_9"})


def wire(store, token_client):
    app.dependency_overrides[get_installation_store] = lambda: store
    app.dependency_overrides[get_token_client] = lambda: token_client


def test_authorize_missing_params(store):
    token_client = FakeTokenClient()
    wire(store, token_client)

    assert client.get("/authorize-handler").status_code == 400
    assert client.get("/authorize-handler", params={"code": "abc"}).status_code == 400
    assert client.get("/authorize-handler", params={"location_id": "loc_9"}).status_code == 400
    assert token_client.codes == []
    assert store.count() == 0


def test_authorize_stores_installation(store):
    token_client = FakeTokenClient()
    wire(store, token_client)

    response = client.get("/authorize-handler", params={"code": "abc", "location_id": "loc_9"})

    assert response.status_code == 200
    assert "Successfully connected" in response.text
    assert "/form?locationId=loc_9" in response.text
    assert token_client.codes == ["abc"]
    installation = store.get("loc_9")
    assert installation.access_token == "tok_new"
    assert installation.token_data["locationId"] == "loc_9"


def test_authorize_exchange_failure(store):
    wire(store, FakeTokenClient(fail=True))

    response = client.get("/authorize-handler", params={"code": "abc", "location_id": "loc_9"})

    assert response.status_code == 500
    assert store.get("loc_9") is None


def test_webhook_acknowledges_json():
    response = client.post("/webhook-handler", json={"type": "INSTALL", "locationId": "loc_9"})
    assert response.status_code == 200
    assert response.json() == {"received": True}


def test_webhook_acknowledges_non_json():
    response = client.post("/webhook-handler", content=b"not json", headers={"Content-Type": "text/plain"})
    assert response.status_code == 200
    assert response.json() == {"received": True}
