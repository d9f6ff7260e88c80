import base64

import pytest
from fastapi.testclient import TestClient

from aswbxml import __version__
from inspector_service.config import Settings, get_settings
from inspector_service.main import app


@pytest.fixture
def client(restore_logging):
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_root_and_health(client):
    assert client.get("/").json() == {"service": "wbxml-inspector", "status": "ok"}
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "codec_version": __version__, "code_pages": 26}


def test_decode_hex(client, foldersync_request):
    response = client.post("/wbxml/decode", json={"hex": foldersync_request.hex()})
    assert response.status_code == 200
    data = response.json()
    assert data["length"] == len(foldersync_request)
    assert "<folderhierarchy:FolderSync" in data["xml"]
    assert data["tree"]["children"][0]["tag"] == "FolderSync"


def test_decode_base64_with_view_options(client):
    payload = base64.b64encode(bytes.fromhex("03016a00450b01")).decode("ascii")
    response = client.post(
        "/wbxml/decode",
        json={"base64": payload, "show_namespaces": False, "show_doc_refs": True},
    )
    assert response.status_code == 200
    data = response.json()
    assert "<Sync DocRef=" in data["xml"]
    assert data["tree"]["children"][0]["doc_ref"].startswith("https://docs.microsoft.com/")


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"hex": "03016a00", "base64": "AwFqAA=="},
        {"hex": "zz"},
        {"base64": "not base64!"},
    ],
)
def test_decode_bad_request(client, body):
    assert client.post("/wbxml/decode", json=body).status_code == 400


def test_decode_codec_error(client):
    response = client.post("/wbxml/decode", json={"hex": "03016a0001"})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error"] == "UnbalancedEnd"
    assert "END" in detail["message"]


def test_decode_payload_too_large(client):
    small = Settings()
    small.MAX_PAYLOAD_BYTES = 4
    app.dependency_overrides[get_settings] = lambda: small

    response = client.post("/wbxml/decode", json={"hex": "03016a00450b01"})
    assert response.status_code == 413


def test_encode(client):
    response = client.post("/wbxml/encode", json={"xml": '<Sync xmlns="AirSync:">S</Sync>'})
    assert response.status_code == 200
    assert response.json() == {
        "length": 9,
        "hex": "03016a004503530001",
        "base64": base64.b64encode(bytes.fromhex("03016a004503530001")).decode("ascii"),
    }


def test_encode_codec_error(client):
    response = client.post("/wbxml/encode", json={"xml": '<Sync xmlns="AirSync:" Version="1"/>'})
    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "AttributesNotSupported"
