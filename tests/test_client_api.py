# File: tests/test_client_api.py

import httpx
import pytest

from brandsense.client.api import ApiError, BrandSenseClient


def _client_returning(status_code, body):
    def handler(request):
        return httpx.Response(status_code, json=body)

    return BrandSenseClient(base_url="http://testserver", http=httpx.Client(transport=httpx.MockTransport(handler)))


def test_validation_errors_name_the_field(api, auth_headers, created_project):
    api.access_token = auth_headers["Authorization"].split(" ")[1]

    with pytest.raises(ApiError) as exc:
        api.update_project(created_project["id"], industry="Space")

    assert exc.value.status_code == 422
    assert "name: Field required" in exc.value.detail
    assert "market: Field required" in exc.value.detail
    assert "language: Field required" in exc.value.detail


def test_error_detail_shapes():
    with pytest.raises(ApiError) as exc:
        _client_returning(422, {"detail": [{"loc": ["body", "rating"], "msg": "Input should be a valid integer"}]}).health()
    assert exc.value.detail == "rating: Input should be a valid integer"

    with pytest.raises(ApiError) as exc:
        _client_returning(400, {"error": "Missing required fields: name"}).health()
    assert exc.value.detail == "Missing required fields: name"

    with pytest.raises(ApiError) as exc:
        _client_returning(422, {"detail": [{"msg": "Bad payload"}]}).health()
    assert exc.value.detail == "Bad payload"
