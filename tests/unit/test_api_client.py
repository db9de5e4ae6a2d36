"""
utils.api_client 單元測試
驗證 ApiClient 的初始化、Token 設定、HTTP 呼叫與狀態碼檢查。
"""

import pytest
from unittest.mock import MagicMock, patch

from core.exceptions import BackendRequestError


def make_client(mock_requests, base_url="https://api.example.com", **kwargs):
    mock_session = MagicMock()
    mock_session.headers = {}
    mock_requests.Session.return_value = mock_session
    from utils.api_client import ApiClient
    return ApiClient(base_url, **kwargs), mock_session


def make_response(status_code=200, payload=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.url = "https://api.example.com/x"
    resp.text = "error body"
    return resp


@pytest.mark.unit
class TestApiClientInit:
    """ApiClient.__init__"""

    @pytest.mark.unit
    @patch("utils.api_client.requests")
    def test_trailing_slashes_stripped(self, mock_requests):
        client, _ = make_client(mock_requests, "https://api.example.com///")
        assert client.base_url == "https://api.example.com"

    @pytest.mark.unit
    @patch("utils.api_client.requests")
    def test_content_type_header(self, mock_requests):
        mock_session = MagicMock()
        mock_requests.Session.return_value = mock_session
        from utils.api_client import ApiClient

        ApiClient("https://api.example.com")

        mock_session.headers.update.assert_called_once_with({"Content-Type": "application/json"})

    @pytest.mark.unit
    @patch("utils.api_client.requests")
    def test_defaults_from_config(self, mock_requests):
        """未指定時使用 Config.API_BASE_URL / API_TIMEOUT"""
        mock_requests.Session.return_value = MagicMock()
        with patch("utils.api_client.Config") as mock_config:
            mock_config.API_BASE_URL = "https://staging.example.com/"
            mock_config.API_TIMEOUT = 30
            from utils.api_client import ApiClient
            client = ApiClient()

        assert client.base_url == "https://staging.example.com"
        assert client.timeout == 30

    @pytest.mark.unit
    @patch("utils.api_client.requests")
    def test_custom_timeout(self, mock_requests):
        client, _ = make_client(mock_requests, timeout=60)
        assert client.timeout == 60


@pytest.mark.unit
class TestSetToken:

    @pytest.mark.unit
    @patch("utils.api_client.requests")
    def test_bearer_token(self, mock_requests):
        client, session = make_client(mock_requests)
        client.set_token("token1")
        client.set_token("token2")
        assert session.headers["Authorization"] == "Bearer token2"


@pytest.mark.unit
class TestRequests:
    """get / post"""

    @pytest.mark.unit
    @patch("utils.api_client.requests")
    def test_get_url_and_params(self, mock_requests):
        client, session = make_client(mock_requests, timeout=30)
        session.get.return_value = make_response()

        client.get("itemservice/api/items", params={"page": 0})

        session.get.assert_called_once_with(
            "https://api.example.com/itemservice/api/items", params={"page": 0}, timeout=30,
        )

    @pytest.mark.unit
    @patch("utils.api_client.requests")
    def test_get_returns_response(self, mock_requests):
        client, session = make_client(mock_requests)
        resp = make_response(404)
        session.get.return_value = resp
        # get 本身不檢查狀態碼
        assert client.get("/x") is resp

    @pytest.mark.unit
    @patch("utils.api_client.requests")
    def test_post_json_body(self, mock_requests):
        client, session = make_client(mock_requests, timeout=30)
        session.post.return_value = make_response(201)

        client.post("/api/authenticate", json_data={"username": "u"})

        session.post.assert_called_once_with(
            "https://api.example.com/api/authenticate", json={"username": "u"}, timeout=30,
        )

    @pytest.mark.unit
    @patch("utils.api_client.requests")
    def test_get_json(self, mock_requests):
        client, session = make_client(mock_requests)
        session.get.return_value = make_response(200, [{"id": 1}])
        assert client.get_json("/branches") == [{"id": 1}]

    @pytest.mark.unit
    @patch("utils.api_client.requests")
    def test_get_json_error_raises(self, mock_requests):
        client, session = make_client(mock_requests)
        session.get.return_value = make_response(500)
        with pytest.raises(BackendRequestError) as exc_info:
            client.get_json("/branches")
        assert exc_info.value.status == 500

    @pytest.mark.unit
    @patch("utils.api_client.requests")
    def test_post_json(self, mock_requests):
        client, session = make_client(mock_requests)
        session.post.return_value = make_response(200, {"accessToken": "t"})
        assert client.post_json("/login", {"a": 1}) == {"accessToken": "t"}


@pytest.mark.unit
class TestExpectOk:
    """expect_ok：非 2xx 拋出 BackendRequestError"""

    @pytest.mark.unit
    @pytest.mark.parametrize("status", [200, 201, 204, 299])
    def test_2xx_passes(self, status):
        from utils.api_client import ApiClient
        ApiClient.expect_ok(make_response(status), "GET")

    @pytest.mark.unit
    @pytest.mark.parametrize("status", [199, 301, 401, 404, 500])
    def test_non_2xx_raises(self, status):
        from utils.api_client import ApiClient
        with pytest.raises(BackendRequestError, match=f"GET https://api.example.com/x 回傳 {status}"):
            ApiClient.expect_ok(make_response(status), "GET")
