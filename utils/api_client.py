"""
API Client 工具
賣家後台 REST API 的薄封裝：Bearer token、JSON、逾時與狀態碼檢查。
上層的 api/ 服務類別都透過它發送請求。
"""

import requests

from config.config import Config
from core.exceptions import BackendRequestError
from utils.logger import logger


class ApiClient:
    """簡易 REST API 客戶端"""

    def __init__(self, base_url: str | None = None, timeout: int | None = None):
        self.base_url = (base_url or Config.API_BASE_URL).rstrip("/")
        self.timeout = timeout or Config.API_TIMEOUT
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def set_token(self, token: str) -> None:
        """設定 Bearer Token"""
        self.session.headers["Authorization"] = f"Bearer {token}"

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.strip().lstrip('/')}"

    def get(self, path: str, params: dict | None = None) -> requests.Response:
        url = self.url(path)
        logger.info(f"[API] GET {url}")
        resp = self.session.get(url, params=params, timeout=self.timeout)
        logger.info(f"[API] Status: {resp.status_code}")
        return resp

    def post(self, path: str, json_data: dict | None = None) -> requests.Response:
        url = self.url(path)
        logger.info(f"[API] POST {url}")
        resp = self.session.post(url, json=json_data, timeout=self.timeout)
        logger.info(f"[API] Status: {resp.status_code}")
        return resp

    def get_json(self, path: str, params: dict | None = None):
        """GET 並要求 200，回傳解析後的 JSON"""
        resp = self.get(path, params=params)
        self.expect_ok(resp, "GET")
        return resp.json()

    def post_json(self, path: str, json_data: dict | None = None):
        """POST 並要求 2xx，回傳解析後的 JSON"""
        resp = self.post(path, json_data=json_data)
        self.expect_ok(resp, "POST")
        return resp.json()

    @staticmethod
    def expect_ok(resp: requests.Response, method: str) -> None:
        """非 2xx 直接拋出 BackendRequestError，不做任何替代處理"""
        if not 200 <= resp.status_code < 300:
            raise BackendRequestError(method, resp.url, resp.status_code, resp.text)
