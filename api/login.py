"""
賣家登入
取得 access token、store id 與 user id，之後所有後台 API 都靠它們組路徑與授權。
"""

from __future__ import annotations

from dataclasses import dataclass

from utils.api_client import ApiClient
from utils.logger import logger

LOGIN_PATH = "/api/authenticate/store/email/gosell"


@dataclass
class SellerSession:
    """登入後的賣家資訊，連同已帶 token 的 client"""
    client: ApiClient
    user_id: int
    store_id: int
    access_token: str

    @classmethod
    def login(cls, client: ApiClient, username: str, password: str) -> SellerSession:
        """
        以帳密登入並把 token 設到 client 上。

        Raises:
            BackendRequestError: 登入失敗（非 2xx）
        """
        logger.info(f"[Login] 賣家登入: {username}")
        data = client.post_json(LOGIN_PATH, {"username": username, "password": password})
        session = cls(
            client=client,
            user_id=int(data["id"]),
            store_id=int(data["store"]["id"]),
            access_token=data["accessToken"],
        )
        client.set_token(session.access_token)
        return session
