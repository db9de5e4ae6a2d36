"""
商品 API：讀取商品詳情、依名稱搜尋商品 id

驗證器以這裡讀回的 ProductModel 當作實際值。
"""

from __future__ import annotations

from api.login import SellerSession
from core.env_manager import env
from core.exceptions import ProductNotFoundError
from models.product import ProductModel
from utils.logger import logger
from utils.wait_helper import poll_until

PAGE_SIZE = 100


class ProductApi:

    def __init__(self, session: SellerSession):
        self.session = session

    def get_product_detail(self, product_id: int) -> ProductModel:
        """
        讀取商品詳情；後台回 404 代表商品已刪除。

        Raises:
            BackendRequestError: 404 以外的非 2xx
        """
        client = self.session.client
        resp = client.get(f"/itemservice/api/beehive-items/{product_id}")
        if resp.status_code == 404:
            logger.info(f"[Product] 商品 {product_id} 已刪除")
            return ProductModel.deleted_product(product_id)
        client.expect_ok(resp, "GET")
        return ProductModel.from_dict(resp.json())

    def search_product_id_by_name(self, name: str) -> int:
        """依完整名稱搜尋商品 id，找不到回傳 0"""
        client = self.session.client
        path = f"/itemservice/api/store/dashboard/{self.session.store_id}/items-v2"
        page = 0
        while True:
            resp = client.get(path, params={
                "page": page,
                "size": PAGE_SIZE,
                "bhStatus": "",
                "itemType": "BUSINESS_PRODUCT",
                "sort": "lastModifiedDate,desc",
                "branchIds": "",
                "searchItemName": name,
                "searchType": "PRODUCT_NAME",
            })
            client.expect_ok(resp, "GET")
            rows = resp.json()
            for row in rows:
                if row.get("name") == name:
                    return int(row["id"])
            total = int(resp.headers.get("X-Total-Count", 0))
            page += 1
            if not rows or page * PAGE_SIZE >= total:
                return 0

    def get_product_id(self, name: str) -> int:
        """
        Raises:
            ProductNotFoundError: 找不到同名商品
        """
        product_id = self.search_product_id_by_name(name)
        if not product_id:
            raise ProductNotFoundError(name)
        return product_id

    def wait_for_product_id(
        self,
        name: str,
        max_attempts: int | None = None,
        delay_ms: int | None = None,
    ) -> int:
        """
        等待新建立的商品出現在搜尋結果（搜尋索引是非同步更新的）。

        Raises:
            RetryExhaustedError: 超過輪詢上限仍找不到
        """
        product_id = poll_until(
            lambda: self.search_product_id_by_name(name),
            max_attempts=max_attempts or env.get("poll.max_attempts", 30),
            delay_ms=delay_ms or env.get("poll.delay_ms", 1000),
            message=f"搜尋不到商品: {name}",
        )
        logger.info(f"[Product] '{name}' → id {product_id}")
        return product_id
