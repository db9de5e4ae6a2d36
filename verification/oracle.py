"""
商品驗證器

從後台讀回實際商品，與預期商品逐欄比對。
每個欄位獨立比對、各自產生一筆 Mismatch，不會因為前面不一致就停下。
驗證器本身不做重試：呼叫前請先用 poll_until 等後台狀態穩定。

比對順序：
    名稱 → 描述（去除 HTML）→ 商品狀態 → 價格與款式狀態 → 缺貨顯示 → 隱藏庫存 → 各款式各分店庫存
    → 庫存管理方式 → lot → SEO → 運送資訊 → 上架通路 → 屬性 → 變化群組

用法：
    oracle = VerificationOracle(ProductApi(session), store.active_branch_ids, store.default_language)
    mismatches = oracle.verify(product_id, expected)     # 只收集
    oracle.assert_matches(product_id, expected)          # 有不一致就拋 ProductMismatchError
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from api.product import ProductApi
from core.env_manager import env
from core.exceptions import ProductMismatchError
from models.product import MainLanguage, ModelVariant, ProductModel
from utils.allure_helper import attach_json
from utils.decorators import timer
from utils.logger import logger

_HTML_TAG = re.compile(r"<.*?>")


def strip_html(text: str) -> str:
    return _HTML_TAG.sub("", text or "")


@dataclass(frozen=True)
class Mismatch:
    field: str
    expected: Any
    actual: Any
    message: str

    @classmethod
    def of(cls, field: str, expected: Any, actual: Any, prefix: str = "") -> Mismatch:
        return cls(field, expected, actual, f"{prefix}{field} must be '{expected}', but found '{actual}'")


@dataclass(frozen=True)
class ChannelChecks:
    """要驗證哪些銷售通路的上架旗標"""
    web: bool = True
    app: bool = True
    in_store: bool = True
    social: bool = True

    @classmethod
    def from_env(cls) -> ChannelChecks:
        return cls(
            web=bool(env.get("verification.channels.web", True)),
            app=bool(env.get("verification.channels.app", True)),
            in_store=bool(env.get("verification.channels.in_store", True)),
            social=bool(env.get("verification.channels.social", True)),
        )


class _Collector:
    """收集不一致；相等就不記錄"""

    def __init__(self):
        self.mismatches: list[Mismatch] = []

    def check(self, field: str, expected: Any, actual: Any, prefix: str = "") -> None:
        if expected != actual:
            self.mismatches.append(Mismatch.of(field, expected, actual, prefix))


class VerificationOracle:

    def __init__(
        self,
        product_api: ProductApi,
        active_branch_ids: list[int],
        default_language: str,
        channels: ChannelChecks | None = None,
    ):
        self.product_api = product_api
        self.active_branch_ids = active_branch_ids
        self.default_language = default_language
        self.channels = channels or ChannelChecks.from_env()

    @timer
    def verify(self, product_id: int, expected: ProductModel) -> list[Mismatch]:
        """讀取實際商品並比對，回傳所有不一致（空 list 代表通過）"""
        actual = self.product_api.get_product_detail(product_id)
        mismatches = self.compare(expected, actual)
        for m in mismatches:
            logger.error(f"[Verify][ProductId: {product_id}] {m.message}")
        if mismatches:
            logger.info(f"[Verify] ProductId {product_id}: {len(mismatches)} 項不一致")
        else:
            logger.info(f"[Verify] ProductId {product_id}: 全部一致")
        return mismatches

    def assert_matches(self, product_id: int, expected: ProductModel) -> None:
        """
        Raises:
            ProductMismatchError: 任一欄位不一致
        """
        mismatches = self.verify(product_id, expected)
        if mismatches:
            messages = [m.message for m in mismatches]
            attach_json(messages, name=f"ProductId {product_id} 不一致清單")
            raise ProductMismatchError(product_id, messages)

    def compare(self, expected: ProductModel, actual: ProductModel) -> list[Mismatch]:
        """純比對，不呼叫任何 API"""
        c = _Collector()
        if actual.deleted:
            c.check("Product", "present", "deleted")
            return c.mismatches

        c.check("Product name", expected.name, actual.name)
        c.check("Product description", strip_html(expected.description), strip_html(actual.description))
        c.check("Product status", expected.bh_status.value, actual.bh_status.value)

        c.check("Has variation", expected.has_model, actual.has_model)
        aligned = self._align_models(expected, actual)
        if expected.has_model:
            c.check("Listing price", [m.listing_price for m in expected.models],
                    [m.listing_price if m else None for m in aligned])
            c.check("Selling price", [m.selling_price for m in expected.models],
                    [m.selling_price if m else None for m in aligned])
            c.check("Cost price", [m.cost_price for m in expected.models],
                    [m.cost_price if m else None for m in aligned])
            c.check("Variation status", [m.status.value for m in expected.models],
                    [m.status.value if m else None for m in aligned])
        else:
            c.check("Listing price", expected.listing_price, actual.listing_price)
            c.check("Selling price", expected.selling_price, actual.selling_price)
            c.check("Cost price", expected.cost_price, actual.cost_price)

        c.check("Display out of stock", expected.show_out_of_stock, actual.show_out_of_stock)
        c.check("Hide remaining stock", expected.hide_stock, actual.hide_stock)
        self._check_stock(c, expected, actual, aligned)

        c.check("Product inventory type", expected.inventory_manage_type.value, actual.inventory_manage_type.value)
        c.check("Manage stock by lot", expected.lot_available, actual.lot_available)

        self._check_seo(c, expected, actual)
        for dimension in ("weight", "width", "height", "length"):
            c.check(f"Shipping {dimension}",
                    getattr(expected.shipping, dimension), getattr(actual.shipping, dimension))

        # 通路開關可在 verification.channels 關閉
        if self.channels.web:
            c.check("Web platform", expected.on_web, actual.on_web)
        if self.channels.app:
            c.check("App platform", expected.on_app, actual.on_app)
        if self.channels.in_store:
            c.check("In-store platform", expected.in_store, actual.in_store)
        if self.channels.social:
            c.check("GoSOCIAL platform", expected.in_gosocial, actual.in_gosocial)

        c.check("Attributes",
                [(a.name, a.value, a.is_display) for a in expected.attributes],
                [(a.name, a.value, a.is_display) for a in actual.attributes])

        if expected.has_model:
            exp_groups = expected.variation_groups
            act_groups = actual.variation_groups
            c.check("Variation name",
                    exp_groups.group_name if exp_groups else "",
                    act_groups.group_name if act_groups else "")
            c.check("Variation values",
                    exp_groups.groups if exp_groups else {},
                    act_groups.groups if act_groups else {})
        return c.mismatches

    # ── 內部方法 ──

    @staticmethod
    def _align_models(expected: ProductModel, actual: ProductModel) -> list[ModelVariant | None]:
        """依合成值把實際款式排成預期款式的順序，缺少的款式為 None"""
        by_value = {m.value: m for m in actual.models}
        return [by_value.get(m.value) for m in expected.models]

    def _check_stock(
        self,
        c: _Collector,
        expected: ProductModel,
        actual: ProductModel,
        aligned: list[ModelVariant | None],
    ) -> None:
        # 以所有啟用中分店為準，缺少的分店視為 0
        if not expected.has_model:
            for branch_id in self.active_branch_ids:
                c.check("Branch stock",
                        expected.branch_stock.get(branch_id, 0),
                        actual.branch_stock.get(branch_id, 0),
                        prefix=f"[BranchId: {branch_id}] ")
            return

        c.check("Number of variations", len(expected.models), len(actual.models))
        for index, (exp_model, act_model) in enumerate(zip(expected.models, aligned)):
            act_stock = act_model.branch_stock if act_model else {}
            for branch_id in self.active_branch_ids:
                c.check("Branch stock",
                        exp_model.branch_stock.get(branch_id, 0),
                        act_stock.get(branch_id, 0),
                        prefix=f"[ModelIndex: {index}, BranchId: {branch_id}] ")

    def _check_seo(self, c: _Collector, expected: ProductModel, actual: ProductModel) -> None:
        empty = MainLanguage(self.default_language)
        exp = expected.main_language(self.default_language) or empty
        act = actual.main_language(self.default_language) or empty
        c.check("SEO title", exp.seo_title, act.seo_title)
        c.check("SEO description", exp.seo_description, act.seo_description)
        c.check("SEO keywords", exp.seo_keywords, act.seo_keywords)
        c.check("SEO URL", exp.seo_url, act.seo_url)
