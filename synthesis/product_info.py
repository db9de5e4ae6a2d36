"""
商品資料合成器

依 SynthesisConfig 的開關組合出一份完整的「預期商品」：
    名稱 / 描述 / SEO → 價格 → 變化款式 → 分店庫存（或 IMEI 序號）→ 屬性 → 上架通路

商店相關的參考資料（分店、語系、稅率、可用通路）先透過 StoreContext.fetch() 讀好，
合成過程本身不呼叫任何 API，也不會修改傳入的商品。

用法：
    store = StoreContext.fetch(StoreSettingApi(session), UserFeatureApi(session))
    synthesizer = ProductInformationSynthesizer(store, random.Random(seed))

    expected = synthesizer.synthesize(SynthesisConfig(has_model=True, branch_stock=[5, 0, 3]))
    updated = synthesizer.synthesize(config, current=actual)     # 更新既有商品
    translated = synthesizer.translate(expected)                 # 補齊其他語系
"""

from __future__ import annotations

import random
from copy import deepcopy
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Callable

from api.setting import Branch, StoreSettingApi, VATOption
from api.user_feature import SalesChannels, UserFeatureApi
from config.config import Config
from core.exceptions import ReferenceDataError
from models.product import (
    InventoryManageType,
    ItemAttribute,
    ItemStatus,
    MainLanguage,
    ModelVariant,
    ProductModel,
    ShippingInfo,
    VersionLanguage,
)
from models.variation import localize
from synthesis.pricing import PriceInvariantGenerator
from synthesis.stock import BranchStockAllocator
from synthesis.variation import VariationMapGenerator
from utils.data_factory import DataFactory
from utils.logger import logger

MAX_ATTRIBUTES = 9
MAX_PRIORITY = 99
MAX_DIMENSION = 100


@dataclass
class SynthesisConfig:
    """合成開關；show_out_of_stock / hide_stock 為 None 時隨機"""
    has_model: bool = False
    no_cost: bool = False
    no_discount: bool = False
    manage_by_imei: bool = False
    has_seo: bool = False
    has_dimension: bool = False
    has_lot: bool = False
    has_attribution: bool = False
    on_web: bool = True
    on_app: bool = True
    in_store: bool = True
    in_gosocial: bool = True
    branch_stock: list[int] = field(default_factory=list)
    show_out_of_stock: bool | None = None
    hide_stock: bool | None = None
    max_price: int = Config.MAX_PRICE

    @classmethod
    def from_dict(cls, data: dict) -> SynthesisConfig:
        """從 YAML case 建立；不認得的欄位（case_id、description…）直接略過"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class StoreContext:
    """合成與驗證都需要的商店參考資料"""
    branches: list[Branch]
    default_language: str
    language_codes: list[str]
    vat_options: list[VATOption]
    channels: SalesChannels

    @property
    def active_branch_ids(self) -> list[int]:
        return [b.id for b in self.branches if b.active]

    @property
    def branch_names(self) -> dict[int, str]:
        return {b.id: b.name for b in self.branches}

    @classmethod
    def fetch(cls, settings: StoreSettingApi, features: UserFeatureApi) -> StoreContext:
        """
        Raises:
            ReferenceDataError: 沒有啟用中的分店 / 沒有稅率選項 / 沒有語系
            BackendRequestError: 後台 API 失敗
        """
        codes = settings.get_language_codes()
        if not codes:
            raise ReferenceDataError("商店預設語系")
        context = cls(
            branches=settings.get_active_branches(),
            default_language=codes[0],
            language_codes=codes,
            vat_options=settings.get_vat_list(),
            channels=features.get_sales_channels(),
        )
        logger.info(
            f"[Store] 分店 {context.active_branch_ids}，語系 {codes}，通路 {context.channels}"
        )
        return context


class ProductInformationSynthesizer:
    """組合變化群組、價格、庫存產生器，輸出完整的預期商品"""

    def __init__(
        self,
        store: StoreContext,
        rng: random.Random,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if not store.active_branch_ids:
            raise ReferenceDataError("啟用中的分店")
        if not store.vat_options:
            raise ReferenceDataError("稅率選項")
        self.store = store
        self.rng = rng
        self.factory = DataFactory(rng, clock)
        self.variations = VariationMapGenerator(rng)
        self.prices = PriceInvariantGenerator(rng)

    # ── 建立 / 更新 ──

    def synthesize(self, config: SynthesisConfig, current: ProductModel | None = None) -> ProductModel:
        """
        產生預期商品。

        給了 current 代表「更新既有商品」：
        - 沿用 id 與 IMEI 模式（庫存管理方式建立後不能改）
        - current 已是 lot 管理時，維持 lot、沿用變化群組與分店庫存
        - current 已啟用到期品質管理時維持啟用
        """
        lang = self.store.default_language
        imei = current.is_imei if current else config.manage_by_imei
        keep_lot = current is not None and current.lot_available
        lot = keep_lot or (config.has_lot and not imei)

        if keep_lot and current.has_model:
            groups = VariationMapGenerator.to_groups(
                current.models[0].label, [m.value for m in current.models]
            )
        elif keep_lot:
            groups = None
        elif config.has_model:
            groups = self.variations.generate(lang)
        else:
            groups = None
        has_model = groups is not None

        name = self.factory.product_name(lang, has_model, lot, imei)
        description = self.factory.product_description(lang)
        main = MainLanguage(language=lang, name=name, description=description)
        if config.has_seo:
            for key, value in self.factory.seo_fields(lang).items():
                setattr(main, key, value)

        attributes = self._random_attributes() if config.has_attribution else []
        vat = self.factory.random_choice(self.store.vat_options)
        channels = self.store.channels

        product = ProductModel(
            id=current.id if current else 0,
            name=name,
            description=description,
            languages=[main],
            inventory_manage_type=(
                InventoryManageType.IMEI_SERIAL_NUMBER if imei else InventoryManageType.PRODUCT
            ),
            lot_available=lot,
            expired_quality=lot and (
                (current is not None and current.expired_quality) or self.factory.random_bool()
            ),
            show_out_of_stock=(
                self.factory.random_bool() if config.show_out_of_stock is None else config.show_out_of_stock
            ),
            hide_stock=self.factory.random_bool() if config.hide_stock is None else config.hide_stock,
            has_model=has_model,
            variation_groups=groups,
            attributes=attributes,
            shipping=self._shipping(config.has_dimension),
            # 只能上架到賣家方案有開通的通路
            on_web=config.on_web and channels.web,
            on_app=config.on_app and channels.app,
            in_store=config.in_store and channels.in_store,
            in_gosocial=config.in_gosocial and channels.social,
            priority=self.factory.random_int(0, MAX_PRIORITY),
            tax_id=vat.id,
            tax_name=vat.name,
            barcode=current.barcode if current else self.factory.barcode(),
            bh_status=current.bh_status if current else ItemStatus.ACTIVE,
        )

        if has_model:
            # lot 商品的庫存只能由批號異動，沿用現有款式的庫存
            kept = {m.value: m for m in current.models} if keep_lot else {}
            product.models = [
                self._variant(value, groups.group_name, config, product, lot, imei, kept.get(value))
                for value in groups.to_composite()
            ]
            # 商品層級價格沿用第一個款式
            first = product.models[0]
            product.listing_price = first.listing_price
            product.selling_price = first.selling_price
            product.cost_price = first.cost_price
        else:
            triad = self.prices.generate(config.max_price, config.no_discount, config.no_cost)
            product.listing_price = triad.listing
            product.selling_price = triad.selling
            product.cost_price = triad.cost
            product.branch_stock = (
                dict(current.branch_stock) if keep_lot
                else BranchStockAllocator.allocate(self.store.active_branch_ids, config.branch_stock, lot)
            )
            product.skus = {
                branch_id: self.factory.sku("", branch_id) for branch_id in self.store.active_branch_ids
            }
            if imei:
                product.imei_serials = BranchStockAllocator.serial_numbers(
                    product.branch_stock, self.store.branch_names
                )

        logger.info(
            f"[Synthesis] {name} | 款式 {len(product.models)} | "
            f"IMEI={imei} LOT={lot} | 總庫存 {product.total_stock}"
        )
        return product

    # ── 其他更新模式（一律回傳新物件）──

    def translate(self, product: ProductModel, language_codes: list[str] | None = None) -> ProductModel:
        """補齊每個語系的名稱 / 描述 / SEO，以及每個款式的在地化內容"""
        default = self.store.default_language
        codes = language_codes or self.store.language_codes
        translated = deepcopy(product)
        source = product.main_language(default)
        has_seo = bool(source and source.seo_title)

        languages = []
        for code in codes:
            existing = translated.main_language(code)
            if code == default and existing:
                languages.append(existing)
                continue
            main = MainLanguage(
                language=code,
                name=self.factory.product_name(code, product.has_model, product.lot_available, product.is_imei),
                description=self.factory.product_description(code),
            )
            if has_seo:
                for key, value in self.factory.seo_fields(code).items():
                    setattr(main, key, value)
            languages.append(main)
        translated.languages = languages

        for variant in translated.models:
            variant.languages = [
                self._translated_version(variant, code, default, translated.description)
                for code in codes
            ]
        logger.info(f"[Synthesis] 翻譯語系 {codes}")
        return translated

    def toggle_status(self, product: ProductModel) -> ProductModel:
        """商品狀態反轉，每個款式的狀態隨機"""
        updated = deepcopy(product)
        updated.bh_status = product.bh_status.toggled()
        for variant in updated.models:
            variant.status = self.factory.random_choice(list(ItemStatus))
        return updated

    def with_attributes(self, product: ProductModel) -> ProductModel:
        """重新產生商品與每個款式的屬性"""
        updated = deepcopy(product)
        updated.attributes = self._random_attributes()
        for variant in updated.models:
            variant.reuse_attributes = self.factory.random_bool()
            variant.attributes = (
                deepcopy(updated.attributes) if variant.reuse_attributes else self._random_attributes()
            )
        return updated

    # ── 內部方法 ──

    def _variant(
        self,
        value: str,
        label: str,
        config: SynthesisConfig,
        product: ProductModel,
        lot: bool,
        imei: bool,
        kept: ModelVariant | None = None,
    ) -> ModelVariant:
        lang = self.store.default_language
        triad = self.prices.generate(config.max_price, config.no_discount, config.no_cost)
        stock = (
            dict(kept.branch_stock) if kept
            else BranchStockAllocator.allocate(self.store.active_branch_ids, config.branch_stock, lot)
        )
        use_product_description = self.factory.random_bool()
        reuse_attributes = self.factory.random_bool()
        version = self._version_language(lang, value, label)
        if use_product_description:
            version.description = product.description

        return ModelVariant(
            value=value,
            label=label,
            listing_price=triad.listing,
            selling_price=triad.selling,
            cost_price=triad.cost,
            branch_stock=stock,
            imei_serials=(
                BranchStockAllocator.serial_numbers(stock, self.store.branch_names, value) if imei else {}
            ),
            skus={branch_id: self.factory.sku(value, branch_id) for branch_id in self.store.active_branch_ids},
            barcode=self.factory.barcode(),
            version_name=version.version_name,
            description=version.description,
            use_product_description=use_product_description,
            reuse_attributes=reuse_attributes,
            attributes=(
                deepcopy(product.attributes) if reuse_attributes
                else self._random_attributes() if config.has_attribution
                else []
            ),
            languages=[version],
        )

    def _version_language(self, code: str, value: str, label: str) -> VersionLanguage:
        return VersionLanguage(
            language=code,
            name=value,
            label=label,
            description=self.factory.version_description(code, value),
            version_name=self.factory.version_name(code, value),
        )

    def _translated_version(
        self,
        variant: ModelVariant,
        code: str,
        default: str,
        product_description: str,
    ) -> VersionLanguage:
        """預設語系沿用既有內容；沿用商品描述的款式在預設語系維持商品描述"""
        if code == default:
            existing = next((lang for lang in variant.languages if lang.language == default), None)
            if existing:
                return existing
        version = self._version_language(
            code, localize(variant.value, default, code), localize(variant.label, default, code)
        )
        if code == default and variant.use_product_description:
            version.description = product_description
        return version

    def _random_attributes(self) -> list[ItemAttribute]:
        return [
            ItemAttribute(f"Attribute name {i}", f"Attribute value {i}", self.factory.random_bool())
            for i in range(self.factory.random_int(0, MAX_ATTRIBUTES))
        ]

    def _shipping(self, has_dimension: bool) -> ShippingInfo:
        if not has_dimension:
            return ShippingInfo()
        return ShippingInfo(*(self.rng.randrange(MAX_DIMENSION) for _ in range(4)))
