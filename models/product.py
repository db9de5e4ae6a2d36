"""
商品資料模型

同一組 dataclass 同時代表「預期」商品（由合成器產生）與
「實際」商品（由後台 API 讀回），驗證器直接比對兩者。

後台 JSON 採 camelCase，from_dict / to_dict 負責轉換：

    {
        "id": 123, "name": "...", "description": "...",
        "orgPrice": 100, "newPrice": 90, "costPrice": 50,
        "hasModel": true, "inventoryManageType": "PRODUCT",
        "lotAvailable": false, "branches": [{"branchId": 1, "totalItem": 5, "soldItem": 0}],
        "languages": [...], "itemAttributes": [...], "models": [...]
    }

分店庫存一律以「剩餘庫存」表示：totalItem - soldItem。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from models.variation import VariationGroups


class InventoryManageType(Enum):
    PRODUCT = "PRODUCT"                        # 一般數量
    IMEI_SERIAL_NUMBER = "IMEI_SERIAL_NUMBER"  # 逐件序號


class ItemStatus(Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"

    def toggled(self) -> ItemStatus:
        return ItemStatus.INACTIVE if self is ItemStatus.ACTIVE else ItemStatus.ACTIVE


@dataclass
class MainLanguage:
    """商品層級的多語系內容"""
    language: str
    name: str = ""
    description: str = ""
    seo_title: str = ""
    seo_description: str = ""
    seo_keywords: str = ""
    seo_url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> MainLanguage:
        return cls(
            language=data.get("language", ""),
            name=data.get("name") or "",
            description=data.get("description") or "",
            seo_title=data.get("seoTitle") or "",
            seo_description=data.get("seoDescription") or "",
            seo_keywords=data.get("seoKeywords") or "",
            seo_url=data.get("seoUrl") or "",
        )

    def to_dict(self) -> dict:
        return {
            "language": self.language,
            "name": self.name,
            "description": self.description,
            "seoTitle": self.seo_title,
            "seoDescription": self.seo_description,
            "seoKeywords": self.seo_keywords,
            "seoUrl": self.seo_url,
        }


@dataclass
class VersionLanguage:
    """變化款式層級的多語系內容；name 是合成值，label 是群組名稱"""
    language: str
    name: str = ""
    label: str = ""
    description: str = ""
    version_name: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> VersionLanguage:
        return cls(
            language=data.get("language", ""),
            name=data.get("name") or "",
            label=data.get("label") or "",
            description=data.get("description") or "",
            version_name=data.get("versionName") or "",
        )

    def to_dict(self) -> dict:
        return {
            "language": self.language,
            "name": self.name,
            "label": self.label,
            "description": self.description,
            "versionName": self.version_name,
        }


@dataclass
class ItemAttribute:
    name: str
    value: str
    is_display: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> ItemAttribute:
        return cls(
            name=data.get("attributeName", ""),
            value=data.get("attributeValue", ""),
            is_display=bool(data.get("isDisplay", True)),
        )

    def to_dict(self) -> dict:
        return {
            "attributeName": self.name,
            "attributeValue": self.value,
            "isDisplay": self.is_display,
        }


@dataclass
class ShippingInfo:
    """運送資訊；未設定尺寸時全部為 0"""
    weight: int = 0
    width: int = 0
    height: int = 0
    length: int = 0

    @classmethod
    def from_dict(cls, data: dict | None) -> ShippingInfo:
        data = data or {}
        return cls(
            weight=int(data.get("weight") or 0),
            width=int(data.get("width") or 0),
            height=int(data.get("height") or 0),
            length=int(data.get("length") or 0),
        )

    def to_dict(self) -> dict:
        return {"weight": self.weight, "width": self.width, "height": self.height, "length": self.length}


def _branches_from_dict(rows: list[dict] | None) -> tuple[dict[int, int], dict[int, str], dict[int, list[str]]]:
    stock: dict[int, int] = {}
    skus: dict[int, str] = {}
    serials: dict[int, list[str]] = {}
    for row in rows or []:
        branch_id = int(row["branchId"])
        stock[branch_id] = int(row.get("totalItem") or 0) - int(row.get("soldItem") or 0)
        if row.get("sku"):
            skus[branch_id] = row["sku"]
        if row.get("imeiSerial"):
            serials[branch_id] = list(row["imeiSerial"])
    return stock, skus, serials


def _branches_to_dict(
    stock: dict[int, int],
    skus: dict[int, str] | None = None,
    serials: dict[int, list[str]] | None = None,
) -> list[dict]:
    skus = skus or {}
    serials = serials or {}
    rows = []
    for branch_id in sorted(set(stock) | set(skus) | set(serials)):
        row = {"branchId": branch_id, "totalItem": stock.get(branch_id, 0), "soldItem": 0}
        if branch_id in skus:
            row["sku"] = skus[branch_id]
        if branch_id in serials:
            row["imeiSerial"] = list(serials[branch_id])
        rows.append(row)
    return rows


@dataclass
class ModelVariant:
    """單一變化款式（一個群組值組合）"""
    value: str                                   # 合成值，例如 "en_var1_1|en_var2_3"
    label: str = ""                              # 群組名稱，例如 "en_var1|en_var2"
    id: int = 0
    listing_price: int = 0
    selling_price: int = 0
    cost_price: int = 0
    branch_stock: dict[int, int] = field(default_factory=dict)
    imei_serials: dict[int, list[str]] = field(default_factory=dict)
    skus: dict[int, str] = field(default_factory=dict)
    barcode: str = ""
    status: ItemStatus = ItemStatus.ACTIVE
    version_name: str = ""
    description: str = ""
    use_product_description: bool = False
    reuse_attributes: bool = False
    attributes: list[ItemAttribute] = field(default_factory=list)
    languages: list[VersionLanguage] = field(default_factory=list)

    @property
    def total_stock(self) -> int:
        return sum(self.branch_stock.values())

    @classmethod
    def from_dict(cls, data: dict) -> ModelVariant:
        stock, skus, serials = _branches_from_dict(data.get("branches"))
        return cls(
            value=data.get("name", ""),
            label=data.get("label", ""),
            id=int(data.get("id") or 0),
            listing_price=int(data.get("orgPrice") or 0),
            selling_price=int(data.get("newPrice") or 0),
            cost_price=int(data.get("costPrice") or 0),
            branch_stock=stock,
            imei_serials=serials,
            skus=skus,
            barcode=data.get("barcode") or "",
            status=ItemStatus(data.get("status") or "ACTIVE"),
            version_name=data.get("versionName") or "",
            description=data.get("description") or "",
            use_product_description=bool(data.get("useProductDescription")),
            reuse_attributes=bool(data.get("reuseAttributes")),
            attributes=[ItemAttribute.from_dict(a) for a in data.get("modelAttributes") or []],
            languages=[VersionLanguage.from_dict(lang) for lang in data.get("languages") or []],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.value,
            "label": self.label,
            "orgPrice": self.listing_price,
            "newPrice": self.selling_price,
            "costPrice": self.cost_price,
            "branches": _branches_to_dict(self.branch_stock, self.skus, self.imei_serials),
            "barcode": self.barcode,
            "status": self.status.value,
            "versionName": self.version_name,
            "description": self.description,
            "useProductDescription": self.use_product_description,
            "reuseAttributes": self.reuse_attributes,
            "modelAttributes": [a.to_dict() for a in self.attributes],
            "languages": [lang.to_dict() for lang in self.languages],
        }


@dataclass
class ProductModel:
    """預期或實際的商品資料"""
    id: int = 0
    name: str = ""
    description: str = ""
    languages: list[MainLanguage] = field(default_factory=list)

    # 價格：listing ≥ selling ≥ cost ≥ 0
    listing_price: int = 0
    selling_price: int = 0
    cost_price: int = 0

    # 庫存
    inventory_manage_type: InventoryManageType = InventoryManageType.PRODUCT
    lot_available: bool = False
    expired_quality: bool = False
    branch_stock: dict[int, int] = field(default_factory=dict)
    imei_serials: dict[int, list[str]] = field(default_factory=dict)
    skus: dict[int, str] = field(default_factory=dict)
    show_out_of_stock: bool = True
    hide_stock: bool = False

    # 變化款式
    has_model: bool = False
    variation_groups: VariationGroups | None = None
    models: list[ModelVariant] = field(default_factory=list)

    # 其他
    attributes: list[ItemAttribute] = field(default_factory=list)
    shipping: ShippingInfo = field(default_factory=ShippingInfo)
    on_web: bool = False
    on_app: bool = False
    in_store: bool = False
    in_gosocial: bool = False
    priority: int = 0
    tax_id: int = 0
    tax_name: str = ""
    barcode: str = ""
    bh_status: ItemStatus = ItemStatus.ACTIVE
    deleted: bool = False

    @property
    def is_imei(self) -> bool:
        return self.inventory_manage_type is InventoryManageType.IMEI_SERIAL_NUMBER

    @property
    def total_stock(self) -> int:
        """商品總庫存；有變化款式時為所有款式的加總"""
        if self.has_model:
            return sum(m.total_stock for m in self.models)
        return sum(self.branch_stock.values())

    def main_language(self, language: str) -> MainLanguage | None:
        return next((lang for lang in self.languages if lang.language == language), None)

    @classmethod
    def deleted_product(cls, product_id: int) -> ProductModel:
        """後台回傳 404 時的代表物件"""
        return cls(id=product_id, deleted=True)

    @classmethod
    def from_dict(cls, data: dict) -> ProductModel:
        stock, skus, serials = _branches_from_dict(data.get("branches"))
        models = [ModelVariant.from_dict(m) for m in data.get("models") or []]
        has_model = bool(data.get("hasModel")) and bool(models)
        groups = (
            VariationGroups.from_composite(models[0].label, [m.value for m in models])
            if has_model
            else None
        )
        return cls(
            id=int(data.get("id") or 0),
            name=data.get("name") or "",
            description=data.get("description") or "",
            languages=[MainLanguage.from_dict(lang) for lang in data.get("languages") or []],
            listing_price=int(data.get("orgPrice") or 0),
            selling_price=int(data.get("newPrice") or 0),
            cost_price=int(data.get("costPrice") or 0),
            inventory_manage_type=InventoryManageType(data.get("inventoryManageType") or "PRODUCT"),
            lot_available=bool(data.get("lotAvailable")),
            expired_quality=bool(data.get("expiredQuality")),
            branch_stock=stock,
            imei_serials=serials,
            skus=skus,
            show_out_of_stock=bool(data.get("showOutOfStock", True)),
            hide_stock=bool(data.get("isHideStock")),
            has_model=has_model,
            variation_groups=groups,
            models=models,
            attributes=[ItemAttribute.from_dict(a) for a in data.get("itemAttributes") or []],
            shipping=ShippingInfo.from_dict(data.get("shippingInfo")),
            on_web=bool(data.get("onWeb")),
            on_app=bool(data.get("onApp")),
            in_store=bool(data.get("inStore")),
            in_gosocial=bool(data.get("inGosocial")),
            priority=int(data.get("priority") or 0),
            tax_id=int(data.get("taxId") or 0),
            tax_name=data.get("taxName") or "",
            barcode=data.get("barcode") or "",
            bh_status=ItemStatus(data.get("bhStatus") or "ACTIVE"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "languages": [lang.to_dict() for lang in self.languages],
            "orgPrice": self.listing_price,
            "newPrice": self.selling_price,
            "costPrice": self.cost_price,
            "inventoryManageType": self.inventory_manage_type.value,
            "lotAvailable": self.lot_available,
            "expiredQuality": self.expired_quality,
            "branches": _branches_to_dict(self.branch_stock, self.skus, self.imei_serials),
            "showOutOfStock": self.show_out_of_stock,
            "isHideStock": self.hide_stock,
            "hasModel": self.has_model,
            "models": [m.to_dict() for m in self.models],
            "itemAttributes": [a.to_dict() for a in self.attributes],
            "shippingInfo": self.shipping.to_dict(),
            "onWeb": self.on_web,
            "onApp": self.on_app,
            "inStore": self.in_store,
            "inGosocial": self.in_gosocial,
            "priority": self.priority,
            "taxId": self.tax_id,
            "taxName": self.tax_name,
            "barcode": self.barcode,
            "bhStatus": self.bh_status.value,
        }
