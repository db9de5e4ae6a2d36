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
from models.variation import VariationGroups

__all__ = [
    "InventoryManageType",
    "ItemAttribute",
    "ItemStatus",
    "MainLanguage",
    "ModelVariant",
    "ProductModel",
    "ShippingInfo",
    "VariationGroups",
    "VersionLanguage",
]
