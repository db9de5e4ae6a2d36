"""
商品編輯畫面 Page Object

把合成好的 ProductModel 套用到賣家 App / 後台網頁上。
流程只寫一次（ProductEditor），三個平台只在 locator 與「數字欄位怎麼輸入」上不同：
    Android  → resource-id，直接輸入
    iOS      → accessibility id，輸入後收起數字鍵盤
    Web      → CSS selector，先全選再輸入（受控元件 clear() 無效）

用法：
    editor = product_editor_for(platform, driver)
    editor.apply(expected)
    editor.save()
"""

from abc import ABC, abstractmethod

from appium.webdriver.common.appiumby import AppiumBy
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys

from core.base_page import BasePage
from core.env_manager import env
from models.product import ItemAttribute, ItemStatus, ModelVariant, ProductModel
from models.variation import VariationGroups
from utils.allure_helper import allure_step
from utils.logger import logger
from utils.wait_helper import retry_until


class ProductEditor(BasePage, ABC):
    """建立 / 編輯商品畫面的共同流程"""

    # ── Locators（子類別覆寫）──
    NAME_INPUT: tuple
    DESCRIPTION_INPUT: tuple
    LISTING_PRICE_INPUT: tuple
    SELLING_PRICE_INPUT: tuple
    COST_PRICE_INPUT: tuple
    MANAGE_BY_IMEI_CHECKBOX: tuple
    MANAGE_BY_LOT_CHECKBOX: tuple
    SHOW_OUT_OF_STOCK_CHECKBOX: tuple
    HIDE_STOCK_CHECKBOX: tuple
    IMEI_INPUT: tuple
    ADD_IMEI_BUTTON: tuple
    SEO_TITLE_INPUT: tuple
    SEO_DESCRIPTION_INPUT: tuple
    SEO_KEYWORDS_INPUT: tuple
    SEO_URL_INPUT: tuple
    WEIGHT_INPUT: tuple
    LENGTH_INPUT: tuple
    WIDTH_INPUT: tuple
    HEIGHT_INPUT: tuple
    PRIORITY_INPUT: tuple
    ADD_ATTRIBUTE_BUTTON: tuple
    ATTRIBUTE_NAME_INPUT: tuple
    ATTRIBUTE_VALUE_INPUT: tuple
    ATTRIBUTE_DISPLAY_CHECKBOX: tuple
    VARIATION_NAME_INPUT: tuple
    VARIATION_VALUE_INPUT: tuple
    ADD_VARIATION_GROUP_BUTTON: tuple
    VARIATION_DONE_BUTTON: tuple
    PLATFORM_CHECKBOXES: dict[str, tuple]
    STATUS_SWITCH: tuple
    VARIATION_STATUS_SWITCH: tuple
    SAVE_BUTTON: tuple

    # ── 平台差異 ──

    @abstractmethod
    def branch_stock_input(self, branch_id: int) -> tuple:
        """某分店的庫存欄位"""

    @abstractmethod
    def variation_row(self, value: str) -> tuple:
        """變化款式列表中某個款式的入口"""

    def enter_number(self, locator: tuple, value: int) -> None:
        self.input_text(locator, str(value))

    def add_variation_value(self, value: str) -> None:
        self.input_text(self.VARIATION_VALUE_INPUT, value)

    def is_element_checked(self, element) -> bool:
        return element.is_selected()

    # ── 套用流程 ──

    @allure_step("套用商品資料到畫面")
    def apply(self, product: ProductModel) -> None:
        logger.info(f"[Editor] 套用商品: {product.name}")
        self.input_text(self.NAME_INPUT, product.name)
        self.input_text(self.DESCRIPTION_INPUT, product.description)

        self.set_checkbox(self.MANAGE_BY_IMEI_CHECKBOX, product.is_imei)
        if not product.is_imei:
            self.set_checkbox(self.MANAGE_BY_LOT_CHECKBOX, product.lot_available)

        if product.has_model:
            self.enter_variation_groups(product.variation_groups)
            for variant in product.models:
                self.apply_variant(variant, product.lot_available)
        else:
            self.enter_prices(product.listing_price, product.selling_price, product.cost_price)
            if not product.lot_available:
                self.enter_stock(product.branch_stock, product.imei_serials)

        self.set_checkbox(self.SHOW_OUT_OF_STOCK_CHECKBOX, product.show_out_of_stock)
        self.set_checkbox(self.HIDE_STOCK_CHECKBOX, product.hide_stock)
        self.enter_seo(product)
        self.enter_shipping(product)
        self.enter_attributes(product.attributes)
        self.enter_number(self.PRIORITY_INPUT, product.priority)
        self.set_platforms(product)
        self.set_checkbox(self.STATUS_SWITCH, product.bh_status is ItemStatus.ACTIVE)

    def save(self) -> None:
        self.click(self.SAVE_BUTTON)

    # ── 各區塊 ──

    def enter_prices(self, listing: int, selling: int, cost: int) -> None:
        self.enter_number(self.LISTING_PRICE_INPUT, listing)
        self.enter_number(self.SELLING_PRICE_INPUT, selling)
        self.enter_number(self.COST_PRICE_INPUT, cost)

    def enter_stock(self, branch_stock: dict[int, int], imei_serials: dict[int, list[str]]) -> None:
        """IMEI 商品逐筆新增序號，一般商品直接填數量"""
        for branch_id, quantity in branch_stock.items():
            if imei_serials:
                self.click(self.branch_stock_input(branch_id))
                for serial in imei_serials.get(branch_id, []):
                    self.input_text(self.IMEI_INPUT, serial)
                    self.click(self.ADD_IMEI_BUTTON)
            else:
                self.enter_number(self.branch_stock_input(branch_id), quantity)

    def enter_variation_groups(self, groups: VariationGroups) -> None:
        for name, values in groups.groups.items():
            self.click(self.ADD_VARIATION_GROUP_BUTTON)
            self.input_text(self.VARIATION_NAME_INPUT, name)
            for value in values:
                self.add_variation_value(value)
        self.click(self.VARIATION_DONE_BUTTON)

    def apply_variant(self, variant: ModelVariant, lot_available: bool) -> None:
        self.click(self.variation_row(variant.value))
        self.enter_prices(variant.listing_price, variant.selling_price, variant.cost_price)
        if not lot_available:
            self.enter_stock(variant.branch_stock, variant.imei_serials)
        self.set_checkbox(self.VARIATION_STATUS_SWITCH, variant.status is ItemStatus.ACTIVE)
        self.save()

    def enter_seo(self, product: ProductModel) -> None:
        main = product.languages[0] if product.languages else None
        if not main or not main.seo_title:
            return
        self.input_text(self.SEO_TITLE_INPUT, main.seo_title)
        self.input_text(self.SEO_DESCRIPTION_INPUT, main.seo_description)
        self.input_text(self.SEO_KEYWORDS_INPUT, main.seo_keywords)
        self.input_text(self.SEO_URL_INPUT, main.seo_url)

    def enter_shipping(self, product: ProductModel) -> None:
        shipping = product.shipping
        self.enter_number(self.WEIGHT_INPUT, shipping.weight)
        self.enter_number(self.LENGTH_INPUT, shipping.length)
        self.enter_number(self.WIDTH_INPUT, shipping.width)
        self.enter_number(self.HEIGHT_INPUT, shipping.height)

    def enter_attributes(self, attributes: list[ItemAttribute]) -> None:
        for attribute in attributes:
            self.click(self.ADD_ATTRIBUTE_BUTTON)
            self.find_elements(self.ATTRIBUTE_NAME_INPUT)[-1].send_keys(attribute.name)
            self.find_elements(self.ATTRIBUTE_VALUE_INPUT)[-1].send_keys(attribute.value)
            display = self.find_elements(self.ATTRIBUTE_DISPLAY_CHECKBOX)[-1]
            if self.is_element_checked(display) != attribute.is_display:
                display.click()

    def set_platforms(self, product: ProductModel) -> None:
        wanted = {
            "web": product.on_web,
            "app": product.on_app,
            "in_store": product.in_store,
            "social": product.in_gosocial,
        }
        for channel, checked in wanted.items():
            locator = self.PLATFORM_CHECKBOXES.get(channel)
            # 方案沒開通的通路畫面上不會出現
            if locator and self.is_element_present(locator):
                self.set_checkbox(locator, checked)

    def set_checkbox(self, locator: tuple, checked: bool) -> None:
        """
        點擊直到勾選狀態符合預期。

        Raises:
            RetryExhaustedError: 重試次數用盡仍不符合
        """
        retry_until(
            env.get("retry.max_attempts", 5),
            env.get("retry.delay_ms", 1000),
            f"無法{'勾選' if checked else '取消勾選'}: {locator}",
            predicate=lambda: self.is_selected(locator) == checked,
            action=lambda: self.click(locator),
        )


class AndroidProductScreen(ProductEditor):
    """賣家 App（Android）商品編輯畫面"""

    _PKG = "com.example.seller:id"

    NAME_INPUT = (AppiumBy.ID, f"{_PKG}/edtProductName")
    DESCRIPTION_INPUT = (AppiumBy.ID, f"{_PKG}/edtProductDescription")
    LISTING_PRICE_INPUT = (AppiumBy.ID, f"{_PKG}/edtListingPrice")
    SELLING_PRICE_INPUT = (AppiumBy.ID, f"{_PKG}/edtSellingPrice")
    COST_PRICE_INPUT = (AppiumBy.ID, f"{_PKG}/edtCostPrice")
    MANAGE_BY_IMEI_CHECKBOX = (AppiumBy.ID, f"{_PKG}/swManageByIMEI")
    MANAGE_BY_LOT_CHECKBOX = (AppiumBy.ID, f"{_PKG}/swManageByLot")
    SHOW_OUT_OF_STOCK_CHECKBOX = (AppiumBy.ID, f"{_PKG}/swShowOutOfStock")
    HIDE_STOCK_CHECKBOX = (AppiumBy.ID, f"{_PKG}/swHideRemainingStock")
    IMEI_INPUT = (AppiumBy.ID, f"{_PKG}/edtInputImeiSerialNumberValue")
    ADD_IMEI_BUTTON = (AppiumBy.ID, f"{_PKG}/ivAddNewImeiSerialNumber")
    SEO_TITLE_INPUT = (AppiumBy.ID, f"{_PKG}/edtSEOTitle")
    SEO_DESCRIPTION_INPUT = (AppiumBy.ID, f"{_PKG}/edtSEODescription")
    SEO_KEYWORDS_INPUT = (AppiumBy.ID, f"{_PKG}/edtSEOKeywords")
    SEO_URL_INPUT = (AppiumBy.ID, f"{_PKG}/edtSEOUrl")
    WEIGHT_INPUT = (AppiumBy.ID, f"{_PKG}/edtWeight")
    LENGTH_INPUT = (AppiumBy.ID, f"{_PKG}/edtLength")
    WIDTH_INPUT = (AppiumBy.ID, f"{_PKG}/edtWidth")
    HEIGHT_INPUT = (AppiumBy.ID, f"{_PKG}/edtHeight")
    PRIORITY_INPUT = (AppiumBy.ID, f"{_PKG}/edtPriority")
    ADD_ATTRIBUTE_BUTTON = (AppiumBy.ID, f"{_PKG}/btnAddAttribute")
    ATTRIBUTE_NAME_INPUT = (AppiumBy.ID, f"{_PKG}/edtAttributeName")
    ATTRIBUTE_VALUE_INPUT = (AppiumBy.ID, f"{_PKG}/edtAttributeValue")
    ATTRIBUTE_DISPLAY_CHECKBOX = (AppiumBy.ID, f"{_PKG}/cbAttributeDisplay")
    VARIATION_NAME_INPUT = (AppiumBy.ID, f"{_PKG}/edtVariationName")
    VARIATION_VALUE_INPUT = (AppiumBy.ID, f"{_PKG}/edtVariationValue")
    ADD_VARIATION_GROUP_BUTTON = (AppiumBy.ID, f"{_PKG}/btnAddVariation")
    VARIATION_DONE_BUTTON = (AppiumBy.ID, f"{_PKG}/ivActionBarIconRight")
    PLATFORM_CHECKBOXES = {
        "web": (AppiumBy.ID, f"{_PKG}/cbWebPlatform"),
        "app": (AppiumBy.ID, f"{_PKG}/cbAppPlatform"),
        "in_store": (AppiumBy.ID, f"{_PKG}/cbInStorePlatform"),
        "social": (AppiumBy.ID, f"{_PKG}/cbGoSocialPlatform"),
    }
    STATUS_SWITCH = (AppiumBy.ID, f"{_PKG}/swProductStatus")
    VARIATION_STATUS_SWITCH = (AppiumBy.ID, f"{_PKG}/swVariationStatus")
    SAVE_BUTTON = (AppiumBy.ID, f"{_PKG}/ivActionBarIconRight")

    def branch_stock_input(self, branch_id: int) -> tuple:
        return (AppiumBy.XPATH, f"//*[@resource-id='{self._PKG}/branchStock_{branch_id}']//android.widget.EditText")

    def variation_row(self, value: str) -> tuple:
        return (AppiumBy.ANDROID_UIAUTOMATOR, f'new UiSelector().text("{value}")')

    def add_variation_value(self, value: str) -> None:
        # Android 輸入框需要 IME 的 Enter 才會新增 chip
        super().add_variation_value(value)
        self.driver.press_keycode(66)


class IOSProductScreen(ProductEditor):
    """賣家 App（iOS）商品編輯畫面"""

    NAME_INPUT = (AppiumBy.ACCESSIBILITY_ID, "productName")
    DESCRIPTION_INPUT = (AppiumBy.ACCESSIBILITY_ID, "productDescription")
    LISTING_PRICE_INPUT = (AppiumBy.ACCESSIBILITY_ID, "listingPrice")
    SELLING_PRICE_INPUT = (AppiumBy.ACCESSIBILITY_ID, "sellingPrice")
    COST_PRICE_INPUT = (AppiumBy.ACCESSIBILITY_ID, "costPrice")
    MANAGE_BY_IMEI_CHECKBOX = (AppiumBy.ACCESSIBILITY_ID, "manageByIMEI")
    MANAGE_BY_LOT_CHECKBOX = (AppiumBy.ACCESSIBILITY_ID, "manageByLot")
    SHOW_OUT_OF_STOCK_CHECKBOX = (AppiumBy.ACCESSIBILITY_ID, "showOutOfStock")
    HIDE_STOCK_CHECKBOX = (AppiumBy.ACCESSIBILITY_ID, "hideRemainingStock")
    IMEI_INPUT = (AppiumBy.ACCESSIBILITY_ID, "imeiSerialInput")
    ADD_IMEI_BUTTON = (AppiumBy.ACCESSIBILITY_ID, "addImeiSerial")
    SEO_TITLE_INPUT = (AppiumBy.ACCESSIBILITY_ID, "seoTitle")
    SEO_DESCRIPTION_INPUT = (AppiumBy.ACCESSIBILITY_ID, "seoDescription")
    SEO_KEYWORDS_INPUT = (AppiumBy.ACCESSIBILITY_ID, "seoKeywords")
    SEO_URL_INPUT = (AppiumBy.ACCESSIBILITY_ID, "seoUrl")
    WEIGHT_INPUT = (AppiumBy.ACCESSIBILITY_ID, "shippingWeight")
    LENGTH_INPUT = (AppiumBy.ACCESSIBILITY_ID, "shippingLength")
    WIDTH_INPUT = (AppiumBy.ACCESSIBILITY_ID, "shippingWidth")
    HEIGHT_INPUT = (AppiumBy.ACCESSIBILITY_ID, "shippingHeight")
    PRIORITY_INPUT = (AppiumBy.ACCESSIBILITY_ID, "priority")
    ADD_ATTRIBUTE_BUTTON = (AppiumBy.ACCESSIBILITY_ID, "addAttribute")
    ATTRIBUTE_NAME_INPUT = (AppiumBy.ACCESSIBILITY_ID, "attributeName")
    ATTRIBUTE_VALUE_INPUT = (AppiumBy.ACCESSIBILITY_ID, "attributeValue")
    ATTRIBUTE_DISPLAY_CHECKBOX = (AppiumBy.ACCESSIBILITY_ID, "attributeDisplay")
    VARIATION_NAME_INPUT = (AppiumBy.ACCESSIBILITY_ID, "variationName")
    VARIATION_VALUE_INPUT = (AppiumBy.ACCESSIBILITY_ID, "variationValue")
    ADD_VARIATION_GROUP_BUTTON = (AppiumBy.ACCESSIBILITY_ID, "addVariation")
    VARIATION_DONE_BUTTON = (AppiumBy.ACCESSIBILITY_ID, "variationDone")
    PLATFORM_CHECKBOXES = {
        "web": (AppiumBy.ACCESSIBILITY_ID, "platformWeb"),
        "app": (AppiumBy.ACCESSIBILITY_ID, "platformApp"),
        "in_store": (AppiumBy.ACCESSIBILITY_ID, "platformInStore"),
        "social": (AppiumBy.ACCESSIBILITY_ID, "platformGoSocial"),
    }
    STATUS_SWITCH = (AppiumBy.ACCESSIBILITY_ID, "productStatus")
    VARIATION_STATUS_SWITCH = (AppiumBy.ACCESSIBILITY_ID, "variationStatus")
    SAVE_BUTTON = (AppiumBy.ACCESSIBILITY_ID, "save")

    def branch_stock_input(self, branch_id: int) -> tuple:
        return (AppiumBy.ACCESSIBILITY_ID, f"branchStock_{branch_id}")

    def variation_row(self, value: str) -> tuple:
        return (AppiumBy.IOS_PREDICATE, f'type == "XCUIElementTypeStaticText" AND name == "{value}"')

    def enter_number(self, locator: tuple, value: int) -> None:
        # 數字鍵盤沒有 return 鍵，輸入完要手動收起
        super().enter_number(locator, value)
        self.driver.hide_keyboard()

    def is_selected(self, locator: tuple) -> bool:
        # XCUITest 的開關以 value "1" / "0" 表示狀態
        return self.get_attribute(locator, "value") == "1"

    def is_element_checked(self, element) -> bool:
        return element.get_attribute("value") == "1"


class WebProductPage(ProductEditor):
    """賣家後台網頁的商品編輯頁"""

    NAME_INPUT = (By.CSS_SELECTOR, "input#productName")
    DESCRIPTION_INPUT = (By.CSS_SELECTOR, ".fr-element")
    LISTING_PRICE_INPUT = (By.CSS_SELECTOR, "[name='productPrice']")
    SELLING_PRICE_INPUT = (By.CSS_SELECTOR, "[name='productDiscountPrice']")
    COST_PRICE_INPUT = (By.CSS_SELECTOR, "[name='costPrice']")
    MANAGE_BY_IMEI_CHECKBOX = (By.CSS_SELECTOR, "#manageInventory-IMEI")
    MANAGE_BY_LOT_CHECKBOX = (By.CSS_SELECTOR, "#lotAvailable")
    SHOW_OUT_OF_STOCK_CHECKBOX = (By.CSS_SELECTOR, "[name='showOutOfStock']")
    HIDE_STOCK_CHECKBOX = (By.CSS_SELECTOR, "[name='isHideStock']")
    IMEI_INPUT = (By.CSS_SELECTOR, ".modal-body input.imei-input")
    ADD_IMEI_BUTTON = (By.CSS_SELECTOR, ".modal-body .btn-add-imei")
    SEO_TITLE_INPUT = (By.CSS_SELECTOR, "input#seoTitle")
    SEO_DESCRIPTION_INPUT = (By.CSS_SELECTOR, "input#seoDescription")
    SEO_KEYWORDS_INPUT = (By.CSS_SELECTOR, "input#seoKeywords")
    SEO_URL_INPUT = (By.CSS_SELECTOR, "input#seoUrl")
    WEIGHT_INPUT = (By.CSS_SELECTOR, "[name='productWeight']")
    LENGTH_INPUT = (By.CSS_SELECTOR, "[name='productLength']")
    WIDTH_INPUT = (By.CSS_SELECTOR, "[name='productWidth']")
    HEIGHT_INPUT = (By.CSS_SELECTOR, "[name='productHeight']")
    PRIORITY_INPUT = (By.CSS_SELECTOR, "[name='productPriority']")
    ADD_ATTRIBUTE_BUTTON = (By.CSS_SELECTOR, ".attribute-section .btn-add")
    ATTRIBUTE_NAME_INPUT = (By.CSS_SELECTOR, "[name^='attrName']")
    ATTRIBUTE_VALUE_INPUT = (By.CSS_SELECTOR, "[name^='attrValue']")
    ATTRIBUTE_DISPLAY_CHECKBOX = (By.CSS_SELECTOR, "[name^='attrDisplay']")
    VARIATION_NAME_INPUT = (By.CSS_SELECTOR, "[name^='variationName']")
    VARIATION_VALUE_INPUT = (By.CSS_SELECTOR, ".variation-value input")
    ADD_VARIATION_GROUP_BUTTON = (By.CSS_SELECTOR, ".variation-section .btn-add")
    VARIATION_DONE_BUTTON = (By.CSS_SELECTOR, ".variation-section .btn-apply")
    PLATFORM_CHECKBOXES = {
        "web": (By.CSS_SELECTOR, "[name='onWeb']"),
        "app": (By.CSS_SELECTOR, "[name='onApp']"),
        "in_store": (By.CSS_SELECTOR, "[name='inStore']"),
        "social": (By.CSS_SELECTOR, "[name='inGoSocial']"),
    }
    STATUS_SWITCH = (By.CSS_SELECTOR, "[name='bhStatus']")
    VARIATION_STATUS_SWITCH = (By.CSS_SELECTOR, "[name='modelStatus']")
    SAVE_BUTTON = (By.CSS_SELECTOR, ".btn-save")

    def branch_stock_input(self, branch_id: int) -> tuple:
        return (By.CSS_SELECTOR, f"[name='branchStock-{branch_id}']")

    def variation_row(self, value: str) -> tuple:
        return (By.XPATH, f"//tr[td[text()='{value}']]//a")

    def enter_number(self, locator: tuple, value: int) -> None:
        element = self.wait_for_visible(locator)
        element.send_keys(Keys.CONTROL, "a")
        element.send_keys(str(value))

    def add_variation_value(self, value: str) -> None:
        super().add_variation_value(value)
        self.find_element(self.VARIATION_VALUE_INPUT).send_keys(Keys.ENTER)


_EDITORS = {
    "android": AndroidProductScreen,
    "ios": IOSProductScreen,
    "web": WebProductPage,
}


def product_editor_for(platform: str, driver) -> ProductEditor:
    """
    Raises:
        ValueError: 不支援的平台
    """
    try:
        return _EDITORS[platform](driver)
    except KeyError:
        raise ValueError(f"不支援的平台: {platform}") from None
