"""
pages.product_editor 單元測試

driver 與 BasePage 的元素操作都以 mock 取代，
只驗證「ProductModel → 畫面操作」的對應是否正確。
"""

from unittest.mock import MagicMock, call, patch

import pytest
from selenium.webdriver.common.keys import Keys

from core.exceptions import RetryExhaustedError
from models.product import (
    InventoryManageType,
    ItemAttribute,
    ItemStatus,
    MainLanguage,
    ModelVariant,
    ProductModel,
)
from models.variation import VariationGroups
from pages.product_editor import (
    AndroidProductScreen,
    IOSProductScreen,
    WebProductPage,
    product_editor_for,
)


def make_editor(cls=AndroidProductScreen):
    with patch("core.base_page.WebDriverWait"):
        editor = cls(MagicMock())
    editor.input_text = MagicMock()
    editor.click = MagicMock()
    editor.enter_number = MagicMock()
    editor.set_checkbox = MagicMock()
    editor.is_element_present = MagicMock(return_value=True)
    return editor


@pytest.mark.unit
class TestFactory:

    @pytest.mark.unit
    @pytest.mark.parametrize("platform, cls", [
        ("android", AndroidProductScreen),
        ("ios", IOSProductScreen),
        ("web", WebProductPage),
    ])
    def test_editor_for_platform(self, platform, cls):
        with patch("core.base_page.WebDriverWait"):
            assert isinstance(product_editor_for(platform, MagicMock()), cls)

    @pytest.mark.unit
    def test_unknown_platform(self):
        with pytest.raises(ValueError, match="不支援的平台"):
            product_editor_for("windows", MagicMock())


@pytest.mark.unit
class TestApply:
    """apply：依商品內容決定要填哪些區塊"""

    @pytest.mark.unit
    def test_simple_product(self):
        editor = make_editor()
        product = ProductModel(
            name="Shirt", description="Sale",
            listing_price=100, selling_price=90, cost_price=50,
            branch_stock={1: 5, 2: 0}, priority=7, on_web=True,
        )

        editor.apply(product)

        editor.input_text.assert_any_call(editor.NAME_INPUT, "Shirt")
        editor.input_text.assert_any_call(editor.DESCRIPTION_INPUT, "Sale")
        editor.enter_number.assert_any_call(editor.LISTING_PRICE_INPUT, 100)
        editor.enter_number.assert_any_call(editor.branch_stock_input(1), 5)
        editor.enter_number.assert_any_call(editor.branch_stock_input(2), 0)
        editor.enter_number.assert_any_call(editor.PRIORITY_INPUT, 7)
        editor.set_checkbox.assert_any_call(editor.MANAGE_BY_IMEI_CHECKBOX, False)
        editor.set_checkbox.assert_any_call(editor.MANAGE_BY_LOT_CHECKBOX, False)
        editor.set_checkbox.assert_any_call(editor.PLATFORM_CHECKBOXES["web"], True)
        editor.set_checkbox.assert_any_call(editor.STATUS_SWITCH, True)

    @pytest.mark.unit
    def test_lot_product_skips_stock(self):
        editor = make_editor()
        editor.apply(ProductModel(name="Lot", lot_available=True, branch_stock={1: 0}))
        assert call(editor.branch_stock_input(1), 0) not in editor.enter_number.call_args_list
        editor.set_checkbox.assert_any_call(editor.MANAGE_BY_LOT_CHECKBOX, True)

    @pytest.mark.unit
    def test_imei_product_skips_lot_checkbox(self):
        editor = make_editor()
        editor.apply(ProductModel(
            name="Phone", inventory_manage_type=InventoryManageType.IMEI_SERIAL_NUMBER,
        ))
        checkboxes = [c.args[0] for c in editor.set_checkbox.call_args_list]
        assert editor.MANAGE_BY_LOT_CHECKBOX not in checkboxes

    @pytest.mark.unit
    def test_inactive_status(self):
        editor = make_editor()
        editor.apply(ProductModel(name="Off", bh_status=ItemStatus.INACTIVE))
        editor.set_checkbox.assert_any_call(editor.STATUS_SWITCH, False)

    @pytest.mark.unit
    def test_variation_product(self):
        editor = make_editor()
        editor.enter_variation_groups = MagicMock()
        editor.apply_variant = MagicMock()
        groups = VariationGroups({"en_var1": ["en_var1_1", "en_var1_2"]})
        models = [ModelVariant("en_var1_1", "en_var1"), ModelVariant("en_var1_2", "en_var1")]

        editor.apply(ProductModel(name="V", has_model=True, variation_groups=groups, models=models))

        editor.enter_variation_groups.assert_called_once_with(groups)
        assert editor.apply_variant.call_args_list == [call(models[0], False), call(models[1], False)]
        # 商品層級不填價格
        assert call(editor.LISTING_PRICE_INPUT, 0) not in editor.enter_number.call_args_list


@pytest.mark.unit
class TestSections:

    @pytest.mark.unit
    def test_enter_stock_imei(self):
        """IMEI 商品逐筆輸入序號"""
        editor = make_editor()
        editor.enter_stock({1: 2, 2: 0}, {1: ["Main_0", "Main_1"], 2: []})

        assert editor.input_text.call_args_list == [
            call(editor.IMEI_INPUT, "Main_0"), call(editor.IMEI_INPUT, "Main_1"),
        ]
        assert editor.click.call_args_list == [
            call(editor.branch_stock_input(1)),
            call(editor.ADD_IMEI_BUTTON),
            call(editor.ADD_IMEI_BUTTON),
            call(editor.branch_stock_input(2)),
        ]
        editor.enter_number.assert_not_called()

    @pytest.mark.unit
    def test_enter_variation_groups(self):
        editor = make_editor()
        editor.add_variation_value = MagicMock()
        editor.enter_variation_groups(VariationGroups({"c": ["red", "blue"], "s": ["M"]}))

        assert editor.input_text.call_args_list == [
            call(editor.VARIATION_NAME_INPUT, "c"), call(editor.VARIATION_NAME_INPUT, "s"),
        ]
        assert editor.add_variation_value.call_args_list == [call("red"), call("blue"), call("M")]
        assert editor.click.call_args_list[-1] == call(editor.VARIATION_DONE_BUTTON)

    @pytest.mark.unit
    def test_apply_variant_saves(self):
        editor = make_editor()
        variant = ModelVariant("en_var1_1", listing_price=10, selling_price=9, cost_price=1, branch_stock={1: 3})

        editor.apply_variant(variant, lot_available=False)

        assert editor.click.call_args_list == [call(editor.variation_row("en_var1_1")), call(editor.SAVE_BUTTON)]
        editor.enter_number.assert_any_call(editor.branch_stock_input(1), 3)
        editor.set_checkbox.assert_called_once_with(editor.VARIATION_STATUS_SWITCH, True)

    @pytest.mark.unit
    def test_apply_variant_inactive_status(self):
        editor = make_editor()
        variant = ModelVariant("en_var1_2", status=ItemStatus.INACTIVE)

        editor.apply_variant(variant, lot_available=True)

        editor.set_checkbox.assert_called_once_with(editor.VARIATION_STATUS_SWITCH, False)
        editor.enter_number.assert_any_call(editor.LISTING_PRICE_INPUT, 0)

    @pytest.mark.unit
    def test_enter_seo_skipped_without_title(self):
        editor = make_editor()
        editor.enter_seo(ProductModel(languages=[MainLanguage("en")]))
        editor.input_text.assert_not_called()

    @pytest.mark.unit
    def test_enter_seo(self):
        editor = make_editor()
        editor.enter_seo(ProductModel(languages=[MainLanguage("en", seo_title="T", seo_url="u")]))
        editor.input_text.assert_any_call(editor.SEO_TITLE_INPUT, "T")
        editor.input_text.assert_any_call(editor.SEO_URL_INPUT, "u")

    @pytest.mark.unit
    def test_enter_attributes_uses_last_row(self):
        editor = make_editor()
        rows = [MagicMock(), MagicMock(**{"is_selected.return_value": True})]
        editor.find_elements = MagicMock(return_value=rows)

        editor.enter_attributes([ItemAttribute("Color", "Red")])

        editor.click.assert_called_once_with(editor.ADD_ATTRIBUTE_BUTTON)
        assert rows[-1].send_keys.call_args_list == [call("Color"), call("Red")]
        rows[0].send_keys.assert_not_called()
        # 已勾選顯示，不需再點
        rows[-1].click.assert_not_called()

    @pytest.mark.unit
    def test_enter_attributes_toggles_display(self):
        editor = make_editor()
        display = MagicMock(**{"is_selected.return_value": True})
        editor.find_elements = MagicMock(
            side_effect=lambda locator: [display] if locator == editor.ATTRIBUTE_DISPLAY_CHECKBOX else [MagicMock()]
        )

        editor.enter_attributes([ItemAttribute("Color", "Red", is_display=False)])

        display.click.assert_called_once()

    @pytest.mark.unit
    def test_set_platforms_skips_absent(self):
        """方案沒開通的通路不在畫面上，不操作"""
        editor = make_editor()
        editor.is_element_present = MagicMock(
            side_effect=lambda locator: locator != editor.PLATFORM_CHECKBOXES["social"]
        )
        editor.set_platforms(ProductModel(on_web=True, on_app=False, in_store=True, in_gosocial=True))

        assert editor.set_checkbox.call_args_list == [
            call(editor.PLATFORM_CHECKBOXES["web"], True),
            call(editor.PLATFORM_CHECKBOXES["app"], False),
            call(editor.PLATFORM_CHECKBOXES["in_store"], True),
        ]


@pytest.mark.unit
class TestSetCheckbox:
    """set_checkbox：點擊直到狀態符合"""

    def make(self):
        with patch("core.base_page.WebDriverWait"):
            editor = AndroidProductScreen(MagicMock())
        editor.click = MagicMock()
        return editor

    @pytest.mark.unit
    @patch("utils.wait_helper.time.sleep")
    def test_already_checked(self, mock_sleep):
        editor = self.make()
        editor.is_selected = MagicMock(return_value=True)
        editor.set_checkbox(editor.HIDE_STOCK_CHECKBOX, True)
        editor.click.assert_not_called()

    @pytest.mark.unit
    @patch("utils.wait_helper.time.sleep")
    def test_click_until_checked(self, mock_sleep):
        editor = self.make()
        editor.is_selected = MagicMock(side_effect=[False, True])
        editor.set_checkbox(editor.HIDE_STOCK_CHECKBOX, True)
        editor.click.assert_called_once_with(editor.HIDE_STOCK_CHECKBOX)

    @pytest.mark.unit
    @patch("utils.wait_helper.time.sleep")
    @patch("pages.product_editor.env")
    def test_exhausted(self, mock_env, mock_sleep):
        mock_env.get.side_effect = lambda key, default=None: {"retry.max_attempts": 2}.get(key, 0)
        editor = self.make()
        editor.is_selected = MagicMock(return_value=True)
        with pytest.raises(RetryExhaustedError, match="無法取消勾選"):
            editor.set_checkbox(editor.HIDE_STOCK_CHECKBOX, False)
        assert editor.click.call_count == 2


@pytest.mark.unit
class TestPlatformDifferences:

    @pytest.mark.unit
    def test_android_variation_value_presses_enter(self):
        with patch("core.base_page.WebDriverWait"):
            editor = AndroidProductScreen(MagicMock())
        editor.input_text = MagicMock()
        editor.add_variation_value("red")
        editor.input_text.assert_called_once_with(editor.VARIATION_VALUE_INPUT, "red")
        editor.driver.press_keycode.assert_called_once_with(66)

    @pytest.mark.unit
    def test_ios_number_hides_keyboard(self):
        with patch("core.base_page.WebDriverWait"):
            editor = IOSProductScreen(MagicMock())
        editor.input_text = MagicMock()
        editor.enter_number(editor.PRIORITY_INPUT, 5)
        editor.input_text.assert_called_once_with(editor.PRIORITY_INPUT, "5")
        editor.driver.hide_keyboard.assert_called_once()

    @pytest.mark.unit
    @pytest.mark.parametrize("value, expected", [("1", True), ("0", False)])
    def test_ios_is_selected_reads_value(self, value, expected):
        with patch("core.base_page.WebDriverWait"):
            editor = IOSProductScreen(MagicMock())
        editor.get_attribute = MagicMock(return_value=value)
        assert editor.is_selected(editor.STATUS_SWITCH) is expected

    @pytest.mark.unit
    @pytest.mark.parametrize("value, expected", [("1", True), ("0", False)])
    def test_ios_element_checked_reads_value(self, value, expected):
        with patch("core.base_page.WebDriverWait"):
            editor = IOSProductScreen(MagicMock())
        element = MagicMock(**{"get_attribute.return_value": value})
        assert editor.is_element_checked(element) is expected
        element.get_attribute.assert_called_once_with("value")

    @pytest.mark.unit
    def test_web_number_selects_all_first(self):
        with patch("core.base_page.WebDriverWait"):
            editor = WebProductPage(MagicMock())
        element = MagicMock()
        editor.wait_for_visible = MagicMock(return_value=element)

        editor.enter_number(editor.LISTING_PRICE_INPUT, 100)

        assert element.send_keys.call_args_list == [call(Keys.CONTROL, "a"), call("100")]

    @pytest.mark.unit
    def test_locators_differ_per_branch(self):
        with patch("core.base_page.WebDriverWait"):
            editors = [cls(MagicMock()) for cls in (AndroidProductScreen, IOSProductScreen, WebProductPage)]
        for editor in editors:
            assert editor.branch_stock_input(1) != editor.branch_stock_input(2)
            assert "en_var1_1" in editor.variation_row("en_var1_1")[1]
