"""
資料驅動的商品建立 / 更新端對端測試

從 test_data/product_scenarios.yaml 載入案例：
合成預期商品 → 套用到畫面並儲存 → 等後台搜尋得到 → 逐欄驗證。

需要真實裝置 / 瀏覽器與賣家帳號，預設不執行：
    pytest -m e2e --platform android --env staging
"""

import pytest

from api.product import ProductApi
from pages.product_editor import product_editor_for
from synthesis.product_info import ProductInformationSynthesizer, SynthesisConfig
from utils.data_loader import get_test_ids, load_data
from utils.logger import log_step
from verification.oracle import VerificationOracle

SCENARIOS = load_data("product_scenarios.yaml")


@pytest.mark.e2e
class TestCreateProduct:
    """建立商品後，後台資料需與預期一致"""

    @pytest.fixture
    def oracle(self, seller_session, store_context):
        return VerificationOracle(
            ProductApi(seller_session),
            store_context.active_branch_ids,
            store_context.default_language,
        )

    @pytest.mark.parametrize("case", SCENARIOS, ids=get_test_ids(SCENARIOS))
    def test_create_product(self, driver, platform, seller_session, store_context, scenario, oracle, case):
        scenario.store = store_context
        synthesizer = ProductInformationSynthesizer(store_context, scenario.rng)

        log_step("SynthesizeProduct")
        scenario.expected = synthesizer.synthesize(SynthesisConfig.from_dict(case))

        log_step("ApplyToUI")
        editor = product_editor_for(platform, driver)
        editor.apply(scenario.expected)
        editor.save()

        log_step("ResolveProductId")
        scenario.product_id = ProductApi(seller_session).wait_for_product_id(scenario.expected.name)

        log_step("VerifyProductInfo")
        oracle.assert_matches(scenario.product_id, scenario.expected)
        log_step("VerifyProductInfo", "DONE")

    def test_update_product_status(self, driver, platform, seller_session, store_context, scenario, oracle):
        """建立後切換商品狀態，後台需反映新狀態與款式狀態"""
        synthesizer = ProductInformationSynthesizer(store_context, scenario.rng)
        products = ProductApi(seller_session)

        created = synthesizer.synthesize(SynthesisConfig(has_model=True, branch_stock=[1]))
        editor = product_editor_for(platform, driver)
        editor.apply(created)
        editor.save()
        created.id = products.wait_for_product_id(created.name)

        scenario.expected = synthesizer.toggle_status(created)
        editor.apply(scenario.expected)
        editor.save()

        oracle.assert_matches(created.id, scenario.expected)

    def test_add_attributes(self, driver, platform, seller_session, store_context, scenario, oracle):
        """建立時沒有屬性，之後新增屬性，後台需反映新的屬性"""
        synthesizer = ProductInformationSynthesizer(store_context, scenario.rng)
        products = ProductApi(seller_session)

        created = synthesizer.synthesize(SynthesisConfig(branch_stock=[2]))
        editor = product_editor_for(platform, driver)
        editor.apply(created)
        editor.save()
        created.id = products.wait_for_product_id(created.name)

        scenario.expected = synthesizer.with_attributes(created)
        editor.enter_attributes(scenario.expected.attributes)
        editor.save()

        oracle.assert_matches(created.id, scenario.expected)
