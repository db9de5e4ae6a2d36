"""
pytest 全域 fixtures

提供：
- 命令列參數 (--platform, --env, --seed)
- driver fixture：每個測試自動建立/銷毀 driver
- 後台 API fixtures：api_client、seller_session、store_context
- scenario fixture：每個測試獨立的 seed 與亂數來源
- 失敗時自動截圖、附加預期商品到 Allure 報告
"""

import pytest

from config.config import SUPPORTED_PLATFORMS, Config
from core.driver_manager import DriverManager
from core.scenario import ScenarioContext
from utils.allure_helper import attach_json, attach_screenshot, attach_text
from utils.logger import logger
from utils.screenshot import take_screenshot


# ── 命令列參數 ──

def pytest_addoption(parser):
    """新增自訂命令列參數"""
    parser.addoption(
        "--platform",
        action="store",
        default=Config.PLATFORM,
        choices=list(SUPPORTED_PLATFORMS),
        help="測試平台: android / ios / web",
    )
    parser.addoption(
        "--env",
        action="store",
        default="dev",
        help="測試環境: dev / staging",
    )
    parser.addoption(
        "--seed",
        action="store",
        type=int,
        default=None,
        help="固定亂數 seed，重現失敗案例的資料",
    )


# ── Session / Environment ──

@pytest.fixture(scope="session")
def platform(request) -> str:
    """取得測試平台"""
    return request.config.getoption("--platform")


@pytest.fixture(scope="session")
def test_env(request) -> str:
    """取得測試環境並初始化 EnvManager"""
    env_name = request.config.getoption("--env")
    from core.env_manager import env
    env.switch(env_name)
    return env_name


# ── Driver ──

@pytest.fixture(scope="function")
def driver(platform):
    """
    每個測試函式自動建立並銷毀 driver。

    scope=function 確保每個測試獨立，互不影響。
    """
    logger.info(f"===== 建立 {platform} driver =====")
    drv = DriverManager.create_driver(platform)
    yield drv
    logger.info("===== 關閉 driver =====")
    DriverManager.quit_driver()


# ── 後台 API ──

@pytest.fixture(scope="session")
def api_client(test_env):
    """後台 REST client，base url 依環境設定"""
    from core.env_manager import env
    from utils.api_client import ApiClient

    return ApiClient(env.get("api_base_url"))


@pytest.fixture(scope="session")
def seller_session(api_client):
    """登入一次，整個 session 共用 token；連線失敗重試 3 次"""
    import requests

    from api.login import SellerSession
    from utils.wait_helper import retry

    if not Config.SELLER_USERNAME:
        pytest.skip("未設定 SELLER_USERNAME / SELLER_PASSWORD")
    return retry(
        lambda: SellerSession.login(api_client, Config.SELLER_USERNAME, Config.SELLER_PASSWORD),
        max_attempts=3,
        delay=2.0,
        exceptions=(requests.ConnectionError,),
    )


@pytest.fixture(scope="session")
def store_context(seller_session):
    """商店參考資料：分店、語系、稅率、可用通路"""
    from api.setting import StoreSettingApi
    from api.user_feature import UserFeatureApi
    from synthesis.product_info import StoreContext

    return StoreContext.fetch(StoreSettingApi(seller_session), UserFeatureApi(seller_session))


# ── Scenario ──

@pytest.fixture
def scenario(request) -> ScenarioContext:
    """
    每個測試一個獨立的情境。

    --seed 有給就用，沒給則以時間產生；seed 會寫進 log 與 Allure 報告。
    """
    context = ScenarioContext.new(request.config.getoption("--seed"))
    attach_text(str(context.seed), "seed")
    return context


# ── 測試生命週期 Hook ──

@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """測試失敗時：截圖 + 頁面結構 + 預期商品"""
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.failed:
        return

    logger.error(f"測試失敗: {item.name}")

    driver = item.funcargs.get("driver")
    if driver:
        take_screenshot(driver, f"FAIL_{item.name}")
        attach_screenshot(driver, f"失敗截圖: {item.name}")
        attach_text(driver.page_source, "頁面結構")

    context = item.funcargs.get("scenario")
    if context is not None:
        logger.error(f"重現指令: pytest {item.nodeid} --seed {context.seed}")
        if context.expected is not None:
            attach_json(context.expected.to_dict(), "預期商品")
