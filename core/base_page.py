"""
Page Object 基底類別

所有畫面 / 頁面物件都繼承此類，提供通用的元素操作方法。
Android / iOS 走 Appium driver，Web 走 selenium driver，介面相同。
"""

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from config.config import Config
from core.exceptions import (
    ElementNotClickableError,
    ElementNotFoundError,
    ElementNotVisibleError,
)
from utils.logger import logger
from utils.screenshot import take_screenshot


class BasePage:
    """
    Page Object 基底類別

    提供：
    - 元素等待與查找
    - 點擊、輸入、勾選狀態等通用操作
    - 逾時時轉成自訂 Exception
    """

    def __init__(self, driver, timeout: int | None = None):
        self.driver = driver
        self.timeout = timeout or Config.EXPLICIT_WAIT
        self.wait = WebDriverWait(driver, self.timeout)

    # ── 元素查找 ──

    def find_element(self, locator: tuple) -> WebElement:
        """等待元素出現並回傳"""
        try:
            return self.wait.until(EC.presence_of_element_located(locator))
        except TimeoutException as e:
            raise ElementNotFoundError(locator, self.timeout) from e

    def find_elements(self, locator: tuple) -> list[WebElement]:
        """等待至少一個元素出現並回傳列表"""
        self.find_element(locator)
        return self.driver.find_elements(*locator)

    def wait_for_clickable(self, locator: tuple) -> WebElement:
        """等待元素可點擊"""
        try:
            return self.wait.until(EC.element_to_be_clickable(locator))
        except TimeoutException as e:
            raise ElementNotClickableError(locator) from e

    def wait_for_visible(self, locator: tuple) -> WebElement:
        """等待元素可見"""
        try:
            return self.wait.until(EC.visibility_of_element_located(locator))
        except TimeoutException as e:
            raise ElementNotVisibleError(locator) from e

    def is_element_present(self, locator: tuple, timeout: int = 3) -> bool:
        """判斷元素是否存在（不拋出例外）"""
        try:
            WebDriverWait(self.driver, timeout).until(
                EC.presence_of_element_located(locator)
            )
            return True
        except TimeoutException:
            return False

    # ── 元素操作 ──

    def click(self, locator: tuple) -> None:
        logger.info(f"點擊元素: {locator}")
        self.wait_for_clickable(locator).click()

    def input_text(self, locator: tuple, text: str) -> None:
        """清除後輸入文字"""
        logger.info(f"輸入文字: '{text}' -> {locator}")
        element = self.wait_for_visible(locator)
        element.clear()
        element.send_keys(text)

    def get_text(self, locator: tuple) -> str:
        return self.find_element(locator).text

    def get_attribute(self, locator: tuple, attribute: str) -> str:
        return self.find_element(locator).get_attribute(attribute)

    def is_selected(self, locator: tuple) -> bool:
        """勾選框 / 開關是否為勾選狀態"""
        return self.find_element(locator).is_selected()

    # ── 頁面狀態 ──

    def screenshot(self, name: str) -> str:
        """截圖並回傳檔案路徑"""
        return take_screenshot(self.driver, name)
