"""
Allure 報告整合輔助
封裝 Allure 常用的步驟標記與附件功能：
預期商品模型、驗證不一致清單、失敗截圖都經由這裡附加到報告。
"""

import functools
import json

import allure


def allure_step(title: str):
    """
    裝飾器：將函式標記為 Allure step，同時保留原函式的 metadata。

    用法：
        @allure_step("套用商品資料到畫面")
        def apply(self, product): ...
    """
    def decorator(func):
        @allure.step(title)
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)
        return wrapper
    return decorator


def attach_screenshot(driver, name: str = "截圖") -> None:
    """將截圖附加到 Allure 報告"""
    png = driver.get_screenshot_as_png()
    allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)


def attach_text(text: str, name: str = "log") -> None:
    """將文字附加到 Allure 報告"""
    allure.attach(text, name=name, attachment_type=allure.attachment_type.TEXT)


def attach_json(data, name: str = "data") -> None:
    """將 dict / list 以 JSON 附加到 Allure 報告"""
    allure.attach(
        json.dumps(data, indent=2, ensure_ascii=False),
        name=name,
        attachment_type=allure.attachment_type.JSON,
    )
