"""
等待與重試工具
提供帶修正動作的重試輪詢、純等待的有界輪詢，以及例外重試。

用法：
    from utils.wait_helper import retry_until, poll_until, retry

    # 條件不成立就執行修正動作，最多 5 次，每次間隔 1000ms
    retry_until(5, 1000, "無法勾選 Web 平台",
                predicate=lambda: checkbox.is_selected(),
                action=lambda: checkbox.click())

    # 等背景批次作業完成（不做任何修正，只等待）
    poll_until(lambda: api.is_bulk_job_done(job_id),
               max_attempts=30, delay_ms=2000, message="批次更新未完成")

    # 例外重試
    retry(api_call, max_attempts=3, delay=1.0)
"""

import time
from typing import Callable, TypeVar

from core.exceptions import RetryExhaustedError
from utils.logger import logger

T = TypeVar("T")


def retry_until(
    max_attempts: int,
    delay_ms: int,
    failure_message: str,
    predicate: Callable[[], bool],
    action: Callable[[], object],
) -> None:
    """
    重試直到 predicate 成立。

    每一輪先檢查 predicate()；成立就結束。
    不成立則執行 action()（修正用的 UI / API 動作），再等待 delay_ms 後進入下一輪。
    最後一輪的 action 之後不再等待。

    Args:
        max_attempts: 最多幾輪
        delay_ms: 每輪之間的等待毫秒數
        failure_message: 次數用盡時的錯誤訊息
        predicate: 回傳 True 代表已達到期望狀態
        action: 修正動作

    Raises:
        RetryExhaustedError: max_attempts 用盡仍未成立
    """
    for attempt in range(1, max_attempts + 1):
        if predicate():
            return
        logger.debug(f"[RetryUntil] 第 {attempt}/{max_attempts} 次未成立，執行修正動作")
        action()
        if attempt < max_attempts:
            time.sleep(delay_ms / 1000)

    raise RetryExhaustedError(failure_message, attempts=max_attempts)


def poll_until(
    condition: Callable[[], T],
    max_attempts: int = 30,
    delay_ms: int = 1000,
    message: str = "",
) -> T:
    """
    有界等待：反覆檢查 condition，期間只睡眠不做任何動作。

    用於等待後台非同步作業（批次更新、索引同步）達到穩定狀態。

    Args:
        condition: 回傳值為 truthy 時視為成立
        max_attempts: 最多檢查次數（硬上限）
        delay_ms: 每次檢查之間的固定等待毫秒數
        message: 超過上限時的錯誤訊息

    Returns:
        condition 的回傳值

    Raises:
        RetryExhaustedError: 超過上限仍未成立
    """
    for attempt in range(1, max_attempts + 1):
        result = condition()
        if result:
            if attempt > 1:
                logger.info(f"[Poll] 第 {attempt} 次檢查成立")
            return result
        if attempt < max_attempts:
            time.sleep(delay_ms / 1000)

    raise RetryExhaustedError(message or "等待逾時", attempts=max_attempts)


def retry(
    func: Callable[[], T],
    max_attempts: int = 3,
    delay: float = 1.0,
    exceptions: tuple = (Exception,),
) -> T:
    """
    重試機制，遇到指定例外時自動重試。

    Args:
        func: 要執行的 callable
        max_attempts: 最大嘗試次數
        delay: 每次重試間隔秒數
        exceptions: 要攔截重試的例外類型

    Returns:
        func 的回傳值

    Raises:
        最後一次嘗試的例外
    """
    for attempt in range(1, max_attempts + 1):
        try:
            return func()
        except exceptions as e:
            logger.warning(f"第 {attempt}/{max_attempts} 次嘗試失敗: {e}")
            if attempt == max_attempts:
                raise
            time.sleep(delay)
