"""Retry-until-condition reads for UI state that settles asynchronously.

Only *reads* are repeated here. Actions are never reissued by a poll.
"""
import time

from config.settings import POLL_INTERVAL, TRANSITION_TIMEOUT
from utils.exceptions import AssertionTimeout
from utils.logger import get_logger

logger = get_logger(__name__)

_UNSET = object()


def poll_until(read, predicate, timeout: float | None = None, interval: float = POLL_INTERVAL,
               description: str = "condition", deadline: float | None = None,
               clock=time.monotonic, sleep=time.sleep):
    """反复重新读取状态，直到 predicate(value) 成立

    :param read: 无参函数，每次轮询都重新调用，绝不缓存旧值
    :param predicate: value -> bool
    :param timeout: 秒，默认 TRANSITION_TIMEOUT
    :param interval: 固定轮询间隔（秒）
    :param deadline: 用例整体截止时间（clock() 时间轴），轮询不会越过它
    :return: 满足条件的那次读取值
    :raises AssertionTimeout: 超时，携带最后一次读取值
    """
    if timeout is None:
        timeout = TRANSITION_TIMEOUT / 1000
    start = clock()
    stop = start + timeout
    clamped = deadline is not None and deadline < stop
    if clamped:
        stop = deadline

    last = _UNSET
    last_error = None
    attempts = 0
    while True:
        attempts += 1
        try:
            last = read()
            last_error = None
            if predicate(last):
                return last
        except AssertionError as err:
            # read 内部的断言失败视为“尚未满足”
            last_error = err
        now = clock()
        if now >= stop:
            break
        sleep(min(interval, max(stop - now, 0)))

    last_value = None if last is _UNSET else last
    elapsed = round(clock() - start, 3)
    logger.warning("%s not satisfied after %ss (%d reads), last value: %r", description, elapsed, attempts, last_value)
    diagnostics = {"attempts": attempts, "elapsed": elapsed}
    if last_error is not None:
        diagnostics["last_error"] = str(last_error)
    if clamped:
        diagnostics["scenario_deadline"] = True
        message = f"{description} not satisfied before the scenario deadline ({elapsed}s)"
    else:
        message = f"{description} not satisfied within {timeout}s"
    raise AssertionTimeout(message, last_value=last_value, diagnostics=diagnostics)


def assert_eventually_equal(read, expected, timeout: float | None = None, interval: float = POLL_INTERVAL,
                            description: str = "value", deadline: float | None = None):
    """轮询直到 read() == expected"""
    return poll_until(read, lambda value: value == expected, timeout=timeout, interval=interval,
                      description=f"{description} == {expected!r}", deadline=deadline)
