from utils.logger import get_logger

logger = get_logger(__name__)


def _probe(name: str, fn):
    try:
        return fn()
    except Exception as err:  # 诊断信息采集失败不能掩盖原始错误
        logger.debug("diagnostic probe %s failed: %s", name, err)
        return None


def capture_diagnostics(page, **fields) -> dict:
    """尽力采集失败现场：当前URL、标题 + 调用方提供的字段

    任何一项采集失败都只记为 None，本函数永不抛异常
    """
    diagnostics = {
        "url": _probe("url", lambda: page.url),
        "title": _probe("title", lambda: page.title()),
    }
    diagnostics.update(fields)
    return diagnostics
