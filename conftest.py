import json
import shutil
import time
from contextlib import contextmanager
from pathlib import Path

import allure
import pytest
from playwright.sync_api import sync_playwright

from config.settings import BROWSER, HEADLESS, ARTIFACT_DIRS, SCENARIO_TIMEOUT
from data.personas import lookup, BASELINE_PERSONA_ID
from pages.login_page import LoginPage
from utils.diagnostics import capture_diagnostics
from utils.exceptions import HarnessError
from utils.logger import get_logger

logger = get_logger("conftest")


# ================== Session Fixtures ==================
@pytest.fixture(scope="session")
def playwright_instance():
    with sync_playwright() as p:
        yield p


@pytest.fixture(scope="session")
def browser(playwright_instance):
    """浏览器只启动一次"""
    browser = getattr(playwright_instance, BROWSER).launch(headless=HEADLESS)
    yield browser
    browser.close()


@pytest.fixture(scope="session", autouse=True)
def clean_artifacts():
    """测试session启动前，清空artifacts、videos、tracing"""
    for path in ARTIFACT_DIRS:
        p = Path(path)
        if p.exists():
            shutil.rmtree(p)  # 删除目录 p 及其包含的所有文件和子目录。
        p.mkdir()


# ================== Function Fixtures ==================
@pytest.fixture(scope="function")
def context(browser, request):
    """
    每个测试方法一个全新 context
    - 各用例之间会话隔离，不共享任何状态
    - 视频 + tracing 失败时保留
    """
    record_video_dir = Path("videos") / request.node.name
    record_tracing_dir = Path("tracing") / request.node.name
    record_video_dir.mkdir(parents=True, exist_ok=True)
    record_tracing_dir.mkdir(parents=True, exist_ok=True)

    context = browser.new_context(
        record_video_dir=str(record_video_dir),
        # video文件只有在context.close()后才会真正落盘
        record_video_size={"width": 1280, "height": 720})
    context.tracing.start(name=request.node.name, screenshots=True, snapshots=True, sources=True)

    yield context

    #  ======== teardown阶段 ========
    trace_path = record_tracing_dir / "trace.zip"
    try:
        context.tracing.stop(path=trace_path)  # trace.zip 在这里真正生成
    finally:
        context.close()  # 一定要先close：释放video文件句柄、video真正写入磁盘

    #  ======== 执行成功用例删除video、trace ========
    if not getattr(request.node, "_failed", False):
        shutil.rmtree(record_video_dir, ignore_errors=True)
        shutil.rmtree(record_tracing_dir, ignore_errors=True)
        return

    #  ======== 执行失败用例移动video、trace到artifacts目录 ========
    target_dir = artifact_dir(request.node)
    target_dir.mkdir(parents=True, exist_ok=True)
    for video_file in record_video_dir.glob("*.webm"):
        shutil.move(str(video_file), target_dir / video_file.name)
    if trace_path.exists():
        shutil.move(str(trace_path), target_dir / "trace.zip")

    # hook触发早于context teardown，video和trace只能在这里attach
    for video in target_dir.glob("*.webm"):
        allure.attach.file(video, name="📎 Video", attachment_type=allure.attachment_type.WEBM)
    trace = target_dir / "trace.zip"
    if trace.exists():
        allure.attach.file(trace, name="📎 Playwright-Trace.zip")


@pytest.fixture(scope="function")
def scenario_deadline():
    """单个用例的截止时间（time.monotonic 时间轴），所有轮询和等待都不越过它"""
    return time.monotonic() + SCENARIO_TIMEOUT


@pytest.fixture(scope="function")
def page(context, scenario_deadline):
    """每个测试方法一个新 page"""
    page = context.new_page()
    page._scenario_deadline = scenario_deadline  # page object 构造时读取
    console_errors = []  # 所有console.error都会被收集

    # page.on("console")是浏览器级别监听,不会因为跳转丢失
    page.on(
        "console",
        lambda msg: console_errors.append({
            "type": msg.type,
            "text": msg.text,
            "location": str(msg.location)
        }) if msg.type == "error" else None
    )
    page._console_errors = console_errors  # 挂到page上，方便hook里取
    yield page
    page.close()


@pytest.fixture(scope="function")
def new_session(browser, scenario_deadline):
    """为每个 persona 打开独立 context 的工厂，persona 之间不共享会话"""

    @contextmanager
    def _session():
        context = browser.new_context()
        try:
            page = context.new_page()
            page._scenario_deadline = scenario_deadline
            yield page
        finally:
            context.close()

    return _session


@pytest.fixture(scope="function")
def persona(request):
    """persona 来源：间接参数化 > @pytest.mark.persona("id") > standard"""
    if hasattr(request, "param"):
        return lookup(request.param)
    marker = request.node.get_closest_marker("persona")
    return lookup(marker.args[0] if marker else BASELINE_PERSONA_ID)


@pytest.fixture(scope="function")
def logged_in_page(page, persona):
    """以当前 persona 登录后停留在 inventory 页"""
    login_page = LoginPage(page)
    login_page.open_login()
    login_page.login(persona)
    return page


# ================== Pytest Hook：失败处理 ==================
def artifact_dir(item) -> Path:
    module_name = item.module.__name__.split(".")[-1]
    class_name = item.cls.__name__ if item.cls else "no_class"
    return Path("artifacts") / module_name / class_name / item.name


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    测试失败时自动保存：
    - 截图
    - URL
    - Console errors
    - harness 错误携带的诊断信息
    """
    outcome = yield
    rep = outcome.get_result()

    # 只处理 call 阶段失败
    if rep.when != "call" or not rep.failed:
        return

    page = item.funcargs.get("page")
    if not page:
        return

    # 标记失败（跨fixture通信，告诉 context：这是一次失败执行）
    item._failed = True

    base_dir = artifact_dir(item)
    base_dir.mkdir(parents=True, exist_ok=True)

    diagnostics = capture_diagnostics(page)
    error = call.excinfo.value if call.excinfo else None
    if isinstance(error, HarnessError):
        diagnostics.update(error.diagnostics)
        diagnostics["error_type"] = type(error).__name__

    # 截图失败不能掩盖用例本身的失败
    screenshot = base_dir / "failure.png"
    try:
        page.screenshot(path=screenshot, full_page=True)
    except Exception as err:
        logger.warning("failure screenshot not captured: %s", err)

    (base_dir / "url.txt").write_text(str(diagnostics.get("url")), encoding="utf-8")
    (base_dir / "console_errors.json").write_text(
        json.dumps(getattr(page, "_console_errors", []), indent=2, ensure_ascii=False), encoding="utf-8")
    (base_dir / "diagnostics.json").write_text(
        json.dumps(diagnostics, indent=2, ensure_ascii=False, default=str), encoding="utf-8")

    if screenshot.exists():
        allure.attach.file(screenshot, name="Failure-Screenshot", attachment_type=allure.attachment_type.PNG)
    allure.attach(json.dumps(diagnostics, indent=2, ensure_ascii=False, default=str),
                  name="Diagnostics", attachment_type=allure.attachment_type.JSON)
