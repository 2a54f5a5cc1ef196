import os

# ========== 超时（毫秒） ==========
NAVIGATION_TIMEOUT = int(os.getenv("NAVIGATION_TIMEOUT", 30000))
LOGIN_TIMEOUT = int(os.getenv("LOGIN_TIMEOUT", 45000))  # performance_glitch_user 登录慢
TRANSITION_TIMEOUT = int(os.getenv("TRANSITION_TIMEOUT", 5000))
READY_TIMEOUT = int(os.getenv("READY_TIMEOUT", 10000))

# ========== 轮询 ==========
POLL_INTERVAL = float(os.getenv("POLL_INTERVAL", 0.25))  # 秒
SCENARIO_TIMEOUT = float(os.getenv("SCENARIO_TIMEOUT", 60))  # 单个用例总预算（秒）

# ========== 浏览器 ==========
BROWSER = os.getenv("BROWSER", "chromium")
HEADLESS = os.getenv("HEADLESS", "1") != "0" or bool(os.getenv("CI", False))

# ========== 日志 ==========
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ========== 失败证据目录 ==========
ARTIFACT_DIRS = ["artifacts", "videos", "tracing"]
