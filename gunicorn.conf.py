"""
Gunicorn 配置文件
"""

import os

# 服务器绑定
bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:5000")

# Worker 配置
# 自动机构造是 CPU 密集型，worker 数按 2 * CPU核心数 + 1 估算
# 注意：每个 worker 各自保存“当前结果”
workers = int(os.environ.get("GUNICORN_WORKERS", 8))

# 使用 gevent worker 支持异步处理
worker_class = "gevent"

# 每个 worker 的并发连接数（gevent 模式下）
worker_connections = 1000

# 超时时间
# 单个请求的构造量由 MAX_DFA_STATES 限制（默认 5000 个DFA状态，远低于 30 秒），
# 调大 MAX_DFA_STATES 时需同时调大此值，否则 worker 会被杀掉
timeout = int(os.environ.get("GUNICORN_TIMEOUT", 30))

# 保持连接时间
keepalive = 5

# 请求队列长度（超过会返回 503）
backlog = 2048

# 最大请求数（防止内存泄漏，超过自动重启 worker）
max_requests = 1000
max_requests_jitter = 50

# 优雅重启超时
graceful_timeout = 30

# 日志配置
accesslog = "-"  # 输出到 stdout
errorlog = "-"   # 输出到 stderr
loglevel = os.environ.get("LOG_LEVEL", "info").lower()

# 进程名称
proc_name = "regex_automata_backend"

# 是否以守护进程运行
daemon = False

# PID 文件
pidfile = "gunicorn.pid"

preload_app = False

raw_env = ["APP_ENV=prod"]


def post_fork(server, worker):
    """Worker 启动后执行"""
    server.log.info(f"Worker spawned (pid: {worker.pid})")


def on_starting(server):
    """服务器启动时执行"""
    server.log.info("Gunicorn starting...")


def on_exit(server):
    """服务器退出时执行"""
    server.log.info("Gunicorn exiting...")
