#!/usr/bin/env python3
"""
服务器启动脚本
支持开发模式和生产模式
"""

import argparse
import logging
import os
import subprocess
import sys

logger = logging.getLogger("start_server")


def start_dev(port):
    """启动开发服务器（Flask 内置）"""
    logger.info("启动开发服务器 (Flask)，端口 %s", port)
    os.environ['APP_ENV'] = 'dev'

    from server import app
    app.run(host='0.0.0.0', port=port, debug=True)


def start_prod():
    """启动生产服务器（Gunicorn + Gevent）"""
    logger.info("启动生产服务器 (Gunicorn + Gevent)")

    # 检查 gunicorn 是否安装
    try:
        import gunicorn
        import gevent
    except ImportError as e:
        logger.error("缺少依赖: %s，请先安装: pip install -e .", e)
        sys.exit(1)
    logger.info("Gunicorn %s, Gevent %s", gunicorn.__version__, gevent.__version__)

    # 使用配置文件启动
    cmd = [
        sys.executable, "-m", "gunicorn",
        "-c", "gunicorn.conf.py",
        "server:app"
    ]

    subprocess.run(cmd, check=False)


def start_prod_simple(port):
    """简化版生产服务器（纯 Gunicorn，无 gevent）"""
    logger.info("启动生产服务器 (Gunicorn Sync)，端口 %s", port)

    # 使用同步 worker
    cmd = [
        sys.executable, "-m", "gunicorn",
        "-w", os.environ.get("GUNICORN_WORKERS", "8"),
        "-b", f"0.0.0.0:{port}",
        "--timeout", "30",
        "--access-logfile", "-",
        "--error-logfile", "-",
        "--log-level", "info",
        "server:app"
    ]

    subprocess.run(cmd, check=False)


def main():
    logging.basicConfig(level=logging.INFO, format='[%(asctime)s] %(levelname)s %(message)s')

    parser = argparse.ArgumentParser(description='正则表达式转有限自动机 后端服务器')
    parser.add_argument(
        'mode',
        choices=['dev', 'prod', 'prod-simple'],
        default='dev',
        nargs='?',
        help='运行模式: dev=开发, prod=生产(推荐), prod-simple=生产(简化)'
    )
    parser.add_argument('--port', type=int, default=5000, help='端口（prod 模式使用 gunicorn.conf.py 中的配置）')

    args = parser.parse_args()

    if args.mode == 'dev':
        start_dev(args.port)
    elif args.mode == 'prod':
        start_prod()
    elif args.mode == 'prod-simple':
        start_prod_simple(args.port)


if __name__ == '__main__':
    main()
