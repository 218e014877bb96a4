"""
Flask 扩展实例，供 server 和各蓝图共用
"""
import logging

from flask import request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

logger = logging.getLogger(__name__)


# ================= 反爬核心配置 =================
def get_real_ip():
    """
    安全获取经过代理的真实客户端IP
    优先级：X-Forwarded-For -> X-Real-IP -> 默认remote_address
    """
    forwarded_for = [ip.strip() for ip in request.headers.get('X-Forwarded-For', '').split(',') if ip.strip()]
    if forwarded_for:
        # 取第一个非内网IP（根据实际网络结构调整过滤逻辑）
        for ip in forwarded_for:
            if not ip.startswith(('10.', '172.16.', '192.168.')):
                return ip
        return forwarded_for[0]
    ip = request.headers.get('X-Real-IP', get_remote_address())
    logger.debug("client ip: %s", ip)
    return ip


# 限流器，存储后端和默认限制从 app.config 读取
limiter = Limiter(key_func=get_real_ip)
