"""
配置文件
各项均可通过同名环境变量覆盖
"""
import os


def _env_bool(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    # 限流配置（Flask-Limiter 读取 RATELIMIT_* ）
    RATELIMIT_ENABLED = _env_bool('RATELIMIT_ENABLED', True)
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', '2000 per day;500 per hour')  # 全局默认限制
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')  # 生产环境建议改为redis://
    RATELIMIT_STRATEGY = os.environ.get('RATELIMIT_STRATEGY', 'fixed-window')
    RATELIMIT_HEADERS_ENABLED = True

    # 正则接口单独的限流
    REGEX_RATE_LIMIT = os.environ.get('REGEX_RATE_LIMIT', '3000/minute')
    TEST_RATE_LIMIT = os.environ.get('TEST_RATE_LIMIT', '3/minute')

    # 正则表达式最大长度
    MAX_REGEX_LENGTH = int(os.environ.get('MAX_REGEX_LENGTH', 200))

    # 每个DFA的最大状态数，超过时中止构造（状态数可能随正则长度指数增长）
    MAX_DFA_STATES = int(os.environ.get('MAX_DFA_STATES', 5000))

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    DEBUG = False
    TESTING = False


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    TESTING = True
    RATELIMIT_ENABLED = False
    MAX_REGEX_LENGTH = 50
    MAX_DFA_STATES = 64


class ProductionConfig(Config):
    pass


config_by_name = {
    'dev': DevelopmentConfig,
    'test': TestingConfig,
    'prod': ProductionConfig,
}
