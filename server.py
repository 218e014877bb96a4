import logging
import os

from flask_cors import CORS
from flask import Flask, jsonify

from automata.errors import AutomatonInternalError
from blueprints.fa import fa_bp
from config import config_by_name
from extensions import limiter


def create_app(config_name=None):
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name or os.environ.get('APP_ENV', 'prod')])

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='[%(asctime)s] %(levelname)s %(name)s: %(message)s'
    )
    app.logger.setLevel(app.config['LOG_LEVEL'])

    CORS(app)
    limiter.init_app(app)
    app.register_blueprint(fa_bp)

    # ================= 路由保护配置 =================
    @app.errorhandler(429)
    def ratelimit_handler(e):
        """自定义限流响应"""
        return jsonify({
            "code": 429,
            "msg": "请求过于频繁，请稍后再试"
        }), 429

    @app.errorhandler(AutomatonInternalError)
    def internal_error(e):
        app.logger.exception("automaton construction failed: %s", e)
        return jsonify({
            "code": 500,
            "msg": "服务异常"
        }), 500

    @app.errorhandler(500)
    def server_error(error):
        return jsonify({
            "code": 500,
            "msg": "服务异常"
        }), 500

    return app


app = create_app()


if __name__ == '__main__':
    app.logger.info("startup")
    app.run(host='0.0.0.0')
