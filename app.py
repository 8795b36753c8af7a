import logging
from flask import Flask, g
from flask_wtf.csrf import CSRFProtect
from config import Config
from form_utils import format_brl
from gemini_service import GeminiService
from routes.auth import auth_bp
from routes.transactions import transactions_bp
from routes.split import split_bp
from routes.charts import charts_bp
from routes.gamification import gamification_bp
from routes.chat import chat_bp
from routes.settings import settings_bp

csrf = CSRFProtect()

SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'DENY',
    'X-XSS-Protection': '1; mode=block',
    'Referrer-Policy': 'strict-origin-when-cross-origin',
}

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    if not app.config.get("SECRET_KEY"):
        import secrets
        app.config["SECRET_KEY"] = secrets.token_hex(32)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    config_class.init_db(app)
    app.ai_service = GeminiService(
        api_key=app.config.get('GEMINI_API_KEY'),
        model=app.config.get('GEMINI_MODEL', 'gemini-2.5-flash')
    )

    csrf.init_app(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(transactions_bp)
    app.register_blueprint(split_bp)
    app.register_blueprint(charts_bp)
    app.register_blueprint(gamification_bp)
    app.register_blueprint(chat_bp)
    app.register_blueprint(settings_bp)

    app.jinja_env.filters['clamp'] = clamp_filter
    app.jinja_env.filters['brl'] = format_brl

    @app.context_processor
    def inject_user():
        return {'current_user': g.get('user')}

    @app.after_request
    def set_security_headers(response):
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    return app

def clamp_filter(value, min_val=0, max_val=100):
    try:
        return max(min(float(value), max_val), min_val)
    except (ValueError, TypeError):
        return 0

if __name__ == "__main__":
    create_app().run()
