import os
from dotenv import load_dotenv

from kv_store import MemoryKeyValueStore, MySQLKeyValueStore

load_dotenv()

class Config:
    SECRET_KEY = os.getenv('SECRET_KEY')
    MYSQL_HOST = os.getenv('MYSQL_HOST')
    MYSQL_USER = os.getenv('MYSQL_USER')
    MYSQL_PASSWORD = os.getenv('MYSQL_PASSWORD')
    MYSQL_DATABASE = os.getenv('MYSQL_DATABASE', 'cashhub_db')
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'mysql')

    GEMINI_API_KEY = os.getenv('GEMINI_API_KEY')
    GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-2.5-flash')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    @staticmethod
    def init_db(app):
        if app.config.get('STORAGE_BACKEND') == 'memory':
            app.kv_store = MemoryKeyValueStore()
            return

        # imported here so the memory backend runs without a MySQL driver configured
        from mysql.connector import pooling

        app.db_pool = pooling.MySQLConnectionPool(
            pool_name="cashhub_pool",
            pool_size=5,
            host=app.config['MYSQL_HOST'],
            user=app.config['MYSQL_USER'],
            password=app.config['MYSQL_PASSWORD'],
            database=app.config['MYSQL_DATABASE']
        )
        app.kv_store = MySQLKeyValueStore(app.db_pool)
