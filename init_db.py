import logging
import os
import re

import mysql.connector
from config import Config

logger = logging.getLogger(__name__)

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'schema.sql')
TABLE_RE = re.compile(r'CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?`?(\w+)`?', re.IGNORECASE)

def schema_statements(path=SCHEMA_PATH):
    """Statements of a schema file, one per execute call."""
    with open(path, 'r') as f:
        return [s.strip() for s in f.read().split(';') if s.strip()]

def apply_schema(conn, database, statements):
    """Create ``database`` if needed and run ``statements`` in it; returns the tables touched."""
    tables = []
    with conn.cursor() as cur:
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4")
        cur.execute(f"USE `{database}`")
        for statement in statements:
            cur.execute(statement)
            match = TABLE_RE.match(statement)
            if match:
                tables.append(match.group(1))
    conn.commit()
    return tables

def init_db(config=Config):
    conn = mysql.connector.connect(
        host=config.MYSQL_HOST,
        user=config.MYSQL_USER,
        password=config.MYSQL_PASSWORD
    )
    try:
        tables = apply_schema(conn, config.MYSQL_DATABASE, schema_statements())
    finally:
        conn.close()
    logger.info("Schema applied to %s: %s", config.MYSQL_DATABASE, ", ".join(tables))
    return tables

if __name__ == "__main__":
    logging.basicConfig(level=Config.LOG_LEVEL)
    for table in init_db():
        print(f"ready: {Config.MYSQL_DATABASE}.{table}")
