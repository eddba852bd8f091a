import os


def env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "onemanage-dev-secret"

    # "mongo" keeps one document per tenant, "mysql" uses the normalized schema
    STORE_BACKEND = os.environ.get("STORE_BACKEND", "mongo").lower()

    MONGODB_URI = os.environ.get("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DB = os.environ.get("MONGODB_DB", "one-manage")

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "one_manage")

    SMTP_HOST = os.environ.get("SMTP_HOST", "localhost")
    SMTP_PORT = int(os.environ.get("SMTP_PORT", "587"))
    SMTP_USER = os.environ.get("SMTP_USER", "")
    SMTP_PASS = os.environ.get("SMTP_PASS", "")
    MAIL_USE_TLS = env_flag("MAIL_USE_TLS", "1")

    BUSINESS_MAIL = os.environ.get("BUSINESS_SMTP", os.environ.get("BUSINESS_MAIL", ""))
    PUBLIC_BASE_URL = os.environ.get("PUBLIC_BASE_URL", os.environ.get("NEXT_PUBLIC_BASE_URL", "http://localhost:5000"))

    IDENTITY_HEADER = os.environ.get("IDENTITY_HEADER", "X-Auth-Request-Email")
    RELOCATE_ON_DEPARTMENT_CHANGE = env_flag("RELOCATE_ON_DEPARTMENT_CHANGE", "1")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


MONGO_CONFIG = {
    "uri": Config.MONGODB_URI,
    "database": Config.MONGODB_DB,
}

DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}

MAIL_CONFIG = {
    "host": Config.SMTP_HOST,
    "port": Config.SMTP_PORT,
    "user": Config.SMTP_USER,
    "password": Config.SMTP_PASS,
    "use_tls": Config.MAIL_USE_TLS,
}
