from .base import DB_CONFIG, MAIL_CONFIG, MONGO_CONFIG, Config, env_flag

SECRET_KEY = Config.SECRET_KEY
STORE_BACKEND = Config.STORE_BACKEND

MONGO_CONFIG = dict(MONGO_CONFIG)
DB_CONFIG = dict(DB_CONFIG)
MAIL_CONFIG = dict(MAIL_CONFIG)

BUSINESS_MAIL = Config.BUSINESS_MAIL
PUBLIC_BASE_URL = Config.PUBLIC_BASE_URL
IDENTITY_HEADER = Config.IDENTITY_HEADER
RELOCATE_ON_DEPARTMENT_CHANGE = Config.RELOCATE_ON_DEPARTMENT_CHANGE

DEBUG = env_flag("DEBUG", "1")
LOG_LEVEL = "DEBUG" if DEBUG else Config.LOG_LEVEL

# Creates indexes (mongo) or applies database/schema.sql (mysql) on startup
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
