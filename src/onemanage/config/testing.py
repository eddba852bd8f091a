from .base import DB_CONFIG, MAIL_CONFIG, MONGO_CONFIG, Config

SECRET_KEY = "test-secret"
STORE_BACKEND = Config.STORE_BACKEND

MONGO_CONFIG = dict(MONGO_CONFIG, database="one-manage-test")
DB_CONFIG = dict(DB_CONFIG, database="one_manage_test")
MAIL_CONFIG = dict(MAIL_CONFIG)

BUSINESS_MAIL = "feedback@example.com"
PUBLIC_BASE_URL = "http://localhost:5000"
IDENTITY_HEADER = "X-Auth-Request-Email"
RELOCATE_ON_DEPARTMENT_CHANGE = True

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
