import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; anything unknown falls back to development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "onemanage.config.production"

    if env in {"test", "testing"}:
        return "onemanage.config.testing"

    return "onemanage.config.development"
