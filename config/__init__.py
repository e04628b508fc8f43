import os


def get_settings_module() -> str:
    # Read the environment from APP_ENV, 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def env_bool(name: str, default: bool) -> bool:
    return bool(int(os.getenv(name, "1" if default else "0")))


def env_list(name: str, default: tuple) -> tuple:
    raw = os.getenv(name)
    if not raw:
        return tuple(default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())
