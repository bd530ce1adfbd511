import os


def _int_env(name: str, default: int | None) -> int | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


DICE_MAX_COUNT = _int_env("DICE_MAX_COUNT", 1000)
DICE_SEED = _int_env("DICE_SEED", None)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def dev_mode_enabled() -> bool:
    return os.getenv("DEV_MODE", "").lower() == "true"
