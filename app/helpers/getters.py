from app.core.config import settings


def isDebugMode() -> bool:
    return settings.MODE.lower() in ("debug", "development", "dev")


def isProductionMode() -> bool:
    return settings.MODE.lower() == "production"
