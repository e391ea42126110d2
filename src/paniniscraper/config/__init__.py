from .config import (
    HttpConfig,
    MonitoringConfig,
    ProxyAuth,
    ProxyConfig,
    ScraperSettings,
    SiteConfig,
    find_config_file,
    load_settings,
)

__all__ = [
    "HttpConfig",
    "MonitoringConfig",
    "ProxyAuth",
    "ProxyConfig",
    "ScraperSettings",
    "SiteConfig",
    "find_config_file",
    "load_settings",
]
