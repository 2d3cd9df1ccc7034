from siterate.config.logging import configure_logging
from siterate.config.settings import PricingSettings, get_settings

__all__ = ["PricingSettings", "configure_logging", "get_settings"]
