"""
selector.py: decides which backend a configuration targets
"""
import logging

from .config import DeployConfig
from .models import Platform

logger = logging.getLogger("infrakit.selector")


def select_platform(config: DeployConfig) -> Platform:
    """
    select_platform: returns the platform whose section is configured.
    Both or neither section present yields Platform.UNKNOWN; callers decide
    whether that is fatal.
    """
    has_vcenter = config.has_section("vcenter")
    has_ahv = config.has_section("ahv")
    logger.debug(f"vcenter section: {has_vcenter}, ahv section: {has_ahv}")

    if has_vcenter and not has_ahv:
        return Platform.VSPHERE
    if has_ahv and not has_vcenter:
        return Platform.AHV
    return Platform.UNKNOWN
