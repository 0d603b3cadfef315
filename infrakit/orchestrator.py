"""
orchestrator.py: runs a deployment of every configured server with one package
"""
import logging
from typing import Any, Dict, List, Optional

from .action_executor import ActionExecutor
from .backends import AHVDriver, ProvisioningDriver, VSphereDriver
from .config import DeployConfig
from .errors import PlatformError
from .models import Host, Platform, SizingTier
from .selector import select_platform
from .utils import heading, info


class Deployer:
    """
    Deployer: deploys each configured server onto the configured platform.
    The run stops at the first server that fails; later servers are not attempted.
    """

    def __init__(self, config: DeployConfig, executor: Optional[ActionExecutor] = None):
        self.config = config
        self.executor = executor or ActionExecutor()
        self.logger = logging.getLogger("infrakit.orchestrator")

    def resolve_platform(self) -> Platform:
        platform = select_platform(self.config)
        if platform is Platform.UNKNOWN:
            raise PlatformError(
                "invalid platform in configuration file: "
                "exactly one of the 'vcenter' or 'ahv' sections must be set"
            )
        return platform

    def build_driver(self, platform: Platform) -> ProvisioningDriver:
        if platform is Platform.VSPHERE:
            return VSphereDriver(self.config.vcenter())
        if platform is Platform.AHV:
            return AHVDriver(self.config.ahv())
        raise PlatformError(f"no driver for platform '{platform.value}'")

    def build_actions(self, driver: ProvisioningDriver, package: SizingTier,
                      hosts: List[Host]) -> List[Dict[str, Any]]:
        return [
            {
                "desc": f"Deploy {host.name} ({host.ip_address}) with {package.name} package",
                "func": driver.deploy,
                "args": (package, host),
            }
            for host in hosts
        ]

    def run(self, package: SizingTier, dry_run: bool = False) -> int:
        """
        run: deploys every server with `package`
        :return: Number of servers deployed
        """
        platform = self.resolve_platform()
        hosts = self.config.servers()
        self.logger.info(f"Deploying {len(hosts)} server(s) on {platform.value}")

        heading(f"Deploying {package.name} package on {platform.value}")
        info(package.describe())

        driver = self.build_driver(platform)
        try:
            actions = self.build_actions(driver, package, hosts)
            return self.executor.execute_actions(actions, dry_run=dry_run)
        finally:
            driver.close()
