import logging
import os
from typing import Any, Dict, List

from ..errors import ProvisioningError
from ..models import Host, Platform, SizingTier, VCenterConfig
from ..utils import info, run, success
from .base import ProvisioningDriver

NIC_ADAPTER = "vmxnet3"
PRIMARY_NIC = "ethernet-0"


class VSphereDriver(ProvisioningDriver):
    PLATFORM = Platform.VSPHERE

    def __init__(self, config: VCenterConfig):
        self.config = config
        self.logger = logging.getLogger("infrakit.backend.vsphere")
        self.env = self._govc_environment()

    def _govc_environment(self) -> Dict[str, str]:
        """Environment for govc child processes; our own environment is left untouched"""
        env = os.environ.copy()
        env.update({
            "GOVC_URL": self.config.url,
            "GOVC_USERNAME": self.config.username,
            "GOVC_PASSWORD": self.config.password,
            "GOVC_DATASTORE": self.config.datastore,
            "GOVC_NETWORK": self.config.network,
            "GOVC_RESOURCE_POOL": self.config.resource_pool,
            "GOVC_DATACENTER": self.config.datacenter,
            "GOVC_INSECURE": "true" if self.config.insecure else "false",
        })
        return env

    def build_steps(self, package: SizingTier, host: Host) -> List[Dict[str, Any]]:
        """
        Build the ordered govc invocations for one server.
        Each later step addresses the virtual machine created by `clone`.
        """
        return [
            {
                "step": "clone",
                "desc": f"Cloning {host.name} from template {self.config.template}",
                "args": [
                    "vm.clone",
                    "-vm", self.config.template,
                    "-on=false",
                    f"-c={package.cpu_count}",
                    f"-m={package.memory_mb}",
                    f"-net={self.config.network}",
                    f"-net.adapter={NIC_ADAPTER}",
                    host.name,
                ],
                "error": f"failed to create virtual machine {host.name}",
            },
            {
                "step": "disk-create",
                "desc": f"Creating {package.app_disk_gb}GB application disk for {host.name}",
                "args": [
                    "vm.disk.create",
                    "-vm", host.name,
                    "-name", f"{host.name}/{host.name}_001",
                    "-size", f"{package.app_disk_gb}G",
                    "-thick=true",
                ],
                "error": f"failed to create disk for virtual machine {host.name}",
            },
            {
                "step": "nic-connect",
                "desc": f"Setting {NIC_ADAPTER} adapter to start connected on {host.name}",
                "args": ["device.connect", "-vm", host.name, PRIMARY_NIC],
                "error": (f"failed to set {NIC_ADAPTER} adapter to start connected "
                          f"on virtual machine {host.name}"),
            },
            {
                "step": "customize",
                "desc": f"Setting IP address of {host.name} to {host.ip_address}",
                "args": [
                    "vm.customize",
                    "-vm", host.name,
                    "-ip", host.ip_address,
                    "-netmask", host.netmask,
                    "-gateway", host.gateway,
                ],
                "error": f"failed to set ip address of {host.name}",
            },
            {
                "step": "power-on",
                "desc": f"Powering on {host.name}",
                "args": ["vm.power", "-on", host.name],
                "error": f"failed to power on {host.name}",
            },
        ]

    def _govc(self, host: Host, step: Dict[str, Any]) -> None:
        cmd = [self.config.govc] + step["args"]
        self.logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = run(cmd, env=self.env)
        except FileNotFoundError:
            raise ProvisioningError(
                host.name, step["step"],
                f"'{self.config.govc}' command not found. Install govc."
            ) from None
        if result.returncode != 0:
            self.logger.debug(f"{step['step']} exited with status {result.returncode}")
            raise ProvisioningError(
                host.name, step["step"], step["error"], returncode=result.returncode
            )

    def deploy(self, package: SizingTier, host: Host) -> None:
        for step in self.build_steps(package, host):
            info(step["desc"])
            self._govc(host, step)
        success(f"{host.name} deployed with {package.name} package")
