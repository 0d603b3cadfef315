from dataclasses import dataclass, field
from enum import Enum

# Prism v2.0 management endpoints, relative to the cluster base URL
PRISM_API_ROOT = "PrismGateway/services/rest/v2.0/"


class Platform(Enum):
    VSPHERE = "vsphere"    # driven through govc
    AHV = "ahv"            # driven through the Prism REST API
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SizingTier:
    """
    Immutable hardware package applied to every cloned virtual machine.
    """
    name: str
    cpu_count: int
    memory_mb: int
    app_disk_gb: int

    def __post_init__(self):
        if self.cpu_count < 1:
            raise ValueError("CPU count must be >= 1.")
        if self.memory_mb < 1 or self.app_disk_gb < 1:
            raise ValueError("Memory and application disk sizes must be positive.")

    @property
    def app_disk_bytes(self) -> int:
        # Prism expects decimal gigabytes
        return self.app_disk_gb * 10**9

    def describe(self) -> str:
        return (
            f"Deploy a server with {self.cpu_count} CPUs, "
            f"{self.memory_mb / 1024:.0f}GB Memory, "
            f"{self.app_disk_gb}GB application disk"
        )


@dataclass(frozen=True)
class Host:
    """
    One provisioning target, as listed under `servers` in the config file.
    """
    name: str
    ip_address: str
    netmask: str
    gateway: str

    def __post_init__(self):
        if not self.name or not self.ip_address:
            raise ValueError("Server name and IP address are required.")


@dataclass(frozen=True)
class VCenterConfig:
    """
    Connection and placement settings for the vSphere backend.
    """
    url: str
    username: str
    password: str = field(repr=False)
    template: str
    datastore: str
    network: str
    resource_pool: str
    datacenter: str
    insecure: bool = True
    govc: str = "govc"


@dataclass(frozen=True)
class AHVClusterConfig:
    """
    Connection and placement settings for the Nutanix AHV backend.
    The stored url is never rewritten; api_root is derived from it on access.
    """
    url: str
    username: str
    password: str = field(repr=False)
    template: str
    network_uuid: str
    storage_container_uuid: str
    volume_group: str = ""
    insecure: bool = False
    timeout: float = 30.0
    clone_wait: float = 30.0

    @property
    def api_root(self) -> str:
        return f"{self.url.rstrip('/')}/{PRISM_API_ROOT}"
