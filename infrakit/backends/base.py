from abc import ABC, abstractmethod

from ..models import Host, Platform, SizingTier


class ProvisioningDriver(ABC):
    """
    Abstract interface for deploying one server onto a hypervisor platform.
    Concrete implementations handle backend-specific details (govc, Prism REST).
    """

    PLATFORM: Platform = Platform.UNKNOWN

    @abstractmethod
    def deploy(self, package: SizingTier, host: Host) -> None:
        """
        Clone the template into `host`, size it from `package`, attach the
        application disk and bring it up on the host's static address.
        Raises a DeployError subclass on the first failing step; never exits.
        """
        pass

    def close(self) -> None:
        """Release connections held by the driver."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
