from .base import ProvisioningDriver
from .vsphere import VSphereDriver
from .ahv import AHVDriver

__all__ = ['ProvisioningDriver', 'VSphereDriver', 'AHVDriver']
