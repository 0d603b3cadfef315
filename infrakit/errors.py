"""
errors.py: exception hierarchy for deployment runs
"""
from typing import Optional


class DeployError(RuntimeError):
    """Base exception for every failure the deploy command reports."""
    pass


class ConfigError(DeployError):
    """Missing or malformed configuration section, field or file."""
    pass


class ValidationError(DeployError):
    """Zero or several sizing packages requested."""
    pass


class PlatformError(DeployError):
    """Neither or both backend sections are configured."""
    pass


class ProvisioningError(DeployError):
    """
    ProvisioningError: the external provisioning tool failed at a named pipeline step
    """
    def __init__(self, host: str, step: str, message: Optional[str] = None,
                 returncode: Optional[int] = None):
        self.host = host
        self.step = step
        self.returncode = returncode
        super().__init__(
            f"[{step}] {message or f'step failed for virtual machine {host}'}"
        )


class ProtocolError(DeployError):
    """
    ProtocolError: a REST call failed at transport level or returned a non-2xx status.
    status_code is None for transport failures.
    """
    def __init__(self, message: str, status_code: Optional[int] = None,
                 body: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class ResolutionError(DeployError):
    """A virtual machine name has no matching UUID on the cluster."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"no virtual machine named '{name}' found on cluster")
