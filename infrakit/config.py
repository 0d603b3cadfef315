"""
config.py: module for turning the merged deploy configuration into typed settings
"""
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config_manager import ConfigManager
from .errors import ConfigError
from .models import AHVClusterConfig, Host, VCenterConfig

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def _norm(key: str) -> str:
    # networkUUID, network_uuid and NETWORK_UUID all address the same field
    return str(key).lower().replace("_", "")


def _as_bool(section: str, key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigError(f"{section}.{key}: expected a boolean, got {value!r}")


def _as_float(section: str, key: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{section}.{key}: expected a number, got {value!r}") from None
    if number < 0:
        raise ConfigError(f"{section}.{key}: must not be negative")
    return number


class DeployConfig:
    """
    DeployConfig: class that encapsulate the merged configuration data and the
    typed views the deploy command needs (backend sections and server list)
    """
    def __init__(self, data: Dict[str, Any]):
        self.data = data

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "DeployConfig":
        """
        load: loads configuration from all sources, or from an explicit file
        """
        return cls(ConfigManager(custom_path=path).load_config())

    @property
    def log_level(self) -> str:
        return str(self.data.get("log_level") or "WARNING").upper()

    def has_section(self, name: str) -> bool:
        """A section set to null or an empty mapping counts as absent"""
        return bool(self.data.get(name))

    def section(self, name: str) -> Dict[str, Any]:
        """
        section: returns a backend section with normalized keys
        """
        raw = self.data.get(name)
        if not raw:
            raise ConfigError(f"Missing '{name}' section in configuration")
        if not isinstance(raw, dict):
            raise ConfigError(f"'{name}' section must be a mapping")
        normalized = {}
        for key, value in raw.items():
            normalized[_norm(key)] = value
        return normalized

    def _require(self, name: str, section: Dict[str, Any], key: str) -> str:
        value = section.get(_norm(key))
        if value is None or str(value).strip() == "":
            raise ConfigError(f"Missing required field '{name}.{key}' in configuration")
        return str(value)

    def vcenter(self) -> VCenterConfig:
        """
        vcenter: settings for the govc driven vSphere backend
        """
        sec = self.section("vcenter")
        fields = {
            attr: self._require("vcenter", sec, key)
            for attr, key in (
                ("url", "url"),
                ("username", "username"),
                ("password", "password"),
                ("template", "template"),
                ("datastore", "datastore"),
                ("network", "network"),
                ("resource_pool", "resourcepool"),
                ("datacenter", "datacenter"),
            )
        }
        if sec.get("insecure") is not None:
            fields["insecure"] = _as_bool("vcenter", "insecure", sec["insecure"])
        if sec.get("govc"):
            fields["govc"] = str(sec["govc"])
        return VCenterConfig(**fields)

    def ahv(self) -> AHVClusterConfig:
        """
        ahv: settings for the Prism REST driven AHV backend
        """
        sec = self.section("ahv")
        fields = {
            attr: self._require("ahv", sec, key)
            for attr, key in (
                ("url", "url"),
                ("username", "username"),
                ("password", "password"),
                ("template", "template"),
                ("network_uuid", "networkUUID"),
                ("storage_container_uuid", "storageContainerUUID"),
            )
        }
        if sec.get("volumegroup"):
            fields["volume_group"] = str(sec["volumegroup"])
        if sec.get("insecure") is not None:
            fields["insecure"] = _as_bool("ahv", "insecure", sec["insecure"])
        for attr, key in (("timeout", "timeout"), ("clone_wait", "clone_wait")):
            if sec.get(_norm(key)) is not None:
                fields[attr] = _as_float("ahv", key, sec[_norm(key)])
        return AHVClusterConfig(**fields)

    def servers(self) -> List[Host]:
        """
        servers: ordered list of hosts to deploy
        """
        raw = self.data.get("servers")
        if not raw:
            raise ConfigError("No servers defined in configuration")
        if not isinstance(raw, list):
            raise ConfigError("'servers' must be a list")

        hosts = []
        for index, entry in enumerate(raw):
            name = f"servers[{index}]"
            if not isinstance(entry, dict):
                raise ConfigError(f"{name} must be a mapping")
            sec = {_norm(k): v for k, v in entry.items()}
            try:
                hosts.append(Host(
                    name=self._require(name, sec, "name"),
                    ip_address=self._require(name, sec, "ipaddress"),
                    netmask=self._require(name, sec, "netmask"),
                    gateway=self._require(name, sec, "gateway"),
                ))
            except ValueError as e:
                raise ConfigError(f"{name}: {e}") from e
        return hosts
