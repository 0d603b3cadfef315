"""
ahv.py: Nutanix AHV backend driven through the Prism v2.0 REST API
"""
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

from ..errors import ProtocolError, ResolutionError
from ..models import AHVClusterConfig, Host, Platform, SizingTier
from ..utils import info, success, warning
from .base import ProvisioningDriver

PRISM_ERRORS_URL = (
    "https://portal.nutanix.com/page/documents/details"
    "?targetId=Objects-v2_0:v20-error-responses-c.html"
)


def is_success(status_code: int) -> bool:
    """Prism answers 2xx for accepted tasks; everything else is a failure"""
    return 200 <= status_code <= 299


def parse_entities(payload: Any) -> List[Tuple[str, str]]:
    """
    parse_entities: turns a `GET vms` response into ordered (name, uuid) pairs.
    Entities lacking either field are skipped so names and uuids stay paired.
    """
    if not isinstance(payload, dict):
        raise ProtocolError("unexpected vms listing: response is not a JSON object")
    pairs = []
    for entity in payload.get("entities") or []:
        if not isinstance(entity, dict):
            continue
        name, uuid = entity.get("name"), entity.get("uuid")
        if name is None or uuid is None:
            continue
        pairs.append((str(name), str(uuid)))
    return pairs


def build_clone_payload(package: SizingTier, host: Host, network_uuid: str) -> Dict[str, Any]:
    """Clone spec: one clone named after the host, with a static-IP Vmxnet3 NIC"""
    return {
        "spec_list": [
            {
                "name": host.name,
                "memory_mb": package.memory_mb,
                "num_vcpus": package.cpu_count,
                "num_cores_per_vcpu": 1,
                "vm_nics": [
                    {
                        "adapter_type": "Vmxnet3",
                        "network_uuid": network_uuid,
                        "ip_address": host.ip_address,
                    }
                ],
                "request_ip": False,
            }
        ]
    }


def build_disk_payload(package: SizingTier, storage_container_uuid: str) -> Dict[str, Any]:
    """Application disk on SCSI index 1, sized in bytes"""
    return {
        "vm_disks": [
            {
                "disk_address": {
                    "device_bus": "SCSI",
                    "device_index": 1,
                    "is_cdrom": False,
                },
                "vm_disk_create": {
                    "size": package.app_disk_bytes,
                    "storage_container_uuid": storage_container_uuid,
                },
            }
        ]
    }


class AHVDriver(ProvisioningDriver):
    """
    AHVDriver: clones the template through Prism, waits, then attaches the
    application disk to the new virtual machine.
    """

    PLATFORM = Platform.AHV

    def __init__(
        self,
        config: AHVClusterConfig,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        :param config: Cluster settings
        :param transport: Alternative httpx transport (used by tests)
        :param sleep: Blocking wait used after the clone request
        """
        self.config = config
        self.api_root = config.api_root
        self.sleep = sleep
        self.logger = logging.getLogger("infrakit.backend.ahv")
        self.client = httpx.Client(
            base_url=self.api_root,
            auth=(config.username, config.password),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            verify=not config.insecure,
            timeout=config.timeout,
            transport=transport,
        )
        if config.insecure:
            warning(f"TLS certificate verification disabled for {self.api_root}")

    def close(self) -> None:
        self.client.close()

    # =========================================
    # HTTP
    # =========================================

    def _get(self, path: str) -> Any:
        url = self.api_root + path
        self.logger.info(f"Getting data from URL: {url}")
        try:
            response = self.client.get(path)
        except httpx.HTTPError as e:
            raise ProtocolError(f"failed to get response from {url}: {e}") from e

        if not is_success(response.status_code):
            raise ProtocolError(
                f"failed to get data from {url}",
                status_code=response.status_code,
                body=response.text,
            )
        try:
            return response.json()
        except ValueError as e:
            raise ProtocolError(
                f"invalid JSON from {url}: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    def _post(self, path: str, payload: Dict[str, Any]) -> httpx.Response:
        url = self.api_root + path
        self.logger.info(f"Posting data to URL: {url}")
        try:
            return self.client.post(path, json=payload)
        except httpx.HTTPError as e:
            raise ProtocolError(f"failed to post data to {url}: {e}") from e

    def _check(self, response: httpx.Response, failure: str) -> None:
        if not is_success(response.status_code):
            raise ProtocolError(
                failure,
                status_code=response.status_code,
                body=response.text,
            )

    # =========================================
    # WORKFLOW STEPS
    # =========================================

    def resolve_uuid(self, vm_name: str) -> str:
        """
        resolve_uuid: looks up the uuid of a virtual machine by name
        :raises ResolutionError: when no entity carries that name
        """
        uuids = dict(parse_entities(self._get("vms")))
        try:
            return uuids[vm_name]
        except KeyError:
            raise ResolutionError(vm_name) from None

    def clone_vm(self, package: SizingTier, host: Host, template_uuid: str) -> httpx.Response:
        payload = build_clone_payload(package, host, self.config.network_uuid)
        response = self._post(f"vms/{template_uuid}/clone", payload)
        self._check(
            response,
            f"failed to clone virtual machine {host.name} from template {self.config.template}",
        )
        return response

    def wait_for_clone(self, host: Host) -> None:
        # Prism returns a task uuid only; completion is not checked
        info(f"Waiting {self.config.clone_wait:.0f} seconds for {host.name} creation to complete...")
        self.sleep(self.config.clone_wait)

    def attach_disk(self, package: SizingTier, host: Host, vm_uuid: str) -> httpx.Response:
        payload = build_disk_payload(package, self.config.storage_container_uuid)
        response = self._post(f"vms/{vm_uuid}/disks/attach", payload)
        self._check(response, f"failed to attach application disk to {host.name}")
        return response

    def deploy(self, package: SizingTier, host: Host) -> None:
        template_uuid = self.resolve_uuid(self.config.template)
        self.logger.debug(f"Template {self.config.template} has uuid {template_uuid}")

        info(f"Cloning {host.name} from template {self.config.template}")
        response = self.clone_vm(package, host, template_uuid)
        success(f"HTTP Code {response.status_code}: Clone {host.name} created from {self.config.template}")

        self.wait_for_clone(host)

        info(f"Attaching app disk to {host.name}")
        vm_uuid = self.resolve_uuid(host.name)
        response = self.attach_disk(package, host, vm_uuid)
        success(f"HTTP Code {response.status_code}: application disk attach task created")
