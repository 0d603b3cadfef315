"""
infrakit Test Fixtures
======================

Shared fixtures for all test modules.
"""

import json
import os

import httpx
import pytest

from infrakit.models import AHVClusterConfig, Host, VCenterConfig
from infrakit.packages import SMALL


# ============================================
# ISOLATION
# ============================================

@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep real config files and INFRAKIT_* variables out of every test."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for key in list(os.environ):
        if key.startswith("INFRAKIT_"):
            monkeypatch.delenv(key)
    return work


# ============================================
# CONFIG
# ============================================

@pytest.fixture
def vcenter_section():
    return {
        "url": "vcenter.example.com",
        "username": "administrator@vsphere.local",
        "password": "vc-secret",
        "template": "rhel8-template",
        "datastore": "ds01",
        "network": "VM Network",
        "resourcepool": "/dc1/host/cluster1/Resources",
        "datacenter": "dc1",
    }


@pytest.fixture
def ahv_section():
    return {
        "url": "https://prism.example.com:9440",
        "username": "admin",
        "password": "secret",
        "template": "tmpl-base",
        "networkUUID": "net-uuid",
        "storageContainerUUID": "ctr-uuid",
        "volumeGroup": "vg-01",
        "insecure": True,
    }


@pytest.fixture
def servers_section():
    return [
        {"name": "splunk01", "ipaddress": "10.0.0.5",
         "netmask": "255.255.255.0", "gateway": "10.0.0.1"},
        {"name": "splunk02", "ipaddress": "10.0.0.6",
         "netmask": "255.255.255.0", "gateway": "10.0.0.1"},
    ]


@pytest.fixture
def host():
    return Host(name="splunk01", ip_address="10.0.0.5",
                netmask="255.255.255.0", gateway="10.0.0.1")


@pytest.fixture
def small():
    return SMALL


@pytest.fixture
def vcenter_config():
    return VCenterConfig(
        url="vcenter.example.com",
        username="administrator@vsphere.local",
        password="vc-secret",
        template="rhel8-template",
        datastore="ds01",
        network="VM Network",
        resource_pool="/dc1/host/cluster1/Resources",
        datacenter="dc1",
    )


@pytest.fixture
def ahv_config():
    return AHVClusterConfig(
        url="https://prism.example.com:9440",
        username="admin",
        password="secret",
        template="tmpl-base",
        network_uuid="net-uuid",
        storage_container_uuid="ctr-uuid",
    )


# ============================================
# MOCK PRISM
# ============================================

class FakePrism:
    """In-memory Prism v2.0 endpoint for httpx.MockTransport."""

    def __init__(self, vms=None, clone_status=202, attach_status=202, new_uuid="uuid-new"):
        self.vms = list(vms if vms is not None else [{"name": "tmpl-base", "uuid": "uuid-A"}])
        self.clone_status = clone_status
        self.attach_status = attach_status
        self.new_uuid = new_uuid
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path.endswith("/vms"):
            return httpx.Response(200, json={"metadata": {}, "entities": self.vms})

        if request.method == "POST" and path.endswith("/clone"):
            if self.clone_status < 300:
                spec = json.loads(request.content)["spec_list"][0]
                self.vms.append({"name": spec["name"], "uuid": self.new_uuid})
                return httpx.Response(self.clone_status, json={"task_uuid": "task-clone"})
            return httpx.Response(self.clone_status, text="clone rejected")

        if request.method == "POST" and path.endswith("/disks/attach"):
            if self.attach_status < 300:
                return httpx.Response(self.attach_status, json={"task_uuid": "task-disk"})
            return httpx.Response(self.attach_status, text="attach rejected")

        return httpx.Response(404, text="not found")

    def posts(self):
        return [r for r in self.requests if r.method == "POST"]


@pytest.fixture
def fake_prism():
    return FakePrism()
