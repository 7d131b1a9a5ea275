"""
discovery_sdk test configuration.

All tests run against in-memory configuration and an explicit environment
mapping. Nothing reads the real process environment unless a test asks.
"""
from __future__ import annotations

import json
import os

import pytest

# ── Quiet, deterministic logging for all tests ─────────────────────────────
# These must be set before any discovery_sdk modules are imported.

os.environ.setdefault("DISCOVERY_LOG_LEVEL", "WARNING")
os.environ.setdefault("DISCOVERY_LOG_FORMAT", "console")


REGISTRY_URI = "https://eureka-6a1b81f5-79e2-4d14-a86b-ddf584635a60.apps.testcloud.com"
REGISTRY_CLIENT_ID = "p-service-registry-06e28efd-24be-4ce3-9784-854ed8d2acbe"
REGISTRY_CLIENT_SECRET = "dCsdoiuklicS"
TOKEN_URI = "https://p-spring-cloud-services.uaa.system.testcloud.com/oauth/token"
APP_GUID = "ac923014-93a5-4aee-b934-a043b241868b"


def _client_section() -> dict:
    return {
        "eurekaServer": {
            "proxyHost": "proxyHost",
            "proxyPort": 100,
            "proxyUserName": "proxyUserName",
            "proxyPassword": "proxyPassword",
            "shouldGZipContent": True,
            "connectTimeoutSeconds": 100,
        },
        "allowRedirects": True,
        "shouldDisableDelta": True,
        "shouldFilterOnlyUpInstances": True,
        "shouldFetchRegistry": True,
        "registryRefreshSingleVipAddress": "registryRefreshSingleVipAddress",
        "shouldOnDemandUpdateStatusChange": True,
        "shouldRegisterWithEureka": True,
        "registryFetchIntervalSeconds": 100,
        "instanceInfoReplicationIntervalSeconds": 100,
        "serviceUrl": "http://localhost:8761/eureka/",
    }


def _instance_section() -> dict:
    return {
        "instanceId": "instanceId",
        "appGroup": "appGroup",
        "instanceEnabledOnInit": True,
        "hostname": "myhostname",
        "port": 100,
        "securePort": 100,
        "nonSecurePortEnabled": True,
        "securePortEnabled": True,
        "leaseExpirationDurationInSeconds": 100,
        "leaseRenewalIntervalInSeconds": 100,
        "secureVipAddress": "secureVipAddress",
        "vipAddress": "vipAddress",
        "asgName": "asgName",
        "metadataMap": {"foo": "bar", "bar": "foo"},
        "statusPageUrlPath": "statusPageUrlPath",
        "statusPageUrl": "statusPageUrl",
        "homePageUrlPath": "homePageUrlPath",
        "homePageUrl": "homePageUrl",
        "healthCheckUrlPath": "healthCheckUrlPath",
        "healthCheckUrl": "healthCheckUrl",
        "secureHealthCheckUrl": "secureHealthCheckUrl",
    }


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_settings():
    """Each test sees settings built from the current environment."""
    from discovery_sdk.tier0_core.config import _reset_settings

    _reset_settings()
    yield
    _reset_settings()


@pytest.fixture
def app_settings() -> dict:
    """A fully populated eureka client/instance configuration tree."""
    return {"eureka": {"client": _client_section(), "instance": _instance_section()}}


@pytest.fixture
def vcap_application() -> dict:
    return {
        "limits": {"fds": 16384, "mem": 512, "disk": 1024},
        "application_name": "foo",
        "application_uris": ["foo.apps.testcloud.com"],
        "name": "foo",
        "space_name": "test",
        "space_id": "98c627e7-f559-46a4-9032-88cab63f8249",
        "uris": ["foo.apps.testcloud.com"],
        "users": None,
        "version": "4a439db9-4a82-47a3-aeea-8240465cff8e",
        "application_version": "4a439db9-4a82-47a3-aeea-8240465cff8e",
        "application_id": APP_GUID,
        "instance_id": "instance_id",
    }


@pytest.fixture
def vcap_services() -> dict:
    return {
        "p-config-server": [
            {
                "credentials": {
                    "uri": "https://config-de211817-2e99-4c57-89e8-31fa7ca6a276.apps.testcloud.com",
                    "client_id": "p-config-server-8f49dd26-e6cd-47a6-b2a0-7655cea20333",
                    "client_secret": "vBDjqIf7XthT",
                    "access_token_uri": TOKEN_URI,
                },
                "label": "p-config-server",
                "plan": "standard",
                "name": "myConfigServer",
                "tags": ["configuration", "spring-cloud"],
            }
        ],
        "p-service-registry": [
            {
                "credentials": {
                    "uri": REGISTRY_URI,
                    "client_id": REGISTRY_CLIENT_ID,
                    "client_secret": REGISTRY_CLIENT_SECRET,
                    "access_token_uri": TOKEN_URI,
                },
                "label": "p-service-registry",
                "plan": "standard",
                "name": "myDiscoveryService",
                "tags": ["eureka", "discovery", "registry", "spring-cloud"],
            }
        ],
    }


@pytest.fixture
def platform_environ(vcap_application, vcap_services) -> dict[str, str]:
    """Environment as the managed platform would inject it."""
    return {
        "VCAP_APPLICATION": json.dumps(vcap_application),
        "VCAP_SERVICES": json.dumps(vcap_services),
        "CF_INSTANCE_INDEX": "1",
        "CF_INSTANCE_GUID": APP_GUID,
    }
