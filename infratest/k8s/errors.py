"""Errors raised while inspecting Kubernetes resources.

Resources are plain mappings as returned by the Kubernetes API.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _name(resource: Mapping[str, Any]) -> str:
    return (resource.get("metadata") or {}).get("name", "")


class KubernetesError(Exception):
    """Base class for Kubernetes-related errors."""


class IngressNotAvailable(KubernetesError):
    """The Ingress has no endpoint provisioned yet."""

    def __init__(self, ingress: Mapping[str, Any]) -> None:
        self.ingress = ingress
        super().__init__(f"Ingress {_name(ingress)} is not available")


class UnknownKubeResourceType(KubernetesError):
    """The resource type is not one of the known types."""

    def __init__(self, resource_type: Any) -> None:
        self.resource_type = resource_type
        super().__init__(f"ResourceType ID {int(resource_type)} is unknown")


class DesiredNumberOfPodsNotCreated(KubernetesError):
    """Fewer or more pods match the filter than desired."""

    def __init__(self, filter: Any, desired_count: int) -> None:
        self.filter = filter
        self.desired_count = desired_count
        super().__init__(
            f"Desired number of pods ({desired_count}) matching filter "
            f"{filter} not yet created"
        )


class ServiceAccountTokenNotAvailable(KubernetesError):
    """The ServiceAccount has no token provisioned yet."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"ServiceAccount {name} does not have a token yet.")


class PodNotAvailable(KubernetesError):
    """The pod is not running yet."""

    def __init__(self, pod: Mapping[str, Any]) -> None:
        self.pod = pod
        super().__init__(f"Pod {_name(pod)} is not available")


class ServiceNotAvailable(KubernetesError):
    """The service is not ready to accept traffic yet."""

    def __init__(self, service: Mapping[str, Any]) -> None:
        self.service = service
        super().__init__(f"Service {_name(service)} is not available")


class UnknownServiceType(KubernetesError):
    """The service type is not handled."""

    def __init__(self, service: Mapping[str, Any]) -> None:
        self.service = service
        super().__init__(f"Service {_name(service)} has an unknown service type")


class UnknownServicePort(KubernetesError):
    """The port is not exported by the service."""

    def __init__(self, service: Mapping[str, Any], port: int) -> None:
        self.service = service
        self.port = port
        super().__init__(f"Port {port} is not a part of the service {_name(service)}")


class NoNodesInKubernetes(KubernetesError):
    """The cluster has no registered nodes."""

    def __init__(self) -> None:
        super().__init__("There are no nodes in the Kubernetes cluster")


class NodeHasNoHostname(KubernetesError):
    """The node has no discernible hostname."""

    def __init__(self, node: Mapping[str, Any]) -> None:
        self.node = node
        super().__init__(f"Node {_name(node)} has no hostname")


class MalformedNodeID(KubernetesError):
    """The node's provider ID does not follow the expected scheme."""

    def __init__(self, node: Mapping[str, Any]) -> None:
        self.node = node
        provider_id = (node.get("spec") or {}).get("providerID", "")
        super().__init__(f"Node {_name(node)} has malformed ID {provider_id}")