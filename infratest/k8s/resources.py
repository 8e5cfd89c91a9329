"""Readiness checks and endpoint lookup for Kubernetes nodes, pods, ingresses and services.

Resources are plain mappings in the shape the Kubernetes API returns them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, NamedTuple
from urllib.parse import urlparse

from infratest.k8s.errors import (
    KubernetesError,
    MalformedNodeID,
    NodeHasNoHostname,
    NoNodesInKubernetes,
    ServiceNotAvailable,
    UnknownServicePort,
    UnknownServiceType,
)
from infratest.randomness import random_between

Resource = Mapping[str, Any]

NODE_READY = "Ready"
CONDITION_TRUE = "True"
POD_RUNNING = "Running"
NODE_HOSTNAME = "Hostname"
SERVICE_TYPE_CLUSTER_IP = "ClusterIP"
SERVICE_TYPE_NODE_PORT = "NodePort"
SERVICE_TYPE_LOAD_BALANCER = "LoadBalancer"


class AwsNodeId(NamedTuple):
    """The parts of an AWS provider ID: aws:///AVAILABILITY_ZONE/INSTANCE_ID."""

    availability_zone: str
    instance_id: str
    region: str


def _section(resource: Resource, key: str) -> Mapping[str, Any]:
    return resource.get(key) or {}


def _load_balancer_ingress(resource: Resource) -> list[Any]:
    load_balancer = _section(resource, "status").get("loadBalancer") or {}
    return list(load_balancer.get("ingress") or [])


def is_node_ready(node: Resource) -> bool:
    """Return True if the node's Ready condition is True."""
    for condition in _section(node, "status").get("conditions") or []:
        if condition.get("type") == NODE_READY:
            return condition.get("status") == CONDITION_TRUE
    return False


def ready_nodes(nodes: Iterable[Resource]) -> list[Resource]:
    """Return only the nodes that are ready."""
    return [node for node in nodes if is_node_ready(node)]


def are_all_nodes_ready(nodes: Sequence[Resource]) -> bool:
    """Return True if there are nodes and all are ready; raise KubernetesError saying why not."""
    if not nodes:
        raise KubernetesError("No nodes available")
    if not all(is_node_ready(node) for node in nodes):
        raise KubernetesError("Not all nodes ready")
    return True


def is_pod_available(pod: Resource) -> bool:
    """Return True if the pod is running."""
    return _section(pod, "status").get("phase") == POD_RUNNING


def is_ingress_available(ingress: Resource) -> bool:
    """Return True if the ingress has at least one endpoint provisioned."""
    return len(_load_balancer_ingress(ingress)) > 0


def is_service_available(service: Resource) -> bool:
    """Return True if the service can accept traffic.

    Only LoadBalancer services take time: they are ready once they have an
    ingress point. Every other type is available as soon as it exists.
    """
    if _section(service, "spec").get("type") == SERVICE_TYPE_LOAD_BALANCER:
        return len(_load_balancer_ingress(service)) > 0
    return True


def find_node_port(service: Resource, service_port: int) -> int:
    """Return the node port allocated for the given service port."""
    for port in _section(service, "spec").get("ports") or []:
        if port.get("port") == service_port:
            return port.get("nodePort", 0)
    raise UnknownServicePort(service, service_port)


def find_default_node_hostname(node: Resource) -> str:
    """Return the hostname recorded on the node object."""
    for address in _section(node, "status").get("addresses") or []:
        if address.get("type") == NODE_HOSTNAME:
            return address.get("address", "")
    raise NodeHasNoHostname(node)


def parse_aws_provider_id(node: Resource) -> AwsNodeId | None:
    """Split an AWS provider ID into zone, instance and region; None if not an AWS node."""
    provider_id = _section(node, "spec").get("providerID", "")
    parsed = urlparse(provider_id)
    if parsed.scheme != "aws":
        return None
    parts = parsed.path.split("/")
    if len(parts) != 3 or not parts[1]:
        raise MalformedNodeID(node)
    availability_zone, instance_id = parts[1], parts[2]
    # A zone name is the region code followed by one letter.
    return AwsNodeId(availability_zone, instance_id, availability_zone[:-1])


def pick_random_node(nodes: Sequence[Resource]) -> Resource:
    """Return a randomly chosen node."""
    if not nodes:
        raise NoNodesInKubernetes()
    return nodes[random_between(0, len(nodes) - 1)]


def _find_node_hostname(node: Resource) -> str:
    # Validates the AWS provider ID; the hostname comes from the node object.
    parse_aws_provider_id(node)
    return find_default_node_hostname(node)


def get_service_endpoint(
    service: Resource, service_port: int, nodes: Sequence[Resource]
) -> str:
    """Return "host:port" where the service can be reached.

    ClusterIP maps to the cluster IP and service port; NodePort to a random
    node's hostname and the allocated node port; LoadBalancer to the load
    balancer's hostname and the service port. Other types are not supported.
    """
    spec = _section(service, "spec")
    service_type = spec.get("type")
    if service_type == SERVICE_TYPE_CLUSTER_IP:
        return f"{spec.get('clusterIP', '')}:{service_port}"
    if service_type == SERVICE_TYPE_NODE_PORT:
        node_port = find_node_port(service, service_port)
        node = pick_random_node(nodes)
        return f"{_find_node_hostname(node)}:{node_port}"
    if service_type == SERVICE_TYPE_LOAD_BALANCER:
        ingress = _load_balancer_ingress(service)
        if not ingress:
            raise ServiceNotAvailable(service)
        return f"{ingress[0].get('hostname', '')}:{service_port}"
    raise UnknownServiceType(service)