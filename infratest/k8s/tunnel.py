"""Helpers for port-forwarding tunnels to Kubernetes resources."""

from __future__ import annotations

import enum
import socket
from collections.abc import Iterable, Mapping
from typing import Any

from infratest.k8s.errors import ServiceNotAvailable, UnknownKubeResourceType


class KubeResourceType(enum.IntEnum):
    """Resource types that support port forwarding."""

    POD = 0
    SERVICE = 1

    def __str__(self) -> str:
        return {KubeResourceType.POD: "pod", KubeResourceType.SERVICE: "svc"}[self]


def make_labels(labels: Mapping[str, str]) -> str:
    """Return a label selector "k1=v1,k2=v2" for the given labels."""
    return ",".join(f"{key}={value}" for key, value in labels.items())


def get_available_port() -> int:
    """Return a TCP port on this host that is free right now."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.bind(("", 0))
        return listener.getsockname()[1]


def _is_running(pod: Mapping[str, Any]) -> bool:
    return (pod.get("status") or {}).get("phase") == "Running"


def select_attachable_pod(
    resource_type: Any,
    resource_name: str,
    pods: Iterable[Mapping[str, Any]],
) -> str:
    """Return the name of the pod a tunnel to the resource should attach to.

    For a pod that is the resource itself; for a service it is the first
    running pod among those selected by the service.
    """
    if resource_type == KubeResourceType.POD:
        return resource_name
    if resource_type == KubeResourceType.SERVICE:
        for pod in pods:
            if _is_running(pod):
                return (pod.get("metadata") or {}).get("name", "")
        raise ServiceNotAvailable({"metadata": {"name": resource_name}})
    raise UnknownKubeResourceType(resource_type)