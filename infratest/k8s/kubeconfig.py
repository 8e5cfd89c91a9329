"""Reading, editing and writing kubectl config files."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from infratest.k8s.errors import KubernetesError

_log = logging.getLogger(__name__)


@dataclass
class Context:
    """A kubectl context binding a cluster to a user (auth info)."""

    cluster: str = ""
    auth_info: str = ""
    namespace: str = ""

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> Context:
        return cls(
            cluster=data.get("cluster") or "",
            auth_info=data.get("user") or "",
            namespace=data.get("namespace") or "",
        )

    def _to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"cluster": self.cluster, "user": self.auth_info}
        if self.namespace:
            result["namespace"] = self.namespace
        return result


def _named_entries(entries: Iterable[Mapping[str, Any]] | None, key: str) -> dict[str, Any]:
    return {
        entry.get("name", ""): entry.get(key) or {}
        for entry in entries or []
    }


@dataclass
class KubeConfig:
    """The clusters, contexts and users held in a kubectl config file."""

    clusters: dict[str, dict[str, Any]] = field(default_factory=dict)
    contexts: dict[str, Context] = field(default_factory=dict)
    auth_infos: dict[str, dict[str, Any]] = field(default_factory=dict)
    current_context: str = ""
    preferences: dict[str, Any] = field(default_factory=dict)
    api_version: str = "v1"
    kind: str = "Config"

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> KubeConfig:
        contexts = {
            name: Context._from_dict(value)
            for name, value in _named_entries(data.get("contexts"), "context").items()
        }
        return cls(
            clusters=_named_entries(data.get("clusters"), "cluster"),
            contexts=contexts,
            auth_infos=_named_entries(data.get("users"), "user"),
            current_context=data.get("current-context") or "",
            preferences=dict(data.get("preferences") or {}),
            api_version=data.get("apiVersion") or "v1",
            kind=data.get("kind") or "Config",
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the config in the layout of a kubectl config file, entries sorted by name."""
        return {
            "apiVersion": self.api_version,
            "clusters": [
                {"cluster": cluster, "name": name}
                for name, cluster in sorted(self.clusters.items())
            ],
            "contexts": [
                {"context": context._to_dict(), "name": name}
                for name, context in sorted(self.contexts.items())
            ],
            "current-context": self.current_context,
            "kind": self.kind,
            "preferences": dict(self.preferences),
            "users": [
                {"name": name, "user": user}
                for name, user in sorted(self.auth_infos.items())
            ],
        }


def load_config(path: str | os.PathLike[str]) -> KubeConfig:
    """Load the kubectl config file at path."""
    with open(path, encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, Mapping):
        raise ValueError(f"kubectl config at {path} is not a mapping")
    return KubeConfig._from_dict(data)


def save_config(config: KubeConfig, path: str | os.PathLike[str]) -> None:
    """Write config to path, replacing the file."""
    text = yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=True)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)


def remove_orphaned_cluster_and_auth_info_config(config: KubeConfig) -> None:
    """Drop clusters and users that no context refers to."""
    used_clusters = {context.cluster for context in config.contexts.values()}
    used_users = {context.auth_info for context in config.contexts.values()}
    config.clusters = {
        name: cluster for name, cluster in config.clusters.items() if name in used_clusters
    }
    config.auth_infos = {
        name: user for name, user in config.auth_infos.items() if name in used_users
    }


def upsert_config_context(
    config: KubeConfig, context_name: str, cluster_name: str, user_name: str
) -> None:
    """Add or replace a context binding cluster_name to user_name."""
    config.contexts[context_name] = Context(cluster=cluster_name, auth_info=user_name)


def _set_new_context(config: KubeConfig) -> None:
    if not config.contexts:
        raise KubernetesError("There are no available contexts remaining")
    config.current_context = sorted(config.contexts)[0]


def delete_config_context(context_name: str) -> None:
    """Remove a context from the default kubectl config, with any clusters and users it orphans."""
    delete_config_context_with_path(get_kube_config_path(), context_name)


def delete_config_context_with_path(
    kube_config_path: str | os.PathLike[str], context_name: str
) -> None:
    """Remove a context from the config at the given path, with any clusters and users it orphans."""
    _log.info(
        "Removing kubectl config context %s from config at path %s",
        context_name,
        kube_config_path,
    )
    config = load_config(kube_config_path)
    if context_name not in config.contexts:
        _log.warning(
            "WARNING: Could not find context %s from config at path %s",
            context_name,
            kube_config_path,
        )
        return
    del config.contexts[context_name]

    if context_name == config.current_context:
        _set_new_context(config)

    remove_orphaned_cluster_and_auth_info_config(config)
    save_config(config, kube_config_path)
    _log.info(
        "Removed context %s from config at path %s and any orphaned clusters and authinfos",
        context_name,
        kube_config_path,
    )


def get_kube_config_path() -> str:
    """Return $KUBECONFIG if set, otherwise ~/.kube/config."""
    from_env = os.environ.get("KUBECONFIG", "")
    if from_env:
        return from_env
    return kube_config_path_from_home_dir()


def kube_config_path_from_home_dir() -> str:
    """Return the kubectl config path in the home directory."""
    return str(Path.home() / ".kube" / "config")


def copy_home_kube_config_to_temp() -> str:
    """Copy the home directory's kubectl config to a new temporary file and return its path."""
    config_path = kube_config_path_from_home_dir()
    with tempfile.NamedTemporaryFile(delete=False) as handle:
        tmp_path = handle.name
    try:
        shutil.copyfile(config_path, tmp_path)
    except BaseException:
        os.remove(tmp_path)
        raise
    return tmp_path


def add_config_context_for_service_account(
    config_path: str | os.PathLike[str],
    context_name: str,
    service_account_name: str,
    token: str,
) -> None:
    """Add a context that uses the ServiceAccount token against the current context's cluster."""
    config = load_config(config_path)
    current = config.contexts.get(config.current_context)
    if current is None:
        raise KubernetesError(
            f"Current context {config.current_context!r} not found in config at {config_path}"
        )
    config.auth_infos[service_account_name] = {"token": token}
    upsert_config_context(config, context_name, current.cluster, service_account_name)
    save_config(config, config_path)