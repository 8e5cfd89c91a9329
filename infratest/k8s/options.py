"""Options shared by every kubectl call."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import quote


def _default_kube_config_path() -> str:
    from_env = os.environ.get("KUBECONFIG", "")
    if from_env:
        return from_env
    return str(Path.home() / ".kube" / "config")


@dataclass
class KubectlOptions:
    """Context, config file, namespace and environment for kubectl calls."""

    context_name: str = ""
    config_path: str = ""
    namespace: str = ""
    env: dict[str, str] = field(default_factory=dict)

    def get_config_path(self) -> str:
        """Return the config path, defaulting to $KUBECONFIG or ~/.kube/config."""
        return self.config_path or _default_kube_config_path()


def kubectl_args(options: KubectlOptions, *args: str) -> list[str]:
    """Return the kubectl arguments for the given options followed by args."""
    cmd_args: list[str] = []
    if options.context_name:
        cmd_args += ["--context", options.context_name]
    if options.config_path:
        cmd_args += ["--kubeconfig", options.config_path]
    if options.namespace:
        cmd_args += ["--namespace", options.namespace]
    cmd_args.extend(args)
    return cmd_args


def store_config_to_temp_file(config_data: str, prefix: str) -> str:
    """Write config_data to a new temporary file and return its path."""
    escaped = quote(prefix, safe="")
    with tempfile.NamedTemporaryFile(
        "w", prefix=escaped, delete=False, encoding="utf-8"
    ) as handle:
        handle.write(config_data)
        return handle.name