"""Building Packer templates: command-line arguments and artifact ID extraction."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_ARTIFACT_ID_PATTERN = re.compile(r".+artifact,\d+?,id,(?:.+?:|)(.+)")


@dataclass
class PackerOptions:
    """Options for a Packer build."""

    template: str = ""
    """The path to the Packer template."""
    vars: dict[str, str] = field(default_factory=dict)
    """Custom vars passed with -var when running the build command."""
    var_files: list[str] = field(default_factory=list)
    """Var file paths passed with -var-file."""
    only: str = ""
    """If set, only run the build of this name."""
    env: dict[str, str] = field(default_factory=dict)
    """Custom environment variables to set when running Packer."""
    retryable_errors: dict[str, str] = field(default_factory=dict)
    """Regexps of transient errors mapped to the message shown when one matches."""
    max_retries: int = 0
    """Maximum number of retries for errors matching retryable_errors."""
    time_between_retries: float = 0.0
    """Seconds to wait between retries."""


def format_packer_args(options: PackerOptions) -> list[str]:
    """Return the arguments for `packer build [OPTIONS] template`."""
    args = ["build", "-machine-readable"]
    for key, value in options.vars.items():
        args += ["-var", f"{key}={value}"]
    for path in options.var_files:
        args += ["-var-file", path]
    if options.only:
        args.append(f"-only={options.only}")
    args.append(options.template)
    return args


def extract_artifact_id(packer_log_output: str) -> str:
    """Return the artifact ID from Packer's machine-readable log output.

    The output holds a line such as
    ``1456332887,amazon-ebs,artifact,0,id,us-east-1:ami-b481b3de`` (AWS) or
    ``1533742764,googlecompute,artifact,0,id,some-image-name`` (GCP).
    """
    match = _ARTIFACT_ID_PATTERN.search(packer_log_output)
    if match is None:
        raise ValueError("Could not find Artifact ID pattern in Packer output")
    return match.group(1)