[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "infratest"
version = "0.1.0"
description = "Helpers for infrastructure tests: kubeconfig editing, Kubernetes resource checks, Packer and OCI utilities, and per-test log files from go test output."
requires-python = ">=3.10"
keywords = ["testing", "infrastructure", "kubernetes", "kubeconfig", "packer", "oci", "logs"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Testing",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["infratest"]

[tool.pytest.ini_options]
addopts = "-ra"
