# infratest

Small building blocks for writing infrastructure tests in Python. Everything
here works on plain data (kubeconfig files, resource mappings in the shape the
Kubernetes API returns them, Packer log text, go test output lines); nothing
talks to a cluster or a cloud.

## Modules

- **`infratest.randomness`**: `random_between(min_value, max_value)` (inclusive,
  `ValueError` if the range is empty), `random_int` and `random_string` (pick an
  element, `ValueError` on an empty sequence), and `unique_id()`, a 6-character
  base-62 identifier for naming test resources.
- **`infratest.logger`**: `logf(test_name, fmt, *args)` and `log(test_name, *args)`
  write one line to stdout; `do_log(test_name, call_depth, writer, *args)` writes
  to any text writer. Each line starts with the test name, an RFC 3339 timestamp
  and the caller's `file:line` (from `caller_prefix`).
- **`infratest.k8s.errors`**: `KubernetesError` and its subclasses
  `IngressNotAvailable`, `UnknownKubeResourceType`, `DesiredNumberOfPodsNotCreated`,
  `ServiceAccountTokenNotAvailable`, `PodNotAvailable`, `ServiceNotAvailable`,
  `UnknownServiceType`, `UnknownServicePort`, `NoNodesInKubernetes`,
  `NodeHasNoHostname` and `MalformedNodeID`.
- **`infratest.k8s.options`**: the `KubectlOptions` dataclass (`context_name`,
  `config_path`, `namespace`, `env`) with `get_config_path()`, which falls back to
  `$KUBECONFIG` and then `~/.kube/config`; `kubectl_args(options, *args)`, which
  builds the `--context`, `--kubeconfig` and `--namespace` flags followed by
  `args`; and `store_config_to_temp_file(config_data, prefix)`.
- **`infratest.k8s.kubeconfig`**: `KubeConfig` and `Context` with `load_config`
  and `save_config` (entries are written sorted by name),
  `upsert_config_context`, `remove_orphaned_cluster_and_auth_info_config`,
  `delete_config_context` / `delete_config_context_with_path` (which also drop
  clusters and users left without a context, and pick the alphabetically first
  remaining context if the current one is removed),
  `add_config_context_for_service_account`, `get_kube_config_path`,
  `kube_config_path_from_home_dir` and `copy_home_kube_config_to_temp`.
- **`infratest.k8s.resources`**: `is_node_ready`, `ready_nodes`,
  `are_all_nodes_ready`, `is_pod_available`, `is_ingress_available`,
  `is_service_available`, `find_node_port`, `find_default_node_hostname`,
  `parse_aws_provider_id`, `pick_random_node`, and `get_service_endpoint`, which
  returns `host:port` for ClusterIP, NodePort and LoadBalancer services.
- **`infratest.k8s.tunnel`**: `KubeResourceType` (`POD`, `SERVICE`), `make_labels`
  (a `k=v,...` label selector), `get_available_port` and
  `select_attachable_pod`, which names the pod a tunnel to a pod or service
  should attach to.
- **`infratest.packer`**: `PackerOptions`, `format_packer_args` and
  `extract_artifact_id`, which reads the artifact ID from machine-readable build
  output and raises `ValueError` if there is none.
- **`infratest.oci`**: the `Image`, `AvailabilityDomain`, `Subnet` and `Vcn`
  records with `most_recent_image`, `availability_domain_names`,
  `map_subnets_by_availability_domain` and `vcn_ids`.
- **`infratest.logparser.lines`**: classifiers for go test output lines
  (`is_result_line`, `is_status_line`, `is_summary_line`, `is_panic_line`,
  `get_indent`, and test-name extraction from result and status lines).
- **`infratest.logparser.store`**: `LogWriter`, which keeps one open
  `<test name>.log` file per test under an output directory (creating
  subdirectories for nested test names), plus `ensure_directory_exists` and
  `create_log_file`. It can be used as a context manager to close its files.

## Examples

```python
from infratest.k8s.kubeconfig import delete_config_context_with_path
from infratest.packer import PackerOptions, format_packer_args, extract_artifact_id

delete_config_context_with_path("/tmp/kubeconfig", "extra_minikube")

options = PackerOptions(template="packer.json", vars={"foo": "bar"}, only="onlythis")
format_packer_args(options)
# ['build', '-machine-readable', '-var', 'foo=bar', '-only=onlythis', 'packer.json']

extract_artifact_id("1456332887,amazon-ebs,artifact,0,id,us-east-1:ami-b481b3de")
# 'ami-b481b3de'
```

## What it does not do

- It does not run `kubectl` or `packer`, and does not call the Kubernetes, AWS
  or OCI APIs. You fetch resources yourself and pass them in as mappings or
  records; `kubectl_args` and `format_packer_args` only build argument lists.
- It does not open port-forwarding tunnels; `infratest.k8s.tunnel` only helps
  choose the pod and a free local port.
- It has no driver that reads a whole go test run and routes every line to the
  right file, and it does not write JUnit XML reports. The line classifiers and
  `LogWriter` are the pieces such a driver would use.
- There is no command-line entry point.

## Running the tests

```
pip install -e .[test]
pytest
```