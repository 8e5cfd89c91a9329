import pytest

from infratest.k8s.errors import (
    KubernetesError,
    MalformedNodeID,
    NodeHasNoHostname,
    NoNodesInKubernetes,
    ServiceNotAvailable,
    UnknownServicePort,
    UnknownServiceType,
)
from infratest.k8s.resources import (
    are_all_nodes_ready,
    find_default_node_hostname,
    find_node_port,
    get_service_endpoint,
    is_ingress_available,
    is_node_ready,
    is_pod_available,
    is_service_available,
    parse_aws_provider_id,
    pick_random_node,
    ready_nodes,
)


def make_node(name, ready=True, hostname=None, provider_id=""):
    addresses = [{"type": "InternalIP", "address": "10.0.0.1"}]
    if hostname is not None:
        addresses.append({"type": "Hostname", "address": hostname})
    return {
        "metadata": {"name": name},
        "spec": {"providerID": provider_id},
        "status": {
            "conditions": [
                {"type": "MemoryPressure", "status": "False"},
                {"type": "Ready", "status": "True" if ready else "False"},
            ],
            "addresses": addresses,
        },
    }


def make_service(service_type, ports=(), ingress=None, cluster_ip="10.96.0.10"):
    service = {
        "metadata": {"name": "nginx-service"},
        "spec": {"type": service_type, "clusterIP": cluster_ip, "ports": list(ports)},
    }
    if ingress is not None:
        service["status"] = {"loadBalancer": {"ingress": ingress}}
    return service


def test_is_node_ready():
    assert is_node_ready(make_node("a", ready=True)) is True
    assert is_node_ready(make_node("b", ready=False)) is False


def test_node_without_ready_condition_is_not_ready():
    assert is_node_ready({"metadata": {"name": "x"}, "status": {"conditions": []}}) is False


def test_ready_nodes_filters():
    nodes = [make_node("a"), make_node("b", ready=False), make_node("c")]
    names = [node["metadata"]["name"] for node in ready_nodes(nodes)]
    assert names == ["a", "c"]


def test_are_all_nodes_ready():
    assert are_all_nodes_ready([make_node("a"), make_node("b")]) is True


def test_are_all_nodes_ready_errors():
    with pytest.raises(KubernetesError, match="No nodes available"):
        are_all_nodes_ready([])
    with pytest.raises(KubernetesError, match="Not all nodes ready"):
        are_all_nodes_ready([make_node("a"), make_node("b", ready=False)])


def test_is_pod_available():
    assert is_pod_available({"status": {"phase": "Running"}}) is True
    assert is_pod_available({"status": {"phase": "Pending"}}) is False
    assert is_pod_available({}) is False


def test_is_ingress_available():
    assert is_ingress_available({"status": {"loadBalancer": {"ingress": [{"ip": "1.2.3.4"}]}}})
    assert not is_ingress_available({"status": {"loadBalancer": {}}})
    assert not is_ingress_available({})


def test_is_service_available():
    assert is_service_available(make_service("NodePort")) is True
    assert is_service_available(make_service("ClusterIP")) is True
    assert is_service_available(make_service("LoadBalancer", ingress=[])) is False
    assert is_service_available(
        make_service("LoadBalancer", ingress=[{"hostname": "lb.example.com"}])
    ) is True


def test_find_node_port():
    service = make_service(
        "NodePort", ports=[{"port": 443, "nodePort": 30443}, {"port": 80, "nodePort": 30080}]
    )
    assert find_node_port(service, 80) == 30080


def test_find_node_port_unknown():
    service = make_service("NodePort", ports=[{"port": 80, "nodePort": 30080}])
    with pytest.raises(UnknownServicePort) as info:
        find_node_port(service, 81)
    assert info.value.port == 81


def test_find_default_node_hostname():
    assert find_default_node_hostname(make_node("a", hostname="minikube")) == "minikube"
    with pytest.raises(NodeHasNoHostname):
        find_default_node_hostname(make_node("a"))


def test_parse_aws_provider_id():
    node = make_node("a", provider_id="aws:///us-east-1a/i-abc")
    parsed = parse_aws_provider_id(node)
    assert parsed.instance_id == "i-abc"
    assert parsed.availability_zone == "us-east-1a"
    assert parsed.region == "us-east-1"


def test_parse_non_aws_provider_id():
    assert parse_aws_provider_id(make_node("a", provider_id="gce://proj/zone/vm")) is None
    assert parse_aws_provider_id(make_node("a")) is None


def test_parse_malformed_aws_provider_id():
    with pytest.raises(MalformedNodeID):
        parse_aws_provider_id(make_node("a", provider_id="aws:///i-abc"))


def test_pick_random_node():
    nodes = [make_node("a"), make_node("b"), make_node("c")]
    for _ in range(50):
        assert pick_random_node(nodes) in nodes
    with pytest.raises(NoNodesInKubernetes):
        pick_random_node([])


def test_cluster_ip_endpoint():
    service = make_service("ClusterIP", cluster_ip="10.96.0.10")
    assert get_service_endpoint(service, 80, []) == "10.96.0.10:80"


def test_node_port_endpoint():
    service = make_service("NodePort", ports=[{"port": 80, "nodePort": 30080}])
    nodes = [make_node("a", hostname="minikube")]
    assert get_service_endpoint(service, 80, nodes) == "minikube:30080"


def test_node_port_endpoint_errors():
    service = make_service("NodePort", ports=[{"port": 80, "nodePort": 30080}])
    with pytest.raises(NoNodesInKubernetes):
        get_service_endpoint(service, 80, [])
    with pytest.raises(UnknownServicePort):
        get_service_endpoint(service, 8080, [make_node("a", hostname="minikube")])


def test_load_balancer_endpoint():
    service = make_service("LoadBalancer", ingress=[{"hostname": "lb.example.com"}])
    assert get_service_endpoint(service, 443, []) == "lb.example.com:443"
    with pytest.raises(ServiceNotAvailable):
        get_service_endpoint(make_service("LoadBalancer", ingress=[]), 443, [])


def test_unknown_service_type():
    with pytest.raises(UnknownServiceType):
        get_service_endpoint(make_service("ExternalName"), 80, [])