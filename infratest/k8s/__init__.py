"""Kubeconfig editing, Kubernetes resource checks and kubectl argument helpers."""