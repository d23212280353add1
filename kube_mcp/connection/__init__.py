from .connector import ClusterConnector
from .kubectl import KubectlConnector
from .remote import RemoteKubectlConnector

__all__ = ["ClusterConnector", "KubectlConnector", "RemoteKubectlConnector"]
