from .client import NodeClient
from .models import NodeBlock, NodeInfo, NodeTransaction

__all__ = ["NodeClient", "NodeBlock", "NodeInfo", "NodeTransaction"]
