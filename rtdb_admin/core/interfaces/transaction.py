from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional, Union


class TransactionNode(ABC):
    @abstractmethod
    def unmarshal(self, model: Optional[Any] = None) -> Any:
        """Decode the current value of the node, optionally into ``model``"""
        pass


# Receives the current node and returns the value to write.
UpdateFunction = Callable[[TransactionNode], Union[Any, Awaitable[Any]]]
