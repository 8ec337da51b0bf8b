"""
The Serializable base class for the wire objects a genesis block is assembled from
"""
import json
from abc import ABC, abstractmethod

__all__ = ["Serializable"]


class Serializable(ABC):
    """
    Transactions, their inputs and outputs, block headers and blocks.

    Subclasses supply to_bytes and to_dict. Equality and hashing follow the serialized bytes, so two objects of the
    same class are equal exactly when they serialize the same.
    """

    @abstractmethod
    def to_bytes(self) -> bytes:
        raise NotImplementedError(f"{self.__class__.__name__} must implement to_bytes()")

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    @property
    def length(self) -> int:
        return len(self.to_bytes())

    @abstractmethod
    def to_dict(self) -> dict:
        raise NotImplementedError(f"{self.__class__.__name__} must implement to_dict()")

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Serializable):
            return NotImplemented
        return type(self) is type(other) and self.to_bytes() == other.to_bytes()

    def __hash__(self):
        return hash((type(self).__name__, self.to_bytes()))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_hex()})"
