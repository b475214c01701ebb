"""
Record Contract

Defines the interface the validation engine expects from the objects it
validates, plus an in-memory implementation backed by plain dictionaries.

Design Philosophy:
- The engine never creates or stores records, it only reads attributes,
  follows relations and mutates the error collection.
- Errors are an ordered list of (attribute, message) pairs so that a
  snapshot can be restored without reordering.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

ErrorEntry = Tuple[str, str]


def generate_attribute_label(name: str) -> str:
    """
    Turn an attribute name into a human readable label.

    Examples:
        >>> generate_attribute_label("shipping_method")
        'Shipping Method'
        >>> generate_attribute_label("shippingMethod")
        'Shipping Method'
    """
    words = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", name)
    words = re.sub(r"[_\-.]+", " ", words)
    return " ".join(word.capitalize() for word in words.split())


class Record(ABC):
    """
    Interface consumed by validators.

    Implementations must keep errors in insertion order and return a copy
    from ``get_errors`` so callers can snapshot the collection.
    """

    @abstractmethod
    def get_attribute(self, name: str) -> Any:
        pass

    @abstractmethod
    def get_attribute_label(self, name: str) -> str:
        pass

    @abstractmethod
    def get_related(self, relation: str) -> Optional["Record"]:
        pass

    @abstractmethod
    def get_errors(self) -> List[ErrorEntry]:
        pass

    @abstractmethod
    def clear_errors(self) -> None:
        pass

    @abstractmethod
    def add_error(self, attribute: str, message: str) -> None:
        pass

    def add_errors(self, errors: Iterable[ErrorEntry]) -> None:
        """Append several (attribute, message) pairs, preserving their order."""
        for attribute, message in errors:
            self.add_error(attribute, message)

    def get_error(self, attribute: str) -> Optional[str]:
        """Return the first error message for ``attribute``, or None."""
        for name, message in self.get_errors():
            if name == attribute:
                return message
        return None

    def has_errors(self, attribute: Optional[str] = None) -> bool:
        if attribute is None:
            return bool(self.get_errors())
        return any(name == attribute for name, _ in self.get_errors())


class DictRecord(Record):
    """
    Record backed by dictionaries.

    Attributes:
        attributes: Attribute values by name
        relations: Related records by relation name (None for an empty relation)
        labels: Explicit attribute labels; missing ones are generated

    Usage:
        customer = DictRecord({"country": ""})
        order = DictRecord({"shipping_method": "air"}, relations={"customer": customer})
    """

    def __init__(
        self,
        attributes: Optional[Mapping[str, Any]] = None,
        relations: Optional[Mapping[str, Optional[Record]]] = None,
        labels: Optional[Mapping[str, str]] = None,
    ):
        self.attributes: Dict[str, Any] = dict(attributes or {})
        self.relations: Dict[str, Optional[Record]] = dict(relations or {})
        self.labels: Dict[str, str] = dict(labels or {})
        self._errors: List[ErrorEntry] = []

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "DictRecord":
        """
        Build a record graph from plain data.

        Expected shape::

            {
                "attributes": {"shipping_method": "air"},
                "labels": {"shipping_method": "Shipping"},
                "relations": {"customer": {"attributes": {"country": "NZ"}}, "agent": null}
            }
        """
        data = data or {}
        relations = {
            name: None if related is None else cls.from_dict(related)
            for name, related in (data.get("relations") or {}).items()
        }
        return cls(
            attributes=data.get("attributes") or {},
            relations=relations,
            labels=data.get("labels") or {},
        )

    def get_attribute(self, name: str) -> Any:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def get_attribute_label(self, name: str) -> str:
        return self.labels.get(name) or generate_attribute_label(name)

    def get_related(self, relation: str) -> Optional[Record]:
        return self.relations.get(relation)

    def get_errors(self) -> List[ErrorEntry]:
        return list(self._errors)

    def clear_errors(self) -> None:
        self._errors = []

    def add_error(self, attribute: str, message: str) -> None:
        self._errors.append((attribute, message))

    def errors_for(self, attribute: str) -> List[str]:
        """All messages recorded for ``attribute``, in order."""
        return [message for name, message in self._errors if name == attribute]

    def __repr__(self) -> str:
        return (
            f"DictRecord(attributes={self.attributes!r}, "
            f"relations={sorted(self.relations)!r}, errors={len(self._errors)})"
        )
