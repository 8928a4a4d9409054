"""
Graph Node

A typed knowledge-graph node carrying a multi-dimensional confidence vector.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set


class NodeType(str, Enum):
    ROOT = "root"
    DIMENSION = "dimension"
    HYPOTHESIS = "hypothesis"
    EVIDENCE = "evidence"
    BRIDGE = "bridge"
    GAP = "gap"
    SYNTHESIS = "synthesis"
    REFLECTION = "reflection"


@dataclass
class Position:
    """Canvas position"""
    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Position":
        return cls(x=float(data.get("x", 0.0)), y=float(data.get("y", 0.0)))


@dataclass
class Node:
    """Knowledge graph node"""
    id: str
    label: str
    type: NodeType
    confidence: List[float]  # belief vector, one entry per confidence dimension
    metadata: Dict[str, Any] = field(default_factory=dict)
    position: Optional[Position] = None

    @property
    def mean_confidence(self) -> float:
        if not self.confidence:
            return 0.0
        return sum(self.confidence) / len(self.confidence)

    @property
    def disciplinary_tags(self) -> Set[str]:
        return set(self.metadata.get("disciplinary_tags") or ())

    def copy(self) -> "Node":
        """Deep copy; the returned node shares no mutable state with self"""
        return Node(
            id=self.id,
            label=self.label,
            type=self.type,
            confidence=list(self.confidence),
            metadata=copy.deepcopy(self.metadata),
            position=Position(self.position.x, self.position.y) if self.position else None,
        )

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "label": self.label,
            "type": self.type.value,
            "confidence": list(self.confidence),
            "metadata": copy.deepcopy(self.metadata),
        }
        if self.position is not None:
            result["position"] = self.position.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        position = data.get("position")
        return cls(
            id=data["id"],
            label=data.get("label", data["id"]),
            type=NodeType(data.get("type", NodeType.EVIDENCE.value)),
            confidence=[float(c) for c in data.get("confidence", [])],
            metadata=copy.deepcopy(data.get("metadata", {})),
            position=Position.from_dict(position) if position else None,
        )
