"""
Graph Edge

A typed, weighted relation between two nodes. Edges are directed unless
`bidirectional` is set.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class EdgeType(str, Enum):
    CORRELATIVE = "correlative"
    SUPPORTIVE = "supportive"
    CONTRADICTORY = "contradictory"
    CAUSAL = "causal"
    TEMPORAL = "temporal"
    PREREQUISITE = "prerequisite"


@dataclass
class Edge:
    """Knowledge graph edge"""
    id: str
    source: str
    target: str
    type: EdgeType
    confidence: float
    bidirectional: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    def copy(self) -> "Edge":
        return Edge(
            id=self.id,
            source=self.source,
            target=self.target,
            type=self.type,
            confidence=self.confidence,
            bidirectional=self.bidirectional,
            metadata=copy.deepcopy(self.metadata),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type.value,
            "confidence": self.confidence,
            "bidirectional": self.bidirectional,
            "metadata": copy.deepcopy(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            id=data["id"],
            source=data["source"],
            target=data["target"],
            type=EdgeType(data.get("type", EdgeType.CORRELATIVE.value)),
            confidence=float(data.get("confidence", 0.0)),
            bidirectional=bool(data.get("bidirectional", False)),
            metadata=copy.deepcopy(data.get("metadata", {})),
        )
