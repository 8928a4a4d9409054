"""
Semantic Similarity

Cheap node-to-node similarity from disciplinary tags and node type, used to
link incoming evidence and to find merge candidates.
"""

from ..models import Node

TYPE_BONUS = 0.2


def tag_overlap(a: Node, b: Node) -> float:
    """Jaccard index of the two nodes' disciplinary tags (0 when both have none)"""
    tags_a = a.disciplinary_tags
    tags_b = b.disciplinary_tags
    union = tags_a | tags_b
    if not union:
        return 0.0
    return len(tags_a & tags_b) / len(union)


def semantic_similarity(a: Node, b: Node, type_bonus: float = TYPE_BONUS) -> float:
    """Tag Jaccard plus a bonus for matching type, capped at 1"""
    bonus = type_bonus if a.type == b.type else 0.0
    return min(1.0, tag_overlap(a, b) + bonus)
