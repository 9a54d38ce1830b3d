"""
Requirement catalog
Paper types as declarative requirement sets, looked up by name
"""
from exam_paper.specs.registry import (
    PAPER_REGISTRY,
    get_paper_template,
    list_paper_types,
    min_pool_size,
    register_paper,
)

__all__ = [
    "PAPER_REGISTRY",
    "get_paper_template",
    "list_paper_types",
    "min_pool_size",
    "register_paper",
]
