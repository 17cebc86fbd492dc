from vidtube.composer.fields import (
    AddFields,
    Contains,
    Count,
    First,
    Project,
    ReplaceRoot,
    Sum,
)
from vidtube.composer.lookup import Lookup, Through, run_stages, to_document
from vidtube.composer.match import (
    Match,
    MatchBuilder,
    ParentRef,
    ensure_valid_id,
    is_valid_id,
    resolve_parent,
)
from vidtube.composer.pagination import Page, PageRequest, SortSpec
from vidtube.composer.pipeline import ViewPipeline

__all__ = [
    "AddFields",
    "Contains",
    "Count",
    "First",
    "Project",
    "ReplaceRoot",
    "Sum",
    "Lookup",
    "Through",
    "run_stages",
    "to_document",
    "Match",
    "MatchBuilder",
    "ParentRef",
    "ensure_valid_id",
    "is_valid_id",
    "resolve_parent",
    "Page",
    "PageRequest",
    "SortSpec",
    "ViewPipeline",
]
