"""Built-in targets."""

from .conditional import ConditionalTarget, IfNotTarget, IfTarget
from .group import GroupTarget
from .item import AnyOfTarget, EachOfTarget, ItemMemberTarget, ItemTarget
from .member import MemberTarget, ObjectTarget

__all__ = [
    "MemberTarget",
    "ObjectTarget",
    "ItemTarget",
    "ItemMemberTarget",
    "EachOfTarget",
    "AnyOfTarget",
    "GroupTarget",
    "ConditionalTarget",
    "IfTarget",
    "IfNotTarget",
]
