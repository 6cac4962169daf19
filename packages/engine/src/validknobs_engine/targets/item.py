"""Targets validating the items of a collection member."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from validknobs_common.exceptions import ArgumentNullError

from ..context import TargetContext
from ..results import ItemTargetResult, TargetResult
from .member import MemberTarget

ItemsSelector = Callable[[Iterable[Any], TargetContext], Iterable[Any]]


def is_collection(value: Any) -> bool:
    """Iterables other than text and bytes."""
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray))


class ItemTarget(MemberTarget):
    """Target whose rules are applied to each item of a collection member.

    Every item is validated as its own ``ItemMemberTarget`` sharing this
    target's name and rules; the per-item results are collected in an
    ``ItemTargetResult``. A member that is None or not a collection yields
    no result.

    Args:
        name: Target name reported in results
        member: Accessor returning the collection
        items_selector: Optional ``(items, context) -> items`` filter
    """

    def __init__(
        self,
        name: str,
        member: Callable[[Any], Any],
        items_selector: ItemsSelector | None = None,
    ):
        super().__init__(name, member)
        self.items_selector = items_selector

    def get_value(self, context: TargetContext) -> Any:
        ArgumentNullError.raise_if_none(context, "context")
        items = super().get_value(context)
        if not is_collection(items):
            return None
        if self.items_selector is not None:
            return self.items_selector(items, context)
        return items

    def validate(self, context: TargetContext) -> TargetResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        context.target = self

        result = self.create_result(context)
        if result is None:
            return None

        items = self.get_value(context)
        if items is None:
            return None

        validator_context = context.validator_context
        for index, item in enumerate(items):
            item_target = ItemMemberTarget(self, item, index)
            item_result = item_target.validate(TargetContext(None, validator_context))
            if item_result is None:
                continue
            if not validator_context.ignore_empty_results or not item_result.is_empty():
                result.item_target_results.append(item_result)

        return result

    def create_result(self, context: TargetContext) -> ItemTargetResult | None:
        ArgumentNullError.raise_if_none(context, "context")
        return ItemTargetResult(self.name)


class EachOfTarget(ItemTarget):
    """Collection target where every item takes part in comparisons."""

    pass


class AnyOfTarget(ItemTarget):
    """Collection target where a single item suffices in comparisons."""

    pass


class ItemMemberTarget(MemberTarget):
    """One item of a collection target, evaluated with the owner's rules."""

    def __init__(self, owner: ItemTarget, item: Any, index: int):
        super().__init__(owner.name, lambda _obj: item)
        self.owner = owner
        self.index = index
        self.rules = owner.rules
