"""
Command values produced by the review surface and consumed by
:meth:`ReviewController.dispatch`.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NavigateFile:
    direction: int


@dataclass(frozen=True)
class SelectFile:
    index: int


@dataclass(frozen=True)
class ApplyChange:
    change_id: str


@dataclass(frozen=True)
class UnapplyChange:
    change_id: str


@dataclass(frozen=True)
class RequestApplyAll:
    pass


@dataclass(frozen=True)
class RequestSkipAll:
    pass


@dataclass(frozen=True)
class RequestComplete:
    pass


@dataclass(frozen=True)
class ConfirmPending:
    pass


@dataclass(frozen=True)
class CancelPending:
    pass


@dataclass(frozen=True)
class CancelSession:
    pass


@dataclass(frozen=True)
class ShowSelection:
    pass


Command = (
    NavigateFile | SelectFile | ApplyChange | UnapplyChange | RequestApplyAll
    | RequestSkipAll | RequestComplete | ConfirmPending | CancelPending
    | CancelSession | ShowSelection
)
