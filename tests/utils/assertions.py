"""Custom assertion helpers."""

from typing import Sequence

import pytest

from realty_office.utils.errors import ErrorKind, RealtyOfficeError


def assert_enumeration_order(records: Sequence) -> None:
    """Records come back in ascending created_at order."""
    stamps = [record.created_at for record in records]
    assert stamps == sorted(stamps)


def assert_ids(records: Sequence, expected_ids: Sequence[str]) -> None:
    assert [record.id for record in records] == list(expected_ids)


def assert_rejected(kind: ErrorKind, func, *args, **kwargs) -> RealtyOfficeError:
    """Call func and assert it fails with the given error kind."""
    with pytest.raises(RealtyOfficeError) as exc_info:
        func(*args, **kwargs)
    assert exc_info.value.kind == kind
    return exc_info.value
