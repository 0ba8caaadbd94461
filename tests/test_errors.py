import json

from storefront_ids.errors import (
    AllocationError,
    ExhaustedRetries,
    RangeExceeded,
    StoreUnavailable,
    TransientCollision,
)


def test_error_payloads():
    for err, code in [
        (ExhaustedRetries("user", 100), "exhausted_retries"),
        (RangeExceeded("user", 1000, 999), "range_exceeded"),
        (StoreUnavailable("scan"), "store_unavailable"),
        (TransientCollision("order", "ORD3"), "collision"),
    ]:
        assert isinstance(err, AllocationError)
        payload = json.loads(err.to_json())
        assert payload["success"] is False
        assert payload["error"] == code
        assert payload["message"] == str(err)


def test_range_exceeded_is_not_exhausted_retries():
    assert not isinstance(RangeExceeded("user", 1000, 999), ExhaustedRetries)
    assert "999" in str(RangeExceeded("user", 1000, 999))
