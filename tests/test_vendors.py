from airwatch.core.vendors import VENDOR_UNKNOWN, lookup_vendor


def test_known_prefix():
    assert lookup_vendor("F0:9F:C2:12:34:56") == "Ubiquiti"


def test_lowercase_input():
    assert lookup_vendor("50:c7:bf:00:00:01") == "TP-Link"


def test_unknown_prefix():
    assert lookup_vendor("11:22:33:44:55:66") == VENDOR_UNKNOWN


def test_locally_administered_address():
    assert lookup_vendor("02:9F:C2:12:34:56") == VENDOR_UNKNOWN


def test_garbage_input():
    assert lookup_vendor("") == VENDOR_UNKNOWN
    assert lookup_vendor("zz:zz:zz:00:00:00") == VENDOR_UNKNOWN
