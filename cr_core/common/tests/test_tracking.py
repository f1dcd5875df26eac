# cr_core/common/tests/test_tracking.py
import re

from cr_core.common.tracking import generate_tracking_id, to_base36


def test_to_base36():
    assert to_base36(0) == "0"
    assert to_base36(35) == "Z"
    assert to_base36(36) == "10"


def test_tracking_id_shape():
    tid = generate_tracking_id("MED", now_ms=1_700_000_000_000)
    assert tid.startswith("MED" + to_base36(1_700_000_000_000))
    assert re.fullmatch(r"MED[0-9A-Z]{8}[0-9A-Z]{4}", tid)
    assert tid == tid.upper()


def test_tracking_ids_differ():
    ids = {generate_tracking_id("REF") for _ in range(50)}
    assert len(ids) > 1
