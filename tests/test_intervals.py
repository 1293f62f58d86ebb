from adb_markers.batterystats.checkin import parse_checkin
from adb_markers.batterystats.intervals import IntervalReconstructor, merge_interval_markers
from adb_markers.batterystats.resolver import resolve_events
from adb_markers.core.models import Phase

from conftest import RESET_MS


def _markers(text):
    history = parse_checkin(text)
    return resolve_events(history.events, history.string_table)


def test_wake_lock_start_with_value_pairs_with_bare_end():
    markers = merge_interval_markers(_markers(
        "9,h,0:RESET:TIME:5000\n9,h,100,+w=3\n9,h,50,-w\n"))
    assert len(markers) == 1
    m = markers[0]
    assert m.phase == Phase.INTERVAL
    assert (m.start_time, m.end_time) == (5100, 5150)
    assert m.data["raw"] == "+w=3 -w"
    assert m.name == "wake_lock"


def test_unmatched_end_stays_an_end_marker():
    reconstructor = IntervalReconstructor()
    markers = reconstructor.process(_markers("9,h,0:RESET:TIME:0\n9,h,10,-x\n"))
    assert len(markers) == 1
    assert markers[0].phase == Phase.END
    assert (markers[0].start_time, markers[0].end_time) == (None, 10)
    assert reconstructor.unmatched_ends == 1
    assert reconstructor.paired == 0


def test_unmatched_start_stays_a_start_marker():
    reconstructor = IntervalReconstructor()
    markers = reconstructor.process(_markers("9,h,0:RESET:TIME:0\n9,h,10,+x\n"))
    assert [m.phase for m in markers] == [Phase.START]
    assert reconstructor.unmatched_starts == 1


def test_second_start_replaces_pending_one():
    reconstructor = IntervalReconstructor()
    markers = reconstructor.process(_markers(
        "9,h,0:RESET:TIME:0\n9,h,1,+x\n9,h,1,+x\n9,h,1,-x\n"))
    assert [(m.phase, m.start_time, m.end_time) for m in markers] == [
        (Phase.START, 1, None),
        (Phase.INTERVAL, 2, 3),
    ]
    assert reconstructor.get_summary() == {
        "paired_intervals": 1,
        "overwritten_starts": 1,
        "unmatched_starts": 1,
        "unmatched_ends": 0,
    }


def test_interval_takes_the_end_position_and_keeps_end_data(checkin_dump):
    reconstructor = IntervalReconstructor()
    markers = reconstructor.process(_markers(checkin_dump))
    raws = [m.data["raw"] for m in markers]

    assert "+S" not in raws and "+r" not in raws and "+Ejb=1" not in raws
    assert raws.index("+w=0 -w") < raws.index("Wsp=compl") < raws.index("+r -r")

    job = next(m for m in markers if m.data["raw"] == "+Ejb=1 -Ejb=1")
    assert job.phase == Phase.INTERVAL
    assert (job.start_time - RESET_MS, job.end_time - RESET_MS) == (400, 1430)
    assert job.data["uid"] == 10123

    gps = next(m for m in markers if m.data["raw"] == "-g")
    assert gps.phase == Phase.END

    assert len(markers) == 17
    assert reconstructor.paired == 4
    assert reconstructor.unmatched_ends == 1


def test_start_markers_are_not_mutated():
    source = _markers("9,h,0:RESET:TIME:0\n9,h,1,+x\n9,h,1,-x\n")
    merge_interval_markers(source)
    assert [m.phase for m in source] == [Phase.START, Phase.END]
    assert source[1].data["raw"] == "-x"


def test_interval_start_never_after_end(checkin_dump):
    for m in merge_interval_markers(_markers(checkin_dump)):
        if m.phase == Phase.INTERVAL:
            assert m.start_time <= m.end_time
