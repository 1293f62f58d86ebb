import pytest

from adb_markers.logs.logcat import LogcatDecoder, parse_logcat


def test_records_in_stream_order(logcat_dump):
    events = parse_logcat(logcat_dump)
    assert [ev.tag for ev in events] == [
        "ActivityManager", "ActivityManager", "PowerManagerService", "CustomTag",
    ]
    assert [ev.section for ev in events] == ["main", "main", "system", "system"]


def test_record_fields(logcat_dump):
    first = parse_logcat(logcat_dump)[0]
    assert first.time == pytest.approx(1700000000.5)
    assert first.pid == "1234"
    assert first.tid == 1250
    assert first.level == "I"
    assert first.message == "Start proc 4321:com.example.app/u0a123"
    assert first.to_dict()["msg"] == first.message


def test_padded_pid_and_tid(logcat_dump):
    event = parse_logcat(logcat_dump)[2]
    assert (event.pid, event.tid, event.level) == ("987", 987, "D")


def test_malformed_records_are_skipped(logcat_dump, capsys):
    decoder = LogcatDecoder()
    events = decoder.decode(logcat_dump)
    assert len(events) == 4
    metadata = decoder.get_metadata()
    assert metadata["sections"] == 2
    assert metadata["skipped_records"] == 1
    assert metadata["parsed_records"] == 4
    assert "this is not a record" in capsys.readouterr().err


def test_only_first_message_line_is_kept():
    text = ("--------- beginning of crash\n"
            "[ 1700000000.000100  10:  11 F/libc ]\n"
            "Fatal signal 11\n"
            "backtrace follows\n")
    events = parse_logcat(text)
    assert len(events) == 1
    assert events[0].message == "Fatal signal 11"
    assert events[0].section == "crash"


def test_tag_with_spaces():
    text = ("--------- beginning of main\n"
            "[ 1700000000.000100  10:  11 I/My Tag   ]\n"
            "hello\n")
    assert parse_logcat(text)[0].tag == "My Tag"


def test_empty_section_yields_nothing():
    assert parse_logcat("--------- beginning of events\n") == []
    assert parse_logcat("") == []


def test_all_records_malformed_is_not_an_error(capsys):
    text = "--------- beginning of main\ngarbage\n\nmore garbage\n"
    assert parse_logcat(text) == []
    assert capsys.readouterr().err.count("[WARN]") == 2
