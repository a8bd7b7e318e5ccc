from datetime import datetime, timedelta, timezone

import pytest

from campfire.models.models import MessageType, TranscriptEntry, parse_timestamp


def test_parse_service_timestamp():
    parsed = parse_timestamp("2009/11/20 16:41:39 +0100")

    assert parsed == datetime(2009, 11, 20, 16, 41, 39, tzinfo=timezone(timedelta(hours=1)))


def test_parse_iso_timestamp():
    assert parse_timestamp("2009-11-20T16:41:39Z") == datetime(2009, 11, 20, 16, 41, 39, tzinfo=timezone.utc)


def test_parse_rejects_garbage():
    with pytest.raises(ValueError):
        parse_timestamp("last tuesday")


def test_transcript_entry_renames_wire_fields():
    entry = TranscriptEntry.model_validate(
        {"id": 1, "user_id": 2, "body": "hi", "created_at": "2009/05/05 14:15:00 +0000", "starred": False}
    )

    assert entry.message == "hi"
    assert entry.user_id == 2
    assert entry.timestamp.year == 2009
    assert set(entry.model_dump()) == {"id", "user_id", "message", "timestamp"}


def test_message_type_values():
    assert [t.value for t in MessageType] == ["TextMessage", "PasteMessage", "SoundMessage", "TweetMessage"]
