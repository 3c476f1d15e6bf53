"""Tests for reading the Rocket.Chat room export."""

import json

import pytest

from core.export import load_rooms
from core.rooms.models import RoomType, SourceRoom


def write_lines(path, docs):
    path.write_text("\n".join(json.dumps(d) for d in docs) + "\n\n", encoding="utf-8")
    return path


class TestFromExport:

    def test_chat_room_document(self):
        room = SourceRoom.from_export({
            "_id": "GENERAL",
            "t": "c",
            "name": "general",
            "fname": "General",
            "description": "Bienvenue",
            "u": {"_id": "rocket.cat", "username": "rocket.cat"},
        })

        assert room.room_type is RoomType.CHAT
        assert room.owner_id == "rocket.cat"
        assert room.name == "general"
        assert room.description == "Bienvenue"
        assert room.uids == ()

    def test_direct_room_document(self):
        room = SourceRoom.from_export({"_id": "ab", "t": "d", "uids": ["a", "b"], "usernames": ["x", "y"]})

        assert room.is_direct
        assert room.uids == ("a", "b")
        assert room.owner_id is None
        assert room.name is None

    def test_unknown_type_is_kept_raw(self):
        room = SourceRoom.from_export({"_id": "v1", "t": "v"})

        assert room.room_type == "v"
        assert not isinstance(room.room_type, RoomType)


class TestLoadRooms:

    def test_reads_json_lines_and_skips_blank_lines(self, tmp_path):
        path = write_lines(tmp_path / "rocketchat_room.json", [
            {"_id": "GENERAL", "t": "c", "name": "general"},
            {"_id": "ab", "t": "d", "uids": ["a", "b"]},
        ])

        rooms = load_rooms(path)

        assert [r.id for r in rooms] == ["GENERAL", "ab"]

    def test_invalid_line_reports_position(self, tmp_path):
        path = tmp_path / "rocketchat_room.json"
        path.write_text('{"_id": "ok", "t": "c"}\n{not json}\n', encoding="utf-8")

        with pytest.raises(ValueError, match=":2:"):
            load_rooms(path)
