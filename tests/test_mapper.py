"""Tests for Rocket.Chat -> Matrix room mapping."""

import logging

import pytest

from core.rooms.errors import UnsupportedRoomType
from core.rooms.mapper import map_room, unique_ids
from core.rooms.models import RoomPreset, RoomType, RoomVisibility, SourceRoom


class TestRoomTypes:
    """Dispatch on the Rocket.Chat room type."""

    def test_direct_room(self, direct_room):
        draft = map_room(direct_room)

        assert draft.is_direct is True
        assert draft.preset == RoomPreset.TRUSTED
        assert draft.creator_id == "alice"
        assert draft.visibility is None

    def test_direct_room_without_participants(self):
        draft = map_room(SourceRoom(id="d1", room_type=RoomType.DIRECT))

        assert draft.is_direct is True
        assert draft.creator_id == ""

    def test_chat_room(self, chat_room):
        draft = map_room(chat_room)

        assert draft.preset == RoomPreset.PUBLIC
        assert draft.visibility == RoomVisibility.PUBLIC
        assert draft.creator_id == "alice"
        assert draft.is_direct is None

    def test_private_room(self):
        draft = map_room(SourceRoom(id="p1", room_type=RoomType.PRIVATE, owner_id="bob", name="staff"))

        assert draft.preset == RoomPreset.PRIVATE
        assert draft.visibility is None
        assert draft.creator_id == "bob"

    def test_live_room_is_rejected(self):
        with pytest.raises(UnsupportedRoomType) as exc:
            map_room(SourceRoom(id="l1", room_type=RoomType.LIVE))

        assert exc.value.room_type == "l"
        assert exc.value.room_id == "l1"

    def test_unknown_room_type_is_rejected(self):
        room = SourceRoom.from_export({"_id": "x1", "t": "v"})

        with pytest.raises(UnsupportedRoomType) as exc:
            map_room(room)

        assert exc.value.room_type == "v"


class TestDraftFields:
    """Name, alias, topic and federation flag."""

    def test_name_and_topic_are_copied(self, chat_room):
        draft = map_room(chat_room)

        assert draft.name == "general"
        assert draft.room_alias_name == "general"
        assert draft.topic == "Discussions générales"

    def test_missing_name_and_description(self, direct_room):
        draft = map_room(direct_room)

        assert draft.name is None
        assert draft.room_alias_name is None
        assert draft.topic is None

    @pytest.mark.parametrize("room_type", [RoomType.DIRECT, RoomType.CHAT, RoomType.PRIVATE])
    def test_federation_always_disabled(self, room_type):
        draft = map_room(SourceRoom(id="r", room_type=room_type, owner_id="alice", uids=("alice",)))

        assert draft.federate is False
        assert draft.to_wire().to_json()["creation_content"] == {"m.federate": False}

    def test_mapping_is_deterministic(self, chat_room):
        assert map_room(chat_room) == map_room(chat_room)


class TestMissingCreator:
    """An undeterminable creator only warns."""

    def test_chat_room_without_owner_warns(self, caplog):
        room = SourceRoom(id="c2", room_type=RoomType.CHAT, name="orphan")

        with caplog.at_level(logging.WARNING):
            draft = map_room(room)

        assert draft.creator_id == ""
        assert "orphan" in caplog.text
        assert "de type c" in caplog.text

    def test_custom_logger_receives_warning(self, caplog):
        log = logging.getLogger("tests.sink")
        room = SourceRoom(id="p2", room_type=RoomType.PRIVATE, name="nobody")

        with caplog.at_level(logging.WARNING, logger="tests.sink"):
            map_room(room, log)

        assert any(r.name == "tests.sink" for r in caplog.records)


class TestWireShape:
    """The creator never reaches the wire body."""

    def test_wire_body_has_no_creator(self, chat_room):
        body = map_room(chat_room).to_wire().to_json()

        assert body == {
            "creation_content": {"m.federate": False},
            "name": "general",
            "room_alias_name": "general",
            "topic": "Discussions générales",
            "preset": "public_chat",
            "visibility": "public",
        }
        assert "alice" not in str(body)

    def test_direct_wire_body(self, direct_room):
        body = map_room(direct_room).to_wire().to_json()

        assert body["is_direct"] is True
        assert body["preset"] == "trusted_private_chat"
        assert "visibility" not in body


def test_unique_ids_keeps_first_occurrence():
    assert unique_ids(["b", "a", "b", "", "a"]) == ["b", "a", ""]


def test_direct_room_creator_is_first_raw_participant(caplog):
    room = SourceRoom(id="d3", room_type=RoomType.DIRECT, uids=("", "bob"))

    with caplog.at_level(logging.WARNING):
        draft = map_room(room)

    assert draft.creator_id == ""
    assert "Créateur introuvable" in caplog.text
