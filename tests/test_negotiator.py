import io

import pytest
from rich.console import Console

from floorplan import ChannelClosedError, ConsoleChannel, ScriptedChannel, negotiate_renames
from tagsoup import ChildDescriptor


def _children(*ids):
    return [ChildDescriptor(id=i, display_name=None, source=f'<g id="{i}">', offset=0) for i in ids]


def test_only_non_empty_answers_enter_mapping():
    channel = ScriptedChannel(["", "Storage", ""])
    mapping = negotiate_renames(_children("opt1", "opt2", "opt3"), channel)
    assert mapping == {"opt2": "Storage"}
    assert channel.asked == 3


def test_answers_are_trimmed_and_whitespace_means_keep():
    mapping = negotiate_renames(_children("a", "b"), ScriptedChannel(["   ", "  Living room \t"]))
    assert mapping == {"b": "Living room"}


def test_rounds_show_position_and_current_id():
    channel = ScriptedChannel(["", "", ""])
    negotiate_renames(_children("opt1", "opt2", "opt3"), channel)
    assert any("[2/3]" in m and "opt2" in m for m in channel.transcript)


def test_closed_channel_aborts_negotiation():
    with pytest.raises(ChannelClosedError):
        negotiate_renames(_children("a", "b"), ScriptedChannel(["x"]))


def test_shared_channel_stays_open():
    channel = ScriptedChannel(["x"])
    negotiate_renames(_children("a"), channel)
    assert not channel.closed


def test_private_channel_is_opened_and_closed():
    created = []

    def factory():
        ch = ScriptedChannel(["x"])
        created.append(ch)
        return ch

    assert negotiate_renames(_children("a"), None, factory=factory) == {"a": "x"}
    assert len(created) == 1 and created[0].closed


def test_private_channel_is_closed_after_failure():
    created = []

    def factory():
        ch = ScriptedChannel([])
        created.append(ch)
        return ch

    with pytest.raises(ChannelClosedError):
        negotiate_renames(_children("a"), None, factory=factory)
    assert created[0].closed


def test_no_children_no_channel():
    def factory():
        raise AssertionError("channel should not be opened")

    assert negotiate_renames([], None, factory=factory) == {}


def test_console_channel_refuses_after_close():
    channel = ConsoleChannel(Console(file=io.StringIO()))
    channel.close()
    with pytest.raises(ChannelClosedError):
        channel.ask("? ")
