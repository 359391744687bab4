from ircserv.message import IRCMessage


class _Peer:
    pass


def test_new_message_has_empty_parts():
    msg = IRCMessage(None, "PING")
    assert msg.raw == "PING"
    assert msg.prefix == ""
    assert msg.command == ""
    assert msg.params == []
    assert msg.responses == {}


def test_param_on_empty_params_is_empty_string():
    msg = IRCMessage(None, "")
    assert msg.param(0) == ""
    assert msg.param(5) == ""


def test_param_in_range():
    msg = IRCMessage(None, "x")
    msg.add_param("first")
    msg.add_param("second")
    assert msg.param(0) == "first"
    assert msg.param(1) == "second"


def test_param_out_of_range_falls_back_to_first():
    msg = IRCMessage(None, "x")
    msg.add_param("first")
    msg.add_param("second")
    assert msg.param(2) == "first"
    assert msg.param(-1) == "first"


def test_add_param_keeps_order():
    msg = IRCMessage(None, "x")
    for value in ("a", "b", "c"):
        msg.add_param(value)
    assert msg.params == ["a", "b", "c"]


def test_is_from_uses_identity():
    sender = _Peer()
    other = _Peer()
    msg = IRCMessage(sender, "x")
    assert msg.is_from(sender) is True
    assert msg.is_from(other) is False


def test_add_response_replaces_earlier_text():
    peer = _Peer()
    msg = IRCMessage(None, "x")
    msg.add_response(peer, "one\r\n")
    msg.add_response(peer, "two\r\n")
    assert msg.responses == {peer: "two\r\n"}


def test_responses_are_per_client():
    a, b = _Peer(), _Peer()
    msg = IRCMessage(a, "x")
    msg.add_response(a, "to a")
    msg.add_response(b, "to b")
    assert msg.responses[a] == "to a"
    assert msg.responses[b] == "to b"
    assert len(msg.responses) == 2