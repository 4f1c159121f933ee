from cbcorex.memdx.packet import Magic, Packet, PacketType, ProtocolError
from cbcorex.memdx.status import Status


def test_magic_wire_values():
    assert Magic(0x80) is Magic.REQ
    assert Magic(0x81) is Magic.RES
    assert Magic(0x80).is_request()
    assert not Magic(0x81).is_request()


def test_is_request():
    assert Magic.REQ.is_request()
    assert Magic.REQ_EXT.is_request()
    assert not Magic.RES.is_request()
    assert not Magic.RES_EXT.is_request()


def test_is_extended():
    assert Magic.REQ_EXT.is_extended()
    assert Magic.RES_EXT.is_extended()
    assert not Magic.REQ.is_extended()
    assert not Magic.RES.is_extended()


def test_every_magic_is_request_or_response_exactly():
    flags = [Magic(member).is_request() for member in Magic]
    assert flags.count(True) == len(flags) // 2
    assert flags.count(False) == len(flags) // 2


def test_packet_defaults():
    packet = Packet()
    assert packet.magic is Magic.REQ
    assert packet.status == Status.SUCCESS
    assert packet.key == b""
    assert packet.value == b""
    assert packet.framing_extras == b""


def test_packet_equality():
    assert Packet(key=b"a", cas=5) == Packet(key=b"a", cas=5)
    assert Packet(key=b"a") != Packet(key=b"b")


def test_packet_type_order():
    unknown = PacketType(PacketType.UNKNOWN.value)
    req = PacketType(PacketType.REQ.value)
    res = PacketType(PacketType.RES.value)
    assert unknown < req < res


def test_protocol_error_is_exception():
    error = ProtocolError("bad")
    assert isinstance(error, Exception)
    assert str(error) == "bad"