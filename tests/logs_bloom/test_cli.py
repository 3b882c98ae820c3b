import pytest

from logs_bloom import Bloom
from logs_bloom.__main__ import main

PADDED_ADDRESS = "0x000000000000000000000000cd2a3d9f938e13cd947ec05abc7fe734df8dd826"
ADDRESS = "cd2a3d9f938e13cd947ec05abc7fe734df8dd826"
TOPIC = b"topic".hex()


def test_add(capsys):
    assert main(["add", PADDED_ADDRESS]) == 0
    out = capsys.readouterr().out.strip()
    assert Bloom.from_hex(out) == Bloom.from_elements([bytes.fromhex(ADDRESS)])


def test_add_onto_existing(capsys):
    start = Bloom.from_elements([b"topic"]).hex()
    assert main(["add", ADDRESS, "--bloom", start]) == 0
    bloom = Bloom.from_hex(capsys.readouterr().out.strip())
    assert bloom.multi_check([ADDRESS, TOPIC])


@pytest.mark.parametrize(
    "topics,found,status",
    [
        ([ADDRESS], "true", 0),
        ([PADDED_ADDRESS, ADDRESS], "true", 0),
        ([ADDRESS, TOPIC], "false", 1),
    ],
)
def test_check(capsys, topics, found, status):
    bloom = Bloom.from_elements([bytes.fromhex(ADDRESS)]).hex()
    assert main(["check", bloom, *topics]) == status
    assert capsys.readouterr().out.strip() == found


def test_union(capsys):
    a = Bloom.from_elements([bytes.fromhex(ADDRESS)])
    b = Bloom.from_elements([b"topic"])
    assert main(["union", a.hex(), b.hex()]) == 0
    assert Bloom.from_hex(capsys.readouterr().out.strip()) == a | b


@pytest.mark.parametrize(
    "argv",
    [
        ["check", "00" * 255, ADDRESS],
        ["union", "zz"],
        ["add", "0xabc"],
    ],
)
def test_bad_input(capsys, argv):
    assert main(argv) == 2
    assert capsys.readouterr().err.startswith("error:")
