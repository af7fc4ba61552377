import pytest

from regroup.types import Float32, Float64, Int8, Int64, UInt, UInt8, UInt16


def test_bounds():
    assert (Int8.min_value, Int8.max_value) == (-128, 127)
    assert (UInt8.min_value, UInt8.max_value) == (0, 255)
    assert UInt16.max_value == 65535
    assert Int64.max_value == 2**63 - 1
    assert UInt.max_value == 2**64 - 1


@pytest.mark.parametrize(("cls", "value"), [(Int8, 128), (Int8, -129), (UInt8, 256), (UInt, -1)])
def test_out_of_range(cls, value):
    with pytest.raises(OverflowError):
        cls(value)


def test_values_behave_like_builtins():
    assert Int8(12) == 12
    assert isinstance(UInt8(3), int)
    assert Int8() == 0
    assert repr(Int8(-3)) == "Int8(-3)"


def test_str_and_format_render_plain_numbers():
    assert str(Int8(-3)) == "-3"
    assert f"{UInt16(7)}" == "7"
    assert f"{UInt16(7):03d}" == "007"
    assert str(Float64(1.25)) == "1.25"


def test_float32_rounds_to_single_precision():
    value = Float32(0.1)
    assert value != 0.1
    assert abs(value - 0.1) < 1e-7
    assert Float32(0.5) == 0.5


def test_float32_overflow():
    with pytest.raises(OverflowError):
        Float32(1e300)


def test_float64_is_a_float():
    assert Float64(1.25) == 1.25
    assert repr(Float64(1.25)) == "Float64(1.25)"
