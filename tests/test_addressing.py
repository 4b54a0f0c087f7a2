"""Tests for netplanctl/addressing.py"""

from ipaddress import IPv4Address

import pytest

from netplanctl.addressing import (
    FULL_MASK,
    broadcast_of,
    mask_of,
    netmask_of,
    network_of,
    parse_address,
    parse_cidr,
    parse_dns_list,
    parse_gateway,
    parse_prefix,
    validate_gateway_same_subnet,
)
from netplanctl.exceptions import (
    AddressError,
    DegenerateAddressError,
    FormatError,
    RangeError,
    SubnetMismatchError,
)


class TestParseAddress:
    """Tests for parse_address function."""

    @pytest.mark.parametrize(
        "text",
        ["0.0.0.0", "1.1.1.1", "10.120.80.10", "192.168.100.255", "255.255.255.255", "172.16.0.1"],
    )
    def test_round_trips_canonical_text(self, text):
        """Test valid dotted quads parse and render back to the same text."""
        assert str(parse_address(text)) == text

    def test_returns_ipv4address(self):
        """Test the parsed value is an IPv4Address with the right integer value."""
        addr = parse_address("192.168.1.2")
        assert isinstance(addr, IPv4Address)
        assert int(addr) == (192 << 24) | (168 << 16) | (1 << 8) | 2

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "1.2.3",
            "1.2.3.4.5",
            "256.1.1.1",
            "1.1.1.300",
            "a.b.c.d",
            "1.2.3.4 ",
            " 1.2.3.4",
            "1.2.3.4/24",
            "1..2.3",
            "-1.2.3.4",
            "1.2.3.1234",
            "01.2.3.4",
            "1.2.3.004",
        ],
    )
    def test_rejects_malformed_text(self, text):
        """Test malformed addresses raise FormatError."""
        with pytest.raises(FormatError):
            parse_address(text)

    def test_rejects_non_ascii_digits(self):
        """Test Unicode digits are not accepted as octets."""
        with pytest.raises(FormatError):
            parse_address("١.2.3.4")

    def test_format_error_is_address_error(self):
        """Test FormatError belongs to the address error family."""
        with pytest.raises(AddressError):
            parse_address("nope")


class TestParsePrefix:
    """Tests for parse_prefix function."""

    def test_bounds_accepted(self):
        """Test 1 and 32 are accepted."""
        assert parse_prefix("1") == 1
        assert parse_prefix("32") == 32

    @pytest.mark.parametrize("text", ["0", "33", "99", "", "-1", "1a", "100"])
    def test_out_of_range_or_malformed(self, text):
        """Test invalid prefixes raise FormatError."""
        with pytest.raises(FormatError):
            parse_prefix(text)


class TestMaskOf:
    """Tests for mask_of and derived helpers."""

    def test_prefix_32_is_all_ones(self):
        """Test /32 yields the all-ones mask."""
        assert mask_of(32) == FULL_MASK == 0xFFFFFFFF

    def test_prefix_0_is_zero(self):
        """Test /0 yields an empty mask."""
        assert mask_of(0) == 0

    @pytest.mark.parametrize(
        "prefix,expected",
        [(1, "128.0.0.0"), (8, "255.0.0.0"), (24, "255.255.255.0"), (27, "255.255.255.224"), (31, "255.255.255.254")],
    )
    def test_netmask_values(self, prefix, expected):
        """Test dotted netmasks for common prefixes."""
        assert str(netmask_of(prefix)) == expected

    @pytest.mark.parametrize("prefix", [-1, 33])
    def test_out_of_range_raises(self, prefix):
        """Test prefixes outside 0..32 raise RangeError."""
        with pytest.raises(RangeError):
            mask_of(prefix)

    def test_network_and_broadcast(self):
        """Test network and broadcast for a /27."""
        addr = IPv4Address("10.120.80.10")
        assert str(network_of(addr, 27)) == "10.120.80.0"
        assert str(broadcast_of(addr, 27)) == "10.120.80.31"

    def test_broadcast_stays_within_32_bits(self):
        """Test broadcast of a /1 high address does not overflow."""
        assert str(broadcast_of(IPv4Address("200.1.2.3"), 1)) == "255.255.255.255"


class TestParseCidr:
    """Tests for parse_cidr function."""

    def test_valid_cidr(self):
        """Test a valid host CIDR."""
        cidr = parse_cidr("192.168.100.10/24")
        assert cidr.address == IPv4Address("192.168.100.10")
        assert cidr.prefix == 24
        assert str(cidr) == "192.168.100.10/24"

    @pytest.mark.parametrize(
        "text",
        ["192.168.100.10", "192.168.100.10/", "192.168.100.10/0", "192.168.100.10/33", "1.2.3/24", "1.2.3.4/2/4"],
    )
    def test_format_errors(self, text):
        """Test missing separator, bad address or bad prefix raise FormatError."""
        with pytest.raises(FormatError):
            parse_cidr(text)

    def test_network_address_rejected(self):
        """Test the subnet's network address is rejected."""
        with pytest.raises(RangeError):
            parse_cidr("192.168.100.0/24")

    def test_broadcast_address_rejected(self):
        """Test the subnet's broadcast address is rejected."""
        with pytest.raises(RangeError):
            parse_cidr("192.168.100.255/24")

    @pytest.mark.parametrize("prefix", [29, 30])
    def test_rejects_exactly_network_and_broadcast(self, prefix):
        """Test exhaustively over a small block: reject iff network or broadcast."""
        for last in range(0, 64):
            addr = IPv4Address(f"10.0.0.{last}")
            degenerate = addr in (network_of(addr, prefix), broadcast_of(addr, prefix))
            if degenerate:
                with pytest.raises(RangeError):
                    parse_cidr(f"{addr}/{prefix}")
            else:
                assert parse_cidr(f"{addr}/{prefix}").address == addr

    def test_slash_30_usable_hosts(self):
        """Test a /30 has exactly two usable hosts."""
        accepted = []
        for last in range(4):
            try:
                parse_cidr(f"10.0.0.{last}/30")
                accepted.append(last)
            except RangeError:
                pass
        assert accepted == [1, 2]

    @pytest.mark.parametrize("last", [0, 1, 2, 3])
    def test_slash_31_always_rejected(self, last):
        """Test /31 addresses are always network or broadcast, hence rejected."""
        with pytest.raises(RangeError):
            parse_cidr(f"10.0.0.{last}/31")

    def test_slash_32_always_rejected(self):
        """Test a /32 host equals its own network address."""
        with pytest.raises(RangeError):
            parse_cidr("10.0.0.7/32")


class TestGatewayValidation:
    """Tests for validate_gateway_same_subnet and parse_gateway."""

    @pytest.fixture()
    def host(self):
        return parse_cidr("10.120.80.10/27")

    def test_valid_gateway(self, host):
        """Test a gateway inside the subnet is accepted."""
        validate_gateway_same_subnet(host, IPv4Address("10.120.80.1"))
        assert parse_gateway(host, "10.120.80.30") == IPv4Address("10.120.80.30")

    def test_other_subnet_rejected(self, host):
        """Test a gateway outside the /27 raises SubnetMismatchError."""
        with pytest.raises(SubnetMismatchError):
            validate_gateway_same_subnet(host, IPv4Address("10.120.80.33"))

    @pytest.mark.parametrize("gw", ["10.120.80.0", "10.120.80.31", "10.120.80.10"])
    def test_degenerate_gateway_rejected(self, host, gw):
        """Test network, broadcast and host address raise DegenerateAddressError."""
        with pytest.raises(DegenerateAddressError):
            validate_gateway_same_subnet(host, IPv4Address(gw))

    def test_mismatch_checked_before_degenerate(self):
        """Test another subnet's network address reports a mismatch, not degeneracy."""
        host = parse_cidr("192.168.1.10/24")
        with pytest.raises(SubnetMismatchError):
            validate_gateway_same_subnet(host, IPv4Address("192.168.2.0"))

    def test_accepts_iff_same_network_and_not_degenerate(self):
        """Test the acceptance rule over every address of a /29 and its neighbours."""
        host = parse_cidr("10.0.0.10/29")
        for last in range(0, 24):
            gw = IPv4Address(f"10.0.0.{last}")
            expected = 8 <= last <= 15 and last not in (8, 15, 10)
            try:
                validate_gateway_same_subnet(host, gw)
                accepted = True
            except (SubnetMismatchError, DegenerateAddressError):
                accepted = False
            assert accepted is expected, gw

    def test_parse_gateway_malformed(self, host):
        """Test malformed gateway text raises FormatError."""
        with pytest.raises(FormatError, match="gateway"):
            parse_gateway(host, "10.120.80")


class TestParseDnsList:
    """Tests for parse_dns_list function."""

    def test_preserves_order(self):
        """Test the output order matches the input order."""
        assert parse_dns_list("8.8.8.8,1.1.1.1") == (IPv4Address("8.8.8.8"), IPv4Address("1.1.1.1"))

    def test_ignores_whitespace_and_empty_items(self):
        """Test blanks around entries and empty items are ignored."""
        assert parse_dns_list(" 1.1.1.1 , ,9.9.9.9,") == (IPv4Address("1.1.1.1"), IPv4Address("9.9.9.9"))

    def test_accepts_sequence(self):
        """Test a pre-split list is accepted."""
        assert parse_dns_list(["1.1.1.1"]) == (IPv4Address("1.1.1.1"),)

    def test_empty(self):
        """Test an empty string yields an empty tuple."""
        assert parse_dns_list("") == ()

    def test_invalid_entry_named(self):
        """Test the offending entry is named in the error."""
        with pytest.raises(FormatError, match="1.1.1.256"):
            parse_dns_list("8.8.8.8,1.1.1.256")
